"""
Logging utilities for migration operations.

This module configures structlog for the migrator and provides helpers for
tracking ledger operations with timing information.
"""

import functools
import logging
import sys
import time
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Any, Optional, Callable

import structlog

logger = structlog.get_logger(__name__)


class OperationType(Enum):
    """Types of migration operations for logging."""
    TOKEN_CREATION = "token_creation"
    NFT_MINTING = "nft_minting"
    NFT_BURNING = "nft_burning"
    TOKEN_MIGRATION = "token_migration"


def configure_logging(level: str = "INFO", log_format: str = "console"):
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Minimum level name (DEBUG, INFO, ...)
        log_format: "console" for human readable output, "json" for one JSON object per line
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def log_ledger_operation(
    operation_type: OperationType,
    operation_name: str,
    include_performance: bool = True
):
    """
    Decorator for logging blocking ledger operations with performance metrics.

    Exceptions are logged and re-raised unchanged.

    Args:
        operation_type: Type of operation
        operation_name: Name of the operation
        include_performance: Whether to include execution time
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            log_data = {
                "operation_id": f"{operation_name}_{int(start_time)}",
                "operation_type": operation_type.value,
                "operation_name": operation_name,
            }
            logger.info("Ledger operation started", status="started", **log_data)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                error_data = dict(
                    log_data,
                    status="failed",
                    success=False,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                if include_performance:
                    error_data.update(_performance_data(start_time))
                logger.error("Ledger operation failed", **error_data)
                raise

            success_data = dict(log_data, status="completed", success=True)
            if include_performance:
                success_data.update(_performance_data(start_time))
            logger.info("Ledger operation completed", **success_data)
            return result

        return wrapper

    return decorator


@contextmanager
def log_operation_context(
    operation_type: OperationType,
    operation_name: str,
    context_data: Optional[Dict[str, Any]] = None
):
    """
    Context manager for logging a multi-step operation.

    Yields the generated operation id.
    """
    start_time = time.time()
    operation_id = f"{operation_name}_{int(start_time)}"

    log_data = {
        "operation_id": operation_id,
        "operation_type": operation_type.value,
        "operation_name": operation_name,
    }
    if context_data:
        log_data.update(context_data)

    logger.info("Operation started", status="started", **log_data)

    try:
        yield operation_id
    except Exception as e:
        logger.error(
            "Operation failed",
            status="failed",
            success=False,
            error_type=type(e).__name__,
            error_message=str(e),
            **_performance_data(start_time),
            **log_data
        )
        raise

    logger.info(
        "Operation completed",
        status="completed",
        success=True,
        **_performance_data(start_time),
        **log_data
    )


def _performance_data(start_time: float) -> Dict[str, Any]:
    execution_time = time.time() - start_time
    return {
        "execution_time_seconds": execution_time,
        "performance_category": _categorize_performance(execution_time),
    }


def _categorize_performance(execution_time: float) -> str:
    """Categorize performance based on execution time."""
    if execution_time < 0.5:
        return "excellent"
    elif execution_time < 2.0:
        return "good"
    elif execution_time < 5.0:
        return "acceptable"
    elif execution_time < 15.0:
        return "slow"
    else:
        return "very_slow"
