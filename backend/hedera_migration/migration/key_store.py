"""
Persistence of generated supply keys.
"""

import sys
from datetime import datetime, timezone as dt_timezone
from pathlib import Path
from typing import List, Optional, TextIO

import structlog
from django.utils import timezone

from ..config import get_migration_config, network_label

logger = structlog.get_logger(__name__)


def key_file_name(moment: datetime) -> str:
    """``migration-keys-2024-01-31T09-15-00.txt`` for the given UTC moment."""
    timestamp = moment.astimezone(dt_timezone.utc).strftime('%Y-%m-%dT%H-%M-%S')
    return f"migration-keys-{timestamp}.txt"


def format_key_file(token_ids: List[str], supply_key: str, source_network: str) -> str:
    return (
        f"{network_label(source_network)} Tokens: {', '.join(token_ids)}\n"
        f"Supply Key: {supply_key}\n"
    )


def save_supply_key(
    token_ids: List[str],
    supply_key: str,
    directory: Optional[str] = None,
    moment: Optional[datetime] = None,
    stdout: Optional[TextIO] = None
) -> Optional[Path]:
    """
    Write a generated supply key and the tokens it will control to a file.

    The file is read back after writing; if that fails the content is
    printed so the key is not lost.

    Returns:
        Path of the key file, or None when it could not be written and read back
    """
    config = get_migration_config()
    stdout = stdout or sys.stdout
    path = Path(directory or config['keys_dir']) / key_file_name(moment or timezone.now())
    content = format_key_file(token_ids, supply_key, config['source_network'])

    try:
        path.write_text(content, encoding='utf-8')
        path.read_text(encoding='utf-8')
    except OSError as e:
        logger.error("Reading key file failed -- printing to console", path=str(path), error=str(e))
        stdout.write(content)
        return None

    logger.info("Token details file created", path=str(path), tokens=len(token_ids))
    return path
