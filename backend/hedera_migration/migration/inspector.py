"""
Source token inspection.
"""

from typing import Optional

import structlog

from ..clients.mirror_client import MirrorNodeClient
from ..exceptions import MirrorNodeError, TokenNotFoundError
from .models import TokenDescriptor

logger = structlog.get_logger(__name__)


class SourceInspector:
    """Reads token definitions from the source mirror node."""

    def __init__(self, mirror_client: MirrorNodeClient):
        self.mirror_client = mirror_client
        self.logger = logger.bind(component="SourceInspector")

    async def inspect(self, token_id: str) -> Optional[TokenDescriptor]:
        """
        Look up a token on the source network.

        Returns:
            The token descriptor, or None when the lookup failed
        """
        try:
            data = await self.mirror_client.get_token_info(token_id)
        except TokenNotFoundError as e:
            self.logger.error("Token not found on mirror node", token_id=token_id, error=str(e))
            return None
        except MirrorNodeError as e:
            self.logger.error("Token lookup failed", token_id=token_id, error=str(e))
            return None

        descriptor = TokenDescriptor.from_mirror(token_id, data)
        self.logger.info(
            "Token details fetched",
            token_id=token_id,
            name=descriptor.name,
            symbol=descriptor.symbol,
            type=descriptor.type,
            max_supply=descriptor.max_supply
        )
        return descriptor
