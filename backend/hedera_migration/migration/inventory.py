"""
NFT inventory retrieval from the source mirror node.
"""

import base64
import binascii
from typing import Dict, Any, List

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from ..clients.mirror_client import MirrorNodeClient
from ..config import get_mirror_config
from ..exceptions import MirrorNodeError, InventoryFetchError
from .models import NftRecord, NftInventory

logger = structlog.get_logger(__name__)


def decode_metadata(value) -> bytes:
    """Decode the base64 metadata field of a mirror node NFT record."""
    if not value:
        return b""
    try:
        return base64.b64decode(value)
    except (binascii.Error, ValueError):
        logger.warning("NFT metadata is not valid base64, keeping raw value", metadata=value)
        return value.encode('utf-8')


def parse_nft(data: Dict[str, Any]) -> NftRecord:
    """Create an NftRecord from one entry of a ``/nfts`` page."""
    return NftRecord(
        serial_number=int(data['serial_number']),
        metadata=decode_metadata(data.get('metadata')),
        deleted=bool(data.get('deleted', False)),
    )


class InventoryFetcher:
    """
    Collects every NFT of a token by following mirror node pagination.

    A page that keeps failing is retried a bounded number of times, after
    which ``InventoryFetchError`` is raised.
    """

    def __init__(
        self,
        mirror_client: MirrorNodeClient,
        page_retries: int = None,
        retry_delay: float = None
    ):
        config = get_mirror_config()
        self.mirror_client = mirror_client
        self.page_retries = page_retries if page_retries is not None else config['page_retries']
        self.retry_delay = retry_delay if retry_delay is not None else config['retry_delay']
        self.logger = logger.bind(component="InventoryFetcher")

    def _log_retry(self, retry_state: RetryCallState):
        self.logger.warning(
            "NFT page fetch failed, retrying",
            attempt=retry_state.attempt_number,
            max_attempts=self.page_retries,
            wait_time=self.retry_delay,
            error=str(retry_state.outcome.exception())
        )

    async def _fetch_page(self, route: str) -> Dict[str, Any]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(self.page_retries, 1)),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_exception_type(MirrorNodeError),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self.mirror_client.get_nft_page(route)
        except MirrorNodeError as e:
            raise InventoryFetchError(
                f"Failed to fetch NFT page {route} after {self.page_retries} attempts: {str(e)}"
            ) from e

    async def fetch_pages(self, token_id: str) -> List[NftRecord]:
        """
        Fetch all NFT records in the order the mirror node returns them (newest first).
        """
        records: List[NftRecord] = []
        route = self.mirror_client.token_nfts_route(token_id)
        pages = 0

        while route is not None:
            page = await self._fetch_page(route)
            pages += 1
            records.extend(parse_nft(nft) for nft in page.get('nfts', []))
            route = (page.get('links') or {}).get('next')

        self.logger.info("NFT pages fetched", token_id=token_id, pages=pages, nfts=len(records))
        return records

    async def fetch_inventory(self, token_id: str) -> NftInventory:
        """
        Fetch the full inventory of a token, oldest NFT first.

        Raises:
            InventoryFetchError: if a page could not be fetched
        """
        inventory = NftInventory(token_id)
        inventory.extend(await self.fetch_pages(token_id))
        inventory.reverse()

        self.logger.info(
            "Found NFTs to migrate",
            token_id=token_id,
            count=len(inventory),
            deleted=inventory.deleted_count
        )
        return inventory
