"""
Hedera Mirror Node Client

This module provides a read-only client for the Hedera mirror node REST API,
used to fetch token definitions and NFT inventories from the source network.
"""

import asyncio
import time
from typing import Optional, Dict, Any

import aiohttp
import structlog

from ..config import get_mirror_config, TOKEN_INFO_ROUTE, TOKEN_NFTS_ROUTE
from ..exceptions import MirrorNodeError, TokenNotFoundError

logger = structlog.get_logger(__name__)


class MirrorNodeClient:
    """
    Client for the Hedera mirror node REST API.

    Every request is a single attempt; retry policies belong to the caller.
    """

    def __init__(
        self,
        base_url: str = None,
        timeout: int = None,
        page_limit: int = None
    ):
        """
        Initialize mirror node client.

        Args:
            base_url: Mirror node root URL, without the ``/api/v1`` suffix
            timeout: Request timeout in seconds
            page_limit: Number of NFTs requested per inventory page
        """
        config = get_mirror_config()
        self.base_url = (base_url or config['base_url']).rstrip('/')
        self.timeout = timeout or config['timeout']
        self.page_limit = page_limit or config['page_limit']

        self.session: Optional[aiohttp.ClientSession] = None
        self.logger = logger.bind(component="MirrorNodeClient")

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'start_time': time.time()
        }

        self.logger.info(
            "MirrorNodeClient initialized",
            base_url=self.base_url,
            page_limit=self.page_limit
        )

    async def initialize(self):
        """Open the HTTP session."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={
                    'Accept': 'application/json',
                    'User-Agent': 'HederaNFTMigrator/1.0'
                }
            )

    async def close(self):
        """Close the HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None
            self.logger.info("MirrorNodeClient session closed", stats=self.get_stats())

    async def __aenter__(self) -> 'MirrorNodeClient':
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def token_nfts_route(self, token_id: str) -> str:
        """First page route of a token's NFT inventory."""
        return TOKEN_NFTS_ROUTE.format(token_id=token_id, limit=self.page_limit)

    async def _make_request(self, route: str) -> Dict[str, Any]:
        """GET ``route`` relative to the mirror node root and decode the JSON body."""
        if not self.session:
            raise MirrorNodeError("MirrorNodeClient not initialized. Call initialize() first.")

        url = f"{self.base_url}{route}"
        self.stats['total_requests'] += 1

        try:
            async with self.session.get(url) as response:
                if response.status == 200:
                    data = await response.json()
                    self.stats['successful_requests'] += 1
                    return data

                error_text = await response.text()
                self.stats['failed_requests'] += 1
                if response.status == 404:
                    raise TokenNotFoundError(f"Not found on mirror node: {route}")
                raise MirrorNodeError(f"HTTP {response.status}: {error_text}")

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.stats['failed_requests'] += 1
            raise MirrorNodeError(f"Request to {url} failed: {str(e) or type(e).__name__}") from e
        except ValueError as e:
            self.stats['failed_requests'] += 1
            raise MirrorNodeError(f"Invalid JSON from {url}: {e}") from e

    async def get_token_info(self, token_id: str) -> Dict[str, Any]:
        """Fetch a token definition."""
        return await self._make_request(TOKEN_INFO_ROUTE.format(token_id=token_id))

    async def get_nft_page(self, route: str) -> Dict[str, Any]:
        """
        Fetch one page of NFTs.

        Args:
            route: Either the first page route or a ``links.next`` value

        Returns:
            The response body, with ``nfts`` and ``links`` keys
        """
        return await self._make_request(route)

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics."""
        runtime = time.time() - self.stats['start_time']

        return {
            'total_requests': self.stats['total_requests'],
            'successful_requests': self.stats['successful_requests'],
            'failed_requests': self.stats['failed_requests'],
            'success_rate': (
                self.stats['successful_requests'] / max(self.stats['total_requests'], 1) * 100
            ),
            'runtime_seconds': runtime,
        }
