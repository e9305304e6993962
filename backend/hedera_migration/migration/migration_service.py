"""
Migration Service for Hedera NFT Migration

This module orchestrates the migration of NFT tokens from the source network
to the target network: inspect, fetch inventory, create, mint and burn.
Each token produces a TokenMigrationResult; the caller decides what to do
with a fatal result.
"""

from typing import Dict, Any, List

import structlog

from ..clients.mirror_client import MirrorNodeClient
from ..config import get_migration_config, network_label
from ..exceptions import InventoryFetchError, LedgerReceiptError
from ..logging_utils import log_operation_context, OperationType
from .inspector import SourceInspector
from .inventory import InventoryFetcher
from .models import MigrationStatus, TokenMigrationResult
from .replicator import TargetReplicator

logger = structlog.get_logger(__name__)


class MigrationService:
    """
    Sequential token migration pipeline.

    Per token: SourceInspector -> InventoryFetcher -> TargetReplicator.
    Lookup and inventory failures skip the token; a ledger receipt failure
    aborts the run.
    """

    def __init__(
        self,
        mirror_client: MirrorNodeClient,
        ledger_client,
        supply_key,
        config: Dict[str, Any] = None,
        inspector: SourceInspector = None,
        fetcher: InventoryFetcher = None,
        replicator: TargetReplicator = None
    ):
        self.config = config or get_migration_config()
        self.inspector = inspector or SourceInspector(mirror_client)
        self.fetcher = fetcher or InventoryFetcher(mirror_client)
        self.replicator = replicator or TargetReplicator(
            ledger_client,
            supply_key,
            batch_size=self.config['batch_size'],
            fee_rules=self.config['fee_rules'],
        )
        self.logger = logger.bind(component="MigrationService")

        self.service_stats = {
            'tokens_requested': 0,
            'tokens_migrated': 0,
            'tokens_skipped': 0,
            'nfts_minted': 0,
            'nfts_burned': 0,
        }

    def result_line(self, source_token_id: str, target_token_id: str) -> str:
        return (
            f"{network_label(self.config['source_network'])} Token {source_token_id} "
            f"migrated to {network_label(self.config['target_network'])} {target_token_id}"
        )

    async def migrate_token(self, token_id: str) -> TokenMigrationResult:
        """Migrate a single token and report the outcome."""
        descriptor = await self.inspector.inspect(token_id)
        if descriptor is None:
            return TokenMigrationResult(
                source_token_id=token_id,
                status=MigrationStatus.NOT_FOUND,
                message=f"Token {token_id} not found on mirror node",
            )

        if not descriptor.is_nft:
            self.logger.error(
                "Token is not an NFT, only NFTs are supported for migration",
                token_id=token_id,
                type=descriptor.type
            )
            return TokenMigrationResult(
                source_token_id=token_id,
                status=MigrationStatus.UNSUPPORTED_TYPE,
                message=f"Token {token_id} is not an NFT ({descriptor.type})",
            )

        self.logger.info(
            "Migrating token",
            token_id=token_id,
            name=descriptor.name,
            symbol=descriptor.symbol,
            max_supply=descriptor.max_supply
        )

        try:
            inventory = await self.fetcher.fetch_inventory(token_id)
        except InventoryFetchError as e:
            self.logger.error("Inventory fetch failed, skipping token", token_id=token_id, error=str(e))
            return TokenMigrationResult(
                source_token_id=token_id,
                status=MigrationStatus.INVENTORY_FAILED,
                message=str(e),
            )

        target_token_id = None
        try:
            with log_operation_context(
                OperationType.TOKEN_MIGRATION,
                "replicate_token",
                context_data={'token_id': token_id, 'nfts': len(inventory)}
            ):
                target_token_id = await self.replicator.replicate(descriptor)
                minted, burned = await self.replicator.mint_all(target_token_id, inventory)
        except LedgerReceiptError as e:
            return TokenMigrationResult(
                source_token_id=token_id,
                status=MigrationStatus.ABORTED,
                target_token_id=target_token_id,
                message=str(e),
            )

        self.service_stats['nfts_minted'] += minted
        self.service_stats['nfts_burned'] += burned

        return TokenMigrationResult(
            source_token_id=token_id,
            status=MigrationStatus.MIGRATED,
            target_token_id=target_token_id,
            minted_count=minted,
            burned_count=burned,
            message=self.result_line(token_id, target_token_id),
        )

    async def run(self, token_ids: List[str]) -> List[TokenMigrationResult]:
        """
        Migrate tokens one after another.

        Stops at the first aborted token; its result is the last one returned.
        """
        results = []

        for token_id in token_ids:
            self.service_stats['tokens_requested'] += 1
            result = await self.migrate_token(token_id)
            results.append(result)

            if result.succeeded:
                self.service_stats['tokens_migrated'] += 1
            elif result.is_fatal:
                self.logger.error(
                    "Migration aborted",
                    token_id=token_id,
                    target_token_id=result.target_token_id,
                    error=result.message
                )
                break
            else:
                self.service_stats['tokens_skipped'] += 1

        self.logger.info("Migration complete", stats=self.service_stats)
        return results


def summary_lines(results: List[TokenMigrationResult]) -> List[str]:
    """Result lines of the successfully migrated tokens."""
    return [result.message for result in results if result.succeeded]
