"""
Hedera NFT Migration Package

Source inspection, inventory retrieval and target replication for migrating
NFT tokens between Hedera networks.
"""

from .models import (
    FeeSchedule, TokenDescriptor, NftRecord, NftInventory,
    RoyaltyFeeSpec, TokenCreateRequest, MigrationStatus, TokenMigrationResult
)
from .inspector import SourceInspector
from .inventory import InventoryFetcher
from .replicator import TargetReplicator, iter_batches, build_create_request
from .key_store import save_supply_key
from .migration_service import MigrationService, summary_lines

__all__ = [
    'FeeSchedule',
    'TokenDescriptor',
    'NftRecord',
    'NftInventory',
    'RoyaltyFeeSpec',
    'TokenCreateRequest',
    'MigrationStatus',
    'TokenMigrationResult',
    'SourceInspector',
    'InventoryFetcher',
    'TargetReplicator',
    'iter_batches',
    'build_create_request',
    'save_supply_key',
    'MigrationService',
    'summary_lines',
]
