"""
Target network replication of a source token.

Creates the token on the target network and re-mints its NFTs in batches,
burning the ones that were deleted on the source network.
"""

from typing import Dict, Any, Iterator, List, Optional, Tuple

import structlog
from asgiref.sync import sync_to_async

from ..config import get_migration_config
from .models import TokenDescriptor, TokenCreateRequest, RoyaltyFeeSpec, NftInventory

logger = structlog.get_logger(__name__)


def iter_batches(size: int, batch_size: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(start, end)`` index pairs covering ``range(size)`` in order."""
    if batch_size < 1:
        raise ValueError("batch_size must be positive")
    for start in range(0, size, batch_size):
        yield start, min(start + batch_size, size)


def select_burn_serials(minted_serials: List[int], deleted_flags: List[bool]) -> List[int]:
    """
    Map the deletion flags of a batch onto the serials minted for it.

    Serials are assigned in submission order, so position ``i`` of the mint
    receipt belongs to position ``i`` of the batch.
    """
    return [serial for serial, deleted in zip(minted_serials, deleted_flags) if deleted]


def build_royalty_fee(descriptor: TokenDescriptor, fee_rules: Dict[str, Any]) -> Optional[RoyaltyFeeSpec]:
    """
    Collapse the source fee schedule into at most one royalty fee.

    Only the presence of royalty and fixed fees is carried over, not their
    amounts; fixed fees become the fallback fee of the royalty fee.
    """
    fees = descriptor.custom_fees
    if fees is None or not (fees.has_royalty_fees or fees.has_fixed_fees):
        return None

    return RoyaltyFeeSpec(
        numerator=fee_rules['royalty_numerator'] if fees.has_royalty_fees else 0,
        denominator=fee_rules['royalty_denominator'] if fees.has_royalty_fees else 1,
        fallback_fee_hbar=fee_rules['fallback_fee_hbar'] if fees.has_fixed_fees else None,
    )


def build_create_request(descriptor: TokenDescriptor, fee_rules: Dict[str, Any]) -> TokenCreateRequest:
    """Build the target token creation request for a source token."""
    return TokenCreateRequest(
        name=descriptor.name,
        symbol=descriptor.symbol,
        memo=descriptor.memo,
        max_supply=descriptor.finite_max_supply,
        royalty_fee=build_royalty_fee(descriptor, fee_rules),
    )


class TargetReplicator:
    """
    Recreates tokens and their NFTs on the target network.

    Ledger receipt failures propagate as ``LedgerReceiptError``; nothing
    already written to the target network is undone.
    """

    def __init__(
        self,
        ledger_client,
        supply_key,
        batch_size: int = None,
        fee_rules: Dict[str, Any] = None
    ):
        config = get_migration_config()
        self.ledger_client = ledger_client
        self.supply_key = supply_key
        self.batch_size = batch_size or config['batch_size']
        self.fee_rules = fee_rules or config['fee_rules']
        self.logger = logger.bind(component="TargetReplicator")

    async def replicate(self, descriptor: TokenDescriptor) -> str:
        """
        Create the target token for ``descriptor``.

        Returns:
            The new token ID
        """
        request = build_create_request(descriptor, self.fee_rules)
        self.logger.info(
            "Creating target token",
            source_token_id=descriptor.token_id,
            name=request.name,
            symbol=request.symbol,
            max_supply=request.max_supply,
            royalty_fee=request.royalty_fee is not None
        )

        token_id = await sync_to_async(self.ledger_client.create_token)(request, self.supply_key)

        self.logger.info("Target token created", source_token_id=descriptor.token_id, token_id=token_id)
        return token_id

    async def mint_all(self, token_id: str, inventory: NftInventory) -> Tuple[int, int]:
        """
        Mint every NFT of ``inventory`` on ``token_id`` in batches.

        Returns:
            ``(minted, burned)`` counts
        """
        minted = 0
        burned = 0

        for start, end in iter_batches(len(inventory), self.batch_size):
            _, metadata, deleted = inventory.slice(start, end)

            serials = await sync_to_async(self.ledger_client.mint_nfts)(token_id, metadata, self.supply_key)
            minted += len(serials)
            self.logger.info("Minted NFTs", token_id=token_id, count=len(serials), batch_start=start)

            to_burn = select_burn_serials(serials, deleted)
            if to_burn:
                status = await sync_to_async(self.ledger_client.burn_nfts)(token_id, to_burn, self.supply_key)
                burned += len(to_burn)
                self.logger.info("Burnt NFTs", token_id=token_id, serials=to_burn, status=status)

        return minted, burned
