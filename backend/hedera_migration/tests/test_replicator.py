"""
Unit tests for target network replication.
"""

import math

from django.test import SimpleTestCase

from ..exceptions import LedgerReceiptError
from ..migration.models import TokenDescriptor, FeeSchedule, NftRecord, NftInventory
from ..migration.replicator import (
    TargetReplicator, iter_batches, select_burn_serials, build_create_request
)
from .helpers import FakeLedgerClient

FEE_RULES = {
    'royalty_numerator': 1,
    'royalty_denominator': 100,
    'fallback_fee_hbar': 1,
}


def make_inventory(count, deleted_positions=()):
    """Inventory in mint order with source serials 101, 102, ..."""
    inventory = NftInventory("0.0.111")
    for index in range(count):
        inventory.append(NftRecord(
            serial_number=101 + index,
            metadata=f"ipfs://nft/{index}".encode(),
            deleted=index in deleted_positions,
        ))
    return inventory


class TestBatching(SimpleTestCase):
    """Test cases for batch partitioning."""

    def test_partition_covers_every_index_in_order(self):
        for size in (0, 1, 9, 10, 11, 25, 100, 101):
            with self.subTest(size=size):
                batches = list(iter_batches(size, 10))
                covered = [index for start, end in batches for index in range(start, end)]

                self.assertEqual(len(batches), math.ceil(size / 10))
                self.assertEqual(covered, list(range(size)))
                self.assertTrue(all(0 < end - start <= 10 for start, end in batches))

    def test_rejects_non_positive_batch_size(self):
        with self.assertRaises(ValueError):
            list(iter_batches(5, 0))

    def test_burn_serials_use_new_serials(self):
        self.assertEqual(select_burn_serials([41, 42, 43], [True, False, True]), [41, 43])
        self.assertEqual(select_burn_serials([41, 42], [False, False]), [])


class TestBuildCreateRequest(SimpleTestCase):
    """Test cases for token creation requests."""

    def descriptor(self, max_supply="0", fees=None):
        return TokenDescriptor(
            token_id="0.0.111",
            symbol="FOO",
            name="Foo",
            memo="memo",
            max_supply=max_supply,
            type="NON_FUNGIBLE_UNIQUE",
            custom_fees=FeeSchedule.from_mirror(fees),
        )

    def test_zero_max_supply_is_infinite(self):
        request = build_create_request(self.descriptor(max_supply="0"), FEE_RULES)

        self.assertFalse(request.is_finite)
        self.assertIsNone(request.max_supply)
        self.assertIsNone(request.royalty_fee)
        self.assertEqual((request.name, request.symbol, request.memo), ("Foo", "FOO", "memo"))

    def test_positive_max_supply_is_finite(self):
        request = build_create_request(self.descriptor(max_supply="5000"), FEE_RULES)

        self.assertTrue(request.is_finite)
        self.assertEqual(request.max_supply, 5000)

    def test_royalty_fees_collapse_to_one_fee(self):
        fees = {"royalty_fees": [{"amount": {"numerator": 5, "denominator": 100}}] * 3, "fixed_fees": []}

        fee = build_create_request(self.descriptor(fees=fees), FEE_RULES).royalty_fee

        self.assertEqual((fee.numerator, fee.denominator), (1, 100))
        self.assertIsNone(fee.fallback_fee_hbar)

    def test_fixed_fees_become_fallback_fee(self):
        fees = {"royalty_fees": [{"amount": {"numerator": 5, "denominator": 100}}], "fixed_fees": [{"amount": 1}]}

        fee = build_create_request(self.descriptor(fees=fees), FEE_RULES).royalty_fee

        self.assertEqual((fee.numerator, fee.denominator), (1, 100))
        self.assertEqual(fee.fallback_fee_hbar, 1)

    def test_fixed_fees_only(self):
        fee = build_create_request(self.descriptor(fees={"fixed_fees": [{"amount": 1}]}), FEE_RULES).royalty_fee

        self.assertEqual(fee.numerator, 0)
        self.assertEqual(fee.fallback_fee_hbar, 1)

    def test_empty_fee_schedule_adds_no_fee(self):
        fees = {"royalty_fees": [], "fixed_fees": []}

        self.assertIsNone(build_create_request(self.descriptor(fees=fees), FEE_RULES).royalty_fee)


class TestTargetReplicator(SimpleTestCase):
    """Test cases for TargetReplicator against a fake ledger."""

    def setUp(self):
        self.ledger = FakeLedgerClient(token_id="0.0.5005")
        self.replicator = TargetReplicator(self.ledger, "supply-key", batch_size=10, fee_rules=FEE_RULES)

    async def test_replicate_returns_new_token(self):
        descriptor = TokenDescriptor(token_id="0.0.111", symbol="FOO", name="Foo", max_supply="0",
                                     type="NON_FUNGIBLE_UNIQUE")

        token_id = await self.replicator.replicate(descriptor)

        self.assertEqual(token_id, "0.0.5005")
        request, supply_key = self.ledger.create_requests[0]
        self.assertEqual(request.name, "Foo")
        self.assertEqual(supply_key, "supply-key")

    async def test_twenty_five_nfts_mint_in_three_batches(self):
        minted, burned = await self.replicator.mint_all("0.0.5005", make_inventory(25))

        self.assertEqual([len(call[1]) for call in self.ledger.mint_calls], [10, 10, 5])
        self.assertEqual(self.ledger.burn_calls, [])
        self.assertEqual((minted, burned), (25, 0))

    async def test_metadata_replayed_in_order(self):
        await self.replicator.mint_all("0.0.5005", make_inventory(12))

        replayed = [payload for call in self.ledger.mint_calls for payload in call[1]]
        self.assertEqual(replayed, [f"ipfs://nft/{index}".encode() for index in range(12)])

    async def test_deleted_nfts_burned_with_new_serials(self):
        minted, burned = await self.replicator.mint_all("0.0.5005", make_inventory(12, deleted_positions={0, 11}))

        self.assertEqual(self.ledger.burn_calls, [
            ("0.0.5005", [1], "supply-key"),
            ("0.0.5005", [12], "supply-key"),
        ])
        self.assertEqual((minted, burned), (12, 2))

    async def test_empty_inventory_mints_nothing(self):
        minted, burned = await self.replicator.mint_all("0.0.5005", make_inventory(0))

        self.assertEqual(self.ledger.mint_calls, [])
        self.assertEqual((minted, burned), (0, 0))

    async def test_mint_failure_propagates(self):
        self.ledger.fail_on = "mint"

        with self.assertRaises(LedgerReceiptError):
            await self.replicator.mint_all("0.0.5005", make_inventory(3))
