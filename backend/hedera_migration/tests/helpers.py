"""
Shared test doubles for the migration tests.
"""

from unittest.mock import AsyncMock, Mock

from ..exceptions import LedgerReceiptError


class FakeLedgerClient:
    """In-memory stand-in for HederaLedgerClient that records every call."""

    def __init__(self, token_id="0.0.5005", fail_on=None):
        self.token_id = token_id
        self.fail_on = fail_on
        self.next_serial = 1
        self.create_requests = []
        self.mint_calls = []
        self.burn_calls = []
        self.connected = False

    def connect(self):
        self.connected = True

    def close(self):
        self.connected = False

    def load_supply_key(self, value):
        return f"key:{value}"

    def generate_supply_key(self):
        return "key:generated"

    def key_to_string(self, key):
        return key

    def create_token(self, request, supply_key):
        if self.fail_on == "create":
            raise LedgerReceiptError("Create", "INSUFFICIENT_PAYER_BALANCE")
        self.create_requests.append((request, supply_key))
        return self.token_id

    def mint_nfts(self, token_id, metadata, supply_key):
        if self.fail_on == "mint":
            raise LedgerReceiptError("Mint", "INVALID_SIGNATURE")
        self.mint_calls.append((token_id, list(metadata), supply_key))
        serials = list(range(self.next_serial, self.next_serial + len(metadata)))
        self.next_serial += len(metadata)
        return serials

    def burn_nfts(self, token_id, serials, supply_key):
        if self.fail_on == "burn":
            raise LedgerReceiptError("Burn", "INVALID_SIGNATURE")
        self.burn_calls.append((token_id, list(serials), supply_key))
        return "SUCCESS"


def nft_json(serial, metadata="aXBmczovL3Rlc3Q=", deleted=False):
    """A mirror node NFT entry; the default metadata decodes to ``ipfs://test``."""
    return {
        "account_id": "0.0.1234",
        "deleted": deleted,
        "metadata": metadata,
        "serial_number": serial,
        "token_id": "0.0.111",
    }


def token_json(name="Foo", symbol="FOO", token_type="NON_FUNGIBLE_UNIQUE", max_supply="0", custom_fees=None):
    return {
        "token_id": "0.0.111",
        "name": name,
        "symbol": symbol,
        "memo": "",
        "type": token_type,
        "max_supply": max_supply,
        "custom_fees": custom_fees,
    }


def make_mirror_client(tokens=None, pages=None):
    """
    Build a mirror client double.

    Args:
        tokens: mapping of token id to token JSON, or to an exception instance
        pages: mapping of route to page JSON, or to an exception instance
    """
    tokens = tokens or {}
    pages = pages or {}

    async def get_token_info(token_id):
        value = tokens[token_id]
        if isinstance(value, Exception):
            raise value
        return value

    async def get_nft_page(route):
        value = pages[route]
        if isinstance(value, Exception):
            raise value
        return value

    client = Mock()
    client.token_nfts_route = Mock(side_effect=lambda token_id: f"/api/v1/tokens/{token_id}/nfts?limit=100")
    client.get_token_info = AsyncMock(side_effect=get_token_info)
    client.get_nft_page = AsyncMock(side_effect=get_nft_page)
    return client
