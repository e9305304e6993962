"""
Data structures for the token migration pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple

from ..config import NFT_TOKEN_TYPE


@dataclass
class FeeSchedule:
    """Custom fees attached to a source token, as reported by the mirror node."""
    royalty_fees: List[Dict[str, Any]] = field(default_factory=list)
    fixed_fees: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_mirror(cls, data: Optional[Dict[str, Any]]) -> Optional['FeeSchedule']:
        if not data:
            return None
        return cls(
            royalty_fees=data.get('royalty_fees') or [],
            fixed_fees=data.get('fixed_fees') or [],
        )

    @property
    def has_royalty_fees(self) -> bool:
        return len(self.royalty_fees) > 0

    @property
    def has_fixed_fees(self) -> bool:
        return len(self.fixed_fees) > 0


@dataclass
class TokenDescriptor:
    """Token definition read from the source mirror node."""
    token_id: str
    symbol: str
    name: str
    memo: str = ""
    max_supply: Optional[str] = None
    type: str = ""
    custom_fees: Optional[FeeSchedule] = None

    @classmethod
    def from_mirror(cls, token_id: str, data: Dict[str, Any]) -> 'TokenDescriptor':
        """Create a descriptor from a ``/api/v1/tokens/{id}`` response body."""
        return cls(
            token_id=token_id,
            symbol=data.get('symbol', ''),
            name=data.get('name', ''),
            memo=data.get('memo') or '',
            max_supply=data.get('max_supply'),
            type=data.get('type', ''),
            custom_fees=FeeSchedule.from_mirror(data.get('custom_fees')),
        )

    @property
    def is_nft(self) -> bool:
        return self.type == NFT_TOKEN_TYPE

    @property
    def finite_max_supply(self) -> Optional[int]:
        """The max supply as an int when it is a positive number, else None."""
        try:
            value = int(self.max_supply)
        except (TypeError, ValueError):
            return None
        return value if value > 0 else None


@dataclass
class NftRecord:
    """A single NFT of a source token."""
    serial_number: int
    metadata: bytes
    deleted: bool = False


class NftInventory:
    """
    The NFTs of one token held as three parallel sequences.

    Records are appended in the order the mirror node returns them (newest
    first). ``reverse()`` flips all three sequences together so that index 0
    is the first minted NFT.
    """

    def __init__(self, token_id: str):
        self.token_id = token_id
        self.serials: List[int] = []
        self.metadata: List[bytes] = []
        self.deleted: List[bool] = []

    def __len__(self) -> int:
        return len(self.serials)

    def append(self, record: NftRecord):
        self.serials.append(record.serial_number)
        self.metadata.append(record.metadata)
        self.deleted.append(record.deleted)

    def extend(self, records: List[NftRecord]):
        for record in records:
            self.append(record)

    def reverse(self):
        self.serials.reverse()
        self.metadata.reverse()
        self.deleted.reverse()

    def slice(self, start: int, end: int) -> Tuple[List[int], List[bytes], List[bool]]:
        return self.serials[start:end], self.metadata[start:end], self.deleted[start:end]

    @property
    def deleted_count(self) -> int:
        return sum(1 for flag in self.deleted if flag)


@dataclass
class RoyaltyFeeSpec:
    """The single royalty fee created on the target network."""
    numerator: int
    denominator: int
    fallback_fee_hbar: Optional[int] = None


@dataclass
class TokenCreateRequest:
    """Ledger independent description of a token creation."""
    name: str
    symbol: str
    memo: str
    max_supply: Optional[int] = None
    royalty_fee: Optional[RoyaltyFeeSpec] = None

    @property
    def is_finite(self) -> bool:
        return self.max_supply is not None


class MigrationStatus(Enum):
    """Outcome of a single token migration."""
    MIGRATED = "migrated"
    NOT_FOUND = "not_found"
    UNSUPPORTED_TYPE = "unsupported_type"
    INVENTORY_FAILED = "inventory_failed"
    ABORTED = "aborted"


@dataclass
class TokenMigrationResult:
    """Result of migrating one source token."""
    source_token_id: str
    status: MigrationStatus
    target_token_id: Optional[str] = None
    minted_count: int = 0
    burned_count: int = 0
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == MigrationStatus.MIGRATED

    @property
    def is_fatal(self) -> bool:
        return self.status == MigrationStatus.ABORTED
