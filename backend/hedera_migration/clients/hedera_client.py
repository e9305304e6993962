"""
Hedera ledger client for the target network.

Wraps the Hedera SDK token service transactions (create, mint, burn) used by
the migration. Every transaction is executed and its receipt awaited before
returning; a missing receipt is reported as ``LedgerReceiptError``.
"""

from typing import List, Optional, Dict, Any

import structlog
from hedera import (
    AccountId,
    Client,
    CustomFixedFee,
    CustomRoyaltyFee,
    Hbar,
    PrivateKey,
    TokenBurnTransaction,
    TokenCreateTransaction,
    TokenId,
    TokenMintTransaction,
    TokenSupplyType,
    TokenType,
)
from jnius import autoclass

from ..exceptions import LedgerReceiptError
from ..logging_utils import log_ledger_operation, OperationType
from ..migration.models import TokenCreateRequest

logger = structlog.get_logger(__name__)

ArrayList = autoclass('java.util.ArrayList')


def _to_int(value) -> int:
    """Convert a serial number returned by the SDK into a Python int."""
    if isinstance(value, int):
        return value
    return int(value.toString())


class HederaLedgerClient:
    """
    Client for token service transactions on the target Hedera network.

    The operator account pays for every transaction and is used as treasury,
    auto-renew account and fee collector of created tokens.
    """

    def __init__(
        self,
        network: str,
        account_id: str,
        private_key: str,
        max_transaction_fee: int = 80
    ):
        self.network = network
        self.operator_id = AccountId.fromString(account_id)
        self.operator_key = PrivateKey.fromStringED25519(private_key)
        self.max_transaction_fee = max_transaction_fee
        self.client: Optional[Client] = None
        self.logger = logger.bind(component="HederaLedgerClient", network=network)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'HederaLedgerClient':
        return cls(
            network=config['network'],
            account_id=config['account_id'],
            private_key=config['private_key'],
            max_transaction_fee=config['max_transaction_fee'],
        )

    def connect(self):
        """Create the SDK client and set the operator."""
        if self.client is None:
            self.client = Client.forName(self.network)
            self.client.setOperator(self.operator_id, self.operator_key)
            self.logger.info("Connected to Hedera network", operator=self.operator_id.toString())

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None

    @staticmethod
    def generate_supply_key() -> PrivateKey:
        return PrivateKey.generateED25519()

    @staticmethod
    def load_supply_key(value: str) -> PrivateKey:
        return PrivateKey.fromStringED25519(value)

    @staticmethod
    def key_to_string(key: PrivateKey) -> str:
        return key.toString()

    def _build_royalty_fee(self, request: TokenCreateRequest) -> CustomRoyaltyFee:
        spec = request.royalty_fee
        fee = (
            CustomRoyaltyFee()
            .setNumerator(spec.numerator)
            .setDenominator(spec.denominator)
            .setFeeCollectorAccountId(self.operator_id)
        )
        if spec.fallback_fee_hbar is not None:
            fee.setFallbackFee(CustomFixedFee().setHbarAmount(Hbar(spec.fallback_fee_hbar)))
        return fee

    def _execute(self, transaction, operation: str):
        """Execute a frozen or unfrozen transaction and return its receipt."""
        try:
            response = transaction.execute(self.client)
            return response.getReceipt(self.client)
        except Exception as e:
            raise LedgerReceiptError(operation, str(e)) from e

    @log_ledger_operation(OperationType.TOKEN_CREATION, "create_token")
    def create_token(self, request: TokenCreateRequest, supply_key: PrivateKey) -> str:
        """
        Create an NFT token with zero initial supply.

        Returns:
            The new token ID as a string
        """
        transaction = (
            TokenCreateTransaction()
            .setTokenType(TokenType.NON_FUNGIBLE_UNIQUE)
            .setTokenName(request.name)
            .setTokenSymbol(request.symbol)
            .setTokenMemo(request.memo)
            .setInitialSupply(0)
            .setTreasuryAccountId(self.operator_id)
            .setAutoRenewAccountId(self.operator_id)
            .setSupplyKey(supply_key)
            .setMaxTransactionFee(Hbar(self.max_transaction_fee))
        )

        if request.is_finite:
            transaction.setMaxSupply(request.max_supply).setSupplyType(TokenSupplyType.FINITE)
        else:
            transaction.setSupplyType(TokenSupplyType.INFINITE)

        if request.royalty_fee is not None:
            fees = ArrayList()
            fees.add(self._build_royalty_fee(request))
            transaction.setCustomFees(fees)

        receipt = self._execute(transaction, "Create")
        return receipt.tokenId.toString()

    @log_ledger_operation(OperationType.NFT_MINTING, "mint_nfts")
    def mint_nfts(self, token_id: str, metadata: List[bytes], supply_key: PrivateKey) -> List[int]:
        """
        Mint one NFT per metadata entry in a single transaction.

        Returns:
            The newly assigned serial numbers, in metadata order
        """
        transaction = TokenMintTransaction().setTokenId(TokenId.fromString(token_id))
        for payload in metadata:
            transaction.addMetadata(payload)
        transaction.setMaxTransactionFee(Hbar(self.max_transaction_fee))

        signed = transaction.freezeWith(self.client).sign(supply_key)
        receipt = self._execute(signed, "Mint")
        return [_to_int(serial) for serial in receipt.serials]

    @log_ledger_operation(OperationType.NFT_BURNING, "burn_nfts")
    def burn_nfts(self, token_id: str, serials: List[int], supply_key: PrivateKey) -> str:
        """
        Burn the given serials.

        Returns:
            The receipt status
        """
        transaction = TokenBurnTransaction().setTokenId(TokenId.fromString(token_id))
        for serial in serials:
            transaction.addSerial(serial)
        transaction.setMaxTransactionFee(Hbar(self.max_transaction_fee))

        signed = transaction.freezeWith(self.client).sign(supply_key)
        receipt = self._execute(signed, "Burn")
        return receipt.status.toString()
