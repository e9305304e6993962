"""
Exception hierarchy for the migration pipeline.

Per-token failures (lookup, unsupported type, inventory) are recoverable and
the run continues with the next token. Configuration and ledger receipt
failures are fatal for the whole run.
"""


class MigrationError(Exception):
    """Base class for all migration errors."""
    pass


class MigrationConfigurationError(MigrationError):
    """Raised when required configuration is missing or invalid."""
    pass


class MirrorNodeError(MigrationError):
    """Exception raised for mirror node transport errors."""
    pass


class TokenNotFoundError(MirrorNodeError):
    """Raised when the mirror node has no record of a token."""
    pass


class InventoryFetchError(MigrationError):
    """Raised when an NFT inventory page cannot be fetched after all retries."""
    pass


class LedgerReceiptError(MigrationError):
    """Raised when a target network transaction does not produce a receipt."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"Token {operation} **FAILED**: {message}")
