"""Custom exception hierarchy for bank-ledger."""

from decimal import Decimal
from typing import Any


class LedgerError(Exception):
    """Base exception for all bank-ledger errors."""

    kind = "ledger_error"


class InvalidInputError(LedgerError):
    """Raised when an id, amount or text field cannot be parsed or is empty."""

    kind = "invalid_input"


class EntityNotFoundError(LedgerError):
    """Raised when a referenced customer or account does not exist."""

    kind = "not_found"


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidAmountError(LedgerError):
    """Raised when an amount is non-positive or not a monetary value."""

    kind = "invalid_amount"


class InsufficientFundsError(LedgerError):
    """Raised when a debit exceeds the available balance."""

    kind = "insufficient_funds"

    def __init__(self, account_id: int, balance: Decimal, requested: Decimal) -> None:
        super().__init__(
            f"Insufficient funds in account {account_id}: "
            f"balance {balance}, requested {requested}"
        )
        self.account_id = account_id
        self.balance = balance
        self.requested = requested


class SameAccountTransferError(LedgerError):
    """Raised when a transfer names the same account on both sides."""

    kind = "same_account_transfer"


class PersistenceError(LedgerError):
    """Raised when a ledger file cannot be read or written.

    When raised from a save, the in-memory mutation has already been applied
    and ``result`` holds what was committed.
    """

    kind = "persistence_failure"

    def __init__(self, message: str, result: Any = None) -> None:
        super().__init__(message)
        self.result = result


class CorruptRecordError(PersistenceError):
    """Raised when a line in a ledger file cannot be decoded."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""

    kind = "configuration"
