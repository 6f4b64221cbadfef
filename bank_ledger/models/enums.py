"""Enumeration types for ledger entities."""

from enum import Enum


class AccountType(str, Enum):
    SAVINGS = "Savings"
    CURRENT = "Current"


class AccountStatus(str, Enum):
    ACTIVE = "Active"


class TransactionType(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"

    @property
    def is_credit(self) -> bool:
        """Whether this kind of transaction adds to the balance."""
        return self in (TransactionType.DEPOSIT, TransactionType.TRANSFER_IN)


class RecordKind(str, Enum):
    """Record collections, one backing file each."""

    CUSTOMERS = "customers"
    ACCOUNTS = "accounts"
    TRANSACTIONS = "transactions"
