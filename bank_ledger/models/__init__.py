"""Ledger domain models."""

from bank_ledger.models.account import Account
from bank_ledger.models.customer import Customer
from bank_ledger.models.enums import (
    AccountStatus,
    AccountType,
    RecordKind,
    TransactionType,
)
from bank_ledger.models.results import (
    AccountOpening,
    BalanceInfo,
    DashboardSummary,
    Posting,
    TransferReceipt,
)
from bank_ledger.models.transaction import Transaction

__all__ = [
    "Account",
    "AccountOpening",
    "AccountStatus",
    "AccountType",
    "BalanceInfo",
    "Customer",
    "DashboardSummary",
    "Posting",
    "RecordKind",
    "Transaction",
    "TransactionType",
    "TransferReceipt",
]
