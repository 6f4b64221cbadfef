"""Values returned by ledger operations."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bank_ledger.models.account import Account
from bank_ledger.models.enums import AccountType
from bank_ledger.models.transaction import Transaction


@dataclass(frozen=True)
class AccountOpening:
    """A newly opened account and its opening deposit, if any."""

    account: Account
    opening_deposit: Transaction | None = None


@dataclass(frozen=True)
class Posting:
    """A single-account deposit or withdrawal."""

    account: Account
    transaction: Transaction

    @property
    def new_balance(self) -> Decimal:
        return self.transaction.balance_after


@dataclass(frozen=True)
class TransferReceipt:
    """Both legs of a transfer. ``debit.date == credit.date`` always holds."""

    source: Account
    destination: Account
    debit: Transaction
    credit: Transaction

    @property
    def amount(self) -> Decimal:
        return self.debit.amount


@dataclass(frozen=True)
class BalanceInfo:
    """Point-in-time view of an account for balance enquiries."""

    account_id: int
    customer_id: int
    customer_name: str | None  # None when the customer record is missing
    account_type: AccountType
    status: str
    balance: Decimal
    created_date: datetime


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregate counts and balances across the ledger."""

    total_customers: int
    total_accounts: int
    active_accounts: int
    total_transactions: int
    total_balance: Decimal
    average_balance: Decimal
