"""Operation surface for presentation layers.

``LedgerService`` mirrors the engine's operations but never raises: every
call returns an ``OperationResult`` holding either the value or the typed
failure.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Generic, TypeVar

from bank_ledger.engine import LedgerEngine
from bank_ledger.exceptions import LedgerError, PersistenceError
from bank_ledger.models import (
    Account,
    AccountOpening,
    AccountType,
    BalanceInfo,
    Customer,
    DashboardSummary,
    Posting,
    Transaction,
    TransferReceipt,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a ledger operation.

    ``ok`` is False for every failure. For ``persistence_failure`` the
    change was applied in memory and ``value`` holds it, but it may not be
    on disk.
    """

    ok: bool
    value: T | None = None
    error: LedgerError | None = None

    @property
    def error_kind(self) -> str | None:
        return self.error.kind if self.error else None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""

    @property
    def committed(self) -> bool:
        """Whether the operation changed ledger state in memory."""
        return self.ok or isinstance(self.error, PersistenceError)


class LedgerService:
    """Non-throwing wrapper around a ``LedgerEngine``."""

    def __init__(self, engine: LedgerEngine) -> None:
        self.engine = engine

    def create_customer(
        self, name: str, email: str, phone: str, address: str
    ) -> OperationResult[Customer]:
        return self._call(self.engine.create_customer, name, email, phone, address)

    def create_account(
        self,
        customer_id: str | int,
        account_type: str | AccountType,
        initial_deposit: str | Decimal = "0",
    ) -> OperationResult[AccountOpening]:
        return self._call(self.engine.create_account, customer_id, account_type, initial_deposit)

    def deposit(self, account_id: str | int, amount: str | Decimal) -> OperationResult[Posting]:
        return self._call(self.engine.deposit, account_id, amount)

    def withdraw(self, account_id: str | int, amount: str | Decimal) -> OperationResult[Posting]:
        return self._call(self.engine.withdraw, account_id, amount)

    def transfer(
        self,
        source_id: str | int,
        destination_id: str | int,
        amount: str | Decimal,
    ) -> OperationResult[TransferReceipt]:
        return self._call(self.engine.transfer, source_id, destination_id, amount)

    def check_balance(self, account_id: str | int) -> OperationResult[BalanceInfo]:
        return self._call(self.engine.check_balance, account_id)

    def get_history(self, account_id: str | int) -> OperationResult[list[Transaction]]:
        return self._call(self.engine.get_history, account_id)

    def list_customers(self) -> OperationResult[list[Customer]]:
        return self._call(self.engine.list_customers)

    def list_accounts(self) -> OperationResult[list[Account]]:
        return self._call(self.engine.list_accounts)

    def list_customer_accounts(self, customer_id: str | int) -> OperationResult[list[Account]]:
        return self._call(self.engine.list_customer_accounts, customer_id)

    def get_dashboard_summary(self) -> OperationResult[DashboardSummary]:
        return self._call(self.engine.get_dashboard_summary)

    def _call(self, operation: Callable[..., Any], *args: Any) -> OperationResult:
        try:
            return OperationResult(ok=True, value=operation(*args))
        except PersistenceError as exc:
            return OperationResult(ok=False, value=exc.result, error=exc)
        except LedgerError as exc:
            logger.info("%s rejected: %s", operation.__name__, exc)
            return OperationResult(ok=False, error=exc)
