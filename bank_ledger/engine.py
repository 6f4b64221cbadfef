"""Ledger engine: validated operations over the record store.

Every mutating operation follows the same sequence:

1. parse and validate all inputs and referenced ids (no state touched),
2. mutate the in-memory store,
3. rewrite the file of the affected collection,
4. rewrite the transactions file if transactions were created.

If a save fails the in-memory change stays applied and a
``PersistenceError`` carrying the committed result is raised. Later saves
are skipped so no transaction reaches disk ahead of the balance it
describes; the next successful save of that kind writes it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable

from bank_ledger.config import LedgerConfig, StorageConfig
from bank_ledger.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    PersistenceError,
    SameAccountTransferError,
)
from bank_ledger.models import (
    Account,
    AccountOpening,
    AccountStatus,
    AccountType,
    BalanceInfo,
    Customer,
    DashboardSummary,
    Posting,
    RecordKind,
    Transaction,
    TransactionType,
    TransferReceipt,
)
from bank_ledger.persistence import FlatFileStore
from bank_ledger.store import IdAllocator, RecordStore
from bank_ledger.validation import (
    CENT,
    parse_account_type,
    parse_id,
    parse_money,
    require_positive,
    require_text,
    require_within_limit,
)

logger = logging.getLogger(__name__)

DEPOSIT_DESCRIPTION = "Cash Deposit"
WITHDRAWAL_DESCRIPTION = "Cash Withdrawal"
OPENING_DESCRIPTION = "Initial deposit"


class LedgerEngine:
    """Business rules for customers, accounts and money movement.

    The engine owns no records itself. It reads and mutates the
    ``RecordStore`` it was given and writes through to ``storage``.

    Parameters
    ----------
    store : RecordStore
        Loaded records.
    storage : FlatFileStore
        Write-through persistence.
    allocator : IdAllocator | None
        Id counters. Derived from ``store`` when omitted.
    clock : Callable[[], datetime] | None
        Source of timestamps (``datetime.now`` by default).
    """

    def __init__(
        self,
        store: RecordStore,
        storage: FlatFileStore,
        allocator: IdAllocator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.storage = storage
        self.allocator = allocator or IdAllocator.from_store(store)
        self._clock = clock or datetime.now

    # Customers
    def create_customer(self, name: str, email: str, phone: str, address: str) -> Customer:
        """Register a customer. All fields are required."""
        fields = {
            "name": require_text(name, "Name"),
            "email": require_text(email, "Email"),
            "phone": require_text(phone, "Phone"),
            "address": require_text(address, "Address"),
        }

        customer = Customer(customer_id=self.allocator.next_id(RecordKind.CUSTOMERS), **fields)
        self.store.add_customer(customer)
        logger.info(
            "Created customer %d",
            customer.customer_id,
            extra={"operation": "create_customer", "customer_id": customer.customer_id},
        )

        return self._persist(customer, RecordKind.CUSTOMERS)

    def list_customers(self) -> list[Customer]:
        return list(self.store.customers.values())

    # Accounts
    def create_account(
        self,
        customer_id: str | int,
        account_type: str | AccountType,
        initial_deposit: str | Decimal = "0",
    ) -> AccountOpening:
        """Open an account for an existing customer.

        An opening deposit of zero is allowed; a positive one is also
        recorded as a DEPOSIT transaction with the same timestamp as the
        account.
        """
        cid = parse_id(customer_id, "Customer ID")
        deposit = parse_money(initial_deposit, "Initial deposit")
        kind = parse_account_type(account_type)

        if self.store.get_customer(cid) is None:
            raise EntityNotFoundError(f"Customer {cid} not found")
        require_positive(deposit, allow_zero=True, name="Initial deposit")

        now = self._now()
        account = Account(
            account_id=self.allocator.next_id(RecordKind.ACCOUNTS),
            customer_id=cid,
            account_type=kind,
            balance=deposit,
            created_date=now,
            status=AccountStatus.ACTIVE.value,
        )
        self.store.add_account(account)

        opening = None
        if deposit > 0:
            opening = self._record(
                account, TransactionType.DEPOSIT, deposit, now, OPENING_DESCRIPTION
            )
        logger.info(
            "Opened %s account %d for customer %d with %s",
            kind.value,
            account.account_id,
            cid,
            deposit,
            extra={
                "operation": "create_account",
                "customer_id": cid,
                "account_id": account.account_id,
                "amount": deposit,
            },
        )

        result = AccountOpening(account=account, opening_deposit=opening)
        if opening is None:
            return self._persist(result, RecordKind.ACCOUNTS)
        return self._persist(result, RecordKind.ACCOUNTS, RecordKind.TRANSACTIONS)

    def list_accounts(self) -> list[Account]:
        return list(self.store.accounts.values())

    def list_customer_accounts(self, customer_id: str | int) -> list[Account]:
        """List a customer's accounts in the order they were opened."""
        cid = parse_id(customer_id, "Customer ID")
        if self.store.get_customer(cid) is None:
            raise EntityNotFoundError(f"Customer {cid} not found")
        return self.store.get_customer_accounts(cid)

    # Money movement
    def deposit(self, account_id: str | int, amount: str | Decimal) -> Posting:
        """Credit ``amount`` to an account."""
        aid = parse_id(account_id, "Account ID")
        value = parse_money(amount)
        account = self._require_account(aid)
        require_positive(value, name="Deposit amount")
        new_balance = require_within_limit(account.balance, value, aid)

        account.balance = new_balance
        transaction = self._record(
            account, TransactionType.DEPOSIT, value, self._now(), DEPOSIT_DESCRIPTION
        )
        logger.info(
            "Deposited %s into account %d, balance %s",
            value,
            aid,
            account.balance,
            extra=_context("deposit", transaction),
        )

        return self._persist(
            Posting(account=account, transaction=transaction),
            RecordKind.ACCOUNTS,
            RecordKind.TRANSACTIONS,
        )

    def withdraw(self, account_id: str | int, amount: str | Decimal) -> Posting:
        """Debit ``amount`` from an account if the balance covers it."""
        aid = parse_id(account_id, "Account ID")
        value = parse_money(amount)
        account = self._require_account(aid)
        require_positive(value, name="Withdrawal amount")
        if account.balance < value:
            raise InsufficientFundsError(aid, account.balance, value)

        account.balance -= value
        transaction = self._record(
            account, TransactionType.WITHDRAWAL, value, self._now(), WITHDRAWAL_DESCRIPTION
        )
        logger.info(
            "Withdrew %s from account %d, balance %s",
            value,
            aid,
            account.balance,
            extra=_context("withdraw", transaction),
        )

        return self._persist(
            Posting(account=account, transaction=transaction),
            RecordKind.ACCOUNTS,
            RecordKind.TRANSACTIONS,
        )

    def transfer(
        self,
        source_id: str | int,
        destination_id: str | int,
        amount: str | Decimal,
    ) -> TransferReceipt:
        """Move ``amount`` between two distinct accounts.

        Both legs are validated before either balance changes, and both
        transactions share one timestamp.
        """
        sid = parse_id(source_id, "Source account ID")
        did = parse_id(destination_id, "Destination account ID")
        value = parse_money(amount)

        source = self.store.get_account(sid)
        destination = self.store.get_account(did)
        missing = [str(i) for i, a in ((sid, source), (did, destination)) if a is None]
        if missing:
            raise EntityNotFoundError(f"Account(s) {', '.join(missing)} not found")
        if sid == did:
            raise SameAccountTransferError("Cannot transfer to the same account")
        require_positive(value, name="Transfer amount")
        if source.balance < value:
            raise InsufficientFundsError(sid, source.balance, value)
        credited = require_within_limit(destination.balance, value, did)

        source.balance -= value
        destination.balance = credited
        now = self._now()
        debit = self._record(
            source, TransactionType.TRANSFER_OUT, value, now, f"Transfer to {did}"
        )
        credit = self._record(
            destination, TransactionType.TRANSFER_IN, value, now, f"Transfer from {sid}"
        )
        logger.info(
            "Transferred %s from account %d to account %d",
            value,
            sid,
            did,
            extra={**_context("transfer", debit), "destination_id": did},
        )

        return self._persist(
            TransferReceipt(source=source, destination=destination, debit=debit, credit=credit),
            RecordKind.ACCOUNTS,
            RecordKind.TRANSACTIONS,
        )

    # Queries
    def check_balance(self, account_id: str | int) -> BalanceInfo:
        """Describe an account's balance, type, status and owner."""
        aid = parse_id(account_id, "Account ID")
        account = self._require_account(aid)
        customer = self.store.get_customer(account.customer_id)

        return BalanceInfo(
            account_id=account.account_id,
            customer_id=account.customer_id,
            customer_name=customer.name if customer else None,
            account_type=account.account_type,
            status=account.status,
            balance=account.balance,
            created_date=account.created_date,
        )

    def get_history(self, account_id: str | int) -> list[Transaction]:
        """All transactions of an account in the order they were posted."""
        aid = parse_id(account_id, "Account ID")
        self._require_account(aid)
        return self.store.get_account_transactions(aid)

    def get_dashboard_summary(self) -> DashboardSummary:
        accounts = self.store.accounts.values()
        total = sum((a.balance for a in accounts), Decimal("0.00"))
        average = (
            (total / len(accounts)).quantize(CENT, rounding=ROUND_HALF_UP)
            if accounts
            else Decimal("0.00")
        )

        return DashboardSummary(
            total_customers=len(self.store.customers),
            total_accounts=len(accounts),
            active_accounts=sum(1 for a in accounts if a.is_active),
            total_transactions=len(self.store.transactions),
            total_balance=total,
            average_balance=average,
        )

    def next_ids(self) -> dict[str, int]:
        """Ids the next create of each kind would receive."""
        return {kind.value: self.allocator.peek(kind) for kind in RecordKind}

    # Internals
    def _now(self) -> datetime:
        # Files store whole seconds
        return self._clock().replace(microsecond=0)

    def _require_account(self, account_id: int) -> Account:
        account = self.store.get_account(account_id)
        if account is None:
            raise EntityNotFoundError(f"Account {account_id} not found")
        return account

    def _record(
        self,
        account: Account,
        transaction_type: TransactionType,
        amount: Decimal,
        date: datetime,
        description: str,
    ) -> Transaction:
        transaction = Transaction(
            transaction_id=self.allocator.next_id(RecordKind.TRANSACTIONS),
            account_id=account.account_id,
            transaction_type=transaction_type,
            amount=amount,
            balance_after=account.balance,
            date=date,
            description=description,
        )
        self.store.add_transaction(transaction)
        return transaction

    def _records_of(self, kind: RecordKind) -> list[Any]:
        if kind == RecordKind.CUSTOMERS:
            return list(self.store.customers.values())
        if kind == RecordKind.ACCOUNTS:
            return list(self.store.accounts.values())
        return self.store.transactions

    def _persist(self, result: Any, *kinds: RecordKind) -> Any:
        for kind in kinds:
            try:
                self.storage.save(kind, self._records_of(kind))
            except PersistenceError as exc:
                logger.warning(
                    "In-memory change kept but %s not saved; durability uncertain",
                    kind.value,
                    extra={"record_kind": kind.value},
                )
                raise PersistenceError(str(exc), result=result) from exc
        return result


def _context(operation: str, transaction: Transaction) -> dict[str, Any]:
    return {
        "operation": operation,
        "account_id": transaction.account_id,
        "transaction_id": transaction.transaction_id,
        "amount": transaction.amount,
        "balance": transaction.balance_after,
    }


def open_ledger(
    config: LedgerConfig | StorageConfig | None = None,
    clock: Callable[[], datetime] | None = None,
) -> LedgerEngine:
    """Load the ledger files and build an engine around them.

    Missing files start empty. Id counters continue after the highest id
    found in each file.
    """
    if isinstance(config, LedgerConfig):
        storage_config = config.storage
    else:
        storage_config = config or StorageConfig()

    storage = FlatFileStore(storage_config)
    store = storage.load_store()
    logger.info(
        "Ledger opened from %s: %d customers, %d accounts, %d transactions",
        storage_config.data_dir,
        *store.summary().values(),
    )
    return LedgerEngine(store, storage, IdAllocator.from_store(store), clock=clock)
