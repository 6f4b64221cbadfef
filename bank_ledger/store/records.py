"""In-memory record store with referential integrity."""

import logging
from dataclasses import dataclass, field

from bank_ledger.exceptions import ReferentialIntegrityError
from bank_ledger.models import Account, Customer, Transaction

logger = logging.getLogger(__name__)


@dataclass
class RecordStore:
    """In-memory store for ledger records with relationship tracking.

    Customers and accounts are keyed by id; dict insertion order doubles as
    the listing order. Transactions are an append-only list.
    """

    # Primary entities
    customers: dict[int, Customer] = field(default_factory=dict)
    accounts: dict[int, Account] = field(default_factory=dict)

    # Transactions
    transactions: list[Transaction] = field(default_factory=list)

    # Relationship indexes
    _customer_accounts: dict[int, list[int]] = field(default_factory=dict)
    _account_transactions: dict[int, list[int]] = field(default_factory=dict)

    def add_customer(self, customer: Customer) -> None:
        """Add a customer to the store."""
        if customer.customer_id in self.customers:
            raise ValueError(f"Customer {customer.customer_id} already exists")

        self.customers[customer.customer_id] = customer
        self._customer_accounts.setdefault(customer.customer_id, [])

    def add_account(self, account: Account, strict: bool = True) -> None:
        """Add an account to the store.

        Parameters
        ----------
        account : Account
            Account to add.
        strict : bool
            Reject accounts whose customer is unknown. Loading from files
            passes ``False`` so an externally edited file still opens.
        """
        if account.account_id in self.accounts:
            raise ValueError(f"Account {account.account_id} already exists")
        if account.customer_id not in self.customers:
            if strict:
                raise ReferentialIntegrityError(f"Customer {account.customer_id} not found")
            logger.warning(
                "Account %d references unknown customer %d",
                account.account_id,
                account.customer_id,
            )

        self.accounts[account.account_id] = account
        self._customer_accounts.setdefault(account.customer_id, []).append(account.account_id)
        self._account_transactions.setdefault(account.account_id, [])

    def add_transaction(self, transaction: Transaction, strict: bool = True) -> None:
        """Add a transaction to the store."""
        if transaction.account_id not in self.accounts:
            if strict:
                raise ReferentialIntegrityError(f"Account {transaction.account_id} not found")
            logger.warning(
                "Transaction %d references unknown account %d",
                transaction.transaction_id,
                transaction.account_id,
            )

        idx = len(self.transactions)
        self.transactions.append(transaction)
        self._account_transactions.setdefault(transaction.account_id, []).append(idx)

    # Query methods
    def get_customer(self, customer_id: int) -> Customer | None:
        """Get a customer by id, or None when absent."""
        return self.customers.get(customer_id)

    def get_account(self, account_id: int) -> Account | None:
        """Get an account by id, or None when absent."""
        return self.accounts.get(account_id)

    def get_customer_accounts(self, customer_id: int) -> list[Account]:
        """Get all accounts for a customer."""
        account_ids = self._customer_accounts.get(customer_id, [])
        return [self.accounts[aid] for aid in account_ids]

    def get_account_transactions(self, account_id: int) -> list[Transaction]:
        """Get all transactions for an account, in insertion order."""
        indices = self._account_transactions.get(account_id, [])
        return [self.transactions[i] for i in indices]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self.customers),
            "accounts": len(self.accounts),
            "transactions": len(self.transactions),
        }
