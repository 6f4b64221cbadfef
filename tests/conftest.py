"""Pytest configuration and fixtures."""

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from bank_ledger.config import StorageConfig
from bank_ledger.engine import LedgerEngine, open_ledger
from bank_ledger.models import Account, AccountType, Customer, Transaction, TransactionType
from bank_ledger.persistence import FlatFileStore

FIXED_NOW = datetime(2024, 5, 1, 10, 30, 15, 987654)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def storage_config(tmp_path: Path) -> StorageConfig:
    """Storage rooted in a per-test temporary directory."""
    return StorageConfig(data_dir=tmp_path / "data")


@pytest.fixture
def storage(storage_config: StorageConfig) -> FlatFileStore:
    return FlatFileStore(storage_config)


@pytest.fixture
def engine(storage_config: StorageConfig) -> LedgerEngine:
    """Engine over an empty ledger with a frozen clock."""
    return open_ledger(storage_config, clock=lambda: FIXED_NOW)


@pytest.fixture
def customer(engine: LedgerEngine) -> Customer:
    return engine.create_customer("Asha Rao", "asha@example.com", "9876543210", "12 MG Road Pune")


@pytest.fixture
def funded_accounts(engine: LedgerEngine, customer: Customer) -> tuple[Account, Account]:
    """Accounts 5001 (balance 1500.00) and 5002 (balance 200.00)."""
    first = engine.create_account(customer.customer_id, "Savings", "1500.00").account
    second = engine.create_account(customer.customer_id, "Current", "200.00").account
    return first, second


@pytest.fixture
def sample_customer() -> Customer:
    return Customer(
        customer_id=1001,
        name="Test Customer",
        email="test@test.com",
        phone="+919999999999",
        address="1 Test Street",
    )


@pytest.fixture
def sample_account(sample_customer: Customer) -> Account:
    return Account(
        account_id=5001,
        customer_id=sample_customer.customer_id,
        account_type=AccountType.SAVINGS,
        balance=Decimal("1000.00"),
        created_date=datetime(2024, 1, 2, 3, 4, 5),
    )


@pytest.fixture
def sample_transaction(sample_account: Account) -> Transaction:
    return Transaction(
        transaction_id=10001,
        account_id=sample_account.account_id,
        transaction_type=TransactionType.DEPOSIT,
        amount=Decimal("1000.00"),
        balance_after=Decimal("1000.00"),
        date=datetime(2024, 1, 2, 3, 4, 5),
        description="Initial deposit",
    )


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logger changes made by setup_logging()."""
    root = logging.getLogger()
    names = ("bank_ledger", "faker")
    level = root.level
    levels = {n: logging.getLogger(n).level for n in names}

    yield

    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    for name, value in levels.items():
        logging.getLogger(name).setLevel(value)
