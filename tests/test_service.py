"""Tests for the non-throwing operation surface."""

from decimal import Decimal
from unittest.mock import patch

import pytest

from bank_ledger.engine import LedgerEngine
from bank_ledger.exceptions import PersistenceError
from bank_ledger.models import Account
from bank_ledger.service import LedgerService, OperationResult


@pytest.fixture
def service(engine: LedgerEngine) -> LedgerService:
    return LedgerService(engine)


class TestOperationResult:
    """Tests for OperationResult."""

    def test_success(self) -> None:
        result = OperationResult(ok=True, value=1)

        assert result.error_kind is None
        assert result.message == ""
        assert result.committed

    def test_failure(self) -> None:
        result = OperationResult(ok=False, error=PersistenceError("disk full", result=2))

        assert result.error_kind == "persistence_failure"
        assert result.message == "disk full"
        assert result.committed


class TestLedgerService:
    """Tests for LedgerService."""

    def test_full_flow(self, service: LedgerService) -> None:
        customer = service.create_customer("Asha", "a@x", "1", "Pune")
        assert customer.ok

        opening = service.create_account(customer.value.customer_id, "Savings", "1000")
        assert opening.ok
        assert opening.value.account.account_id == 5001

        assert service.deposit("5001", "500").value.new_balance == Decimal("1500.00")
        assert service.list_customers().value == [customer.value]
        assert service.list_accounts().value == [opening.value.account]
        assert service.list_customer_accounts("1001").value == [opening.value.account]
        assert len(service.get_history("5001").value) == 2
        assert service.check_balance("5001").value.balance == Decimal("1500.00")
        assert service.get_dashboard_summary().value.total_transactions == 2

    @pytest.mark.parametrize(
        "call,kind",
        [
            (lambda s: s.create_customer("", "a", "b", "c"), "invalid_input"),
            (lambda s: s.deposit("x", "1"), "invalid_input"),
            (lambda s: s.deposit("9999", "1"), "not_found"),
            (lambda s: s.deposit("5001", "-1"), "invalid_amount"),
            (lambda s: s.create_account("1001", "Savings", "-1"), "invalid_amount"),
            (lambda s: s.withdraw("5001", "2000"), "insufficient_funds"),
            (lambda s: s.transfer("5001", "5001", "1"), "same_account_transfer"),
            (lambda s: s.check_balance("42"), "not_found"),
            (lambda s: s.get_history("abc"), "invalid_input"),
        ],
    )
    def test_failures_are_typed(
        self,
        service: LedgerService,
        funded_accounts: tuple[Account, Account],
        call,
        kind: str,
    ) -> None:
        result = call(service)

        assert not result.ok
        assert result.value is None
        assert result.error_kind == kind
        assert not result.committed

    def test_persistence_failure_returns_committed_value(
        self, service: LedgerService, funded_accounts: tuple[Account, Account]
    ) -> None:
        with patch.object(service.engine.storage, "save", side_effect=PersistenceError("disk full")):
            result = service.transfer("5001", "5002", "300")

        assert not result.ok
        assert result.committed
        assert result.error_kind == "persistence_failure"
        assert result.value.debit.balance_after == Decimal("1200.00")
        assert service.check_balance("5002").value.balance == Decimal("500.00")
