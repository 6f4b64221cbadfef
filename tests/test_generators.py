"""Tests for sample data generators."""

from decimal import Decimal

from bank_ledger.engine import LedgerEngine
from bank_ledger.generators import (
    AccountDraft,
    AccountDraftGenerator,
    CustomerDraft,
    CustomerGenerator,
)
from bank_ledger.models import AccountType


class TestCustomerGenerator:
    """Tests for CustomerGenerator."""

    def test_generate(self, seed: int) -> None:
        draft = CustomerGenerator(seed=seed).generate()

        assert isinstance(draft, CustomerDraft)
        assert all([draft.name, draft.email, draft.phone, draft.address])

    def test_seed_is_reproducible(self, seed: int) -> None:
        first = list(CustomerGenerator(seed=seed).generate_batch(5))
        second = list(CustomerGenerator(seed=seed).generate_batch(5))

        assert first == second

    def test_values_avoid_delimiter_and_newlines(self, seed: int) -> None:
        generator = CustomerGenerator(seed=seed, delimiter=",")

        for draft in generator.generate_batch(50):
            for value in (draft.name, draft.email, draft.phone, draft.address):
                assert "," not in value
                assert "\n" not in value
                assert value == value.strip()

    def test_drafts_register_cleanly(self, engine: LedgerEngine, seed: int) -> None:
        for draft in CustomerGenerator(seed=seed).generate_batch(3):
            engine.create_customer(draft.name, draft.email, draft.phone, draft.address)

        assert [c.customer_id for c in engine.list_customers()] == [1001, 1002, 1003]


class TestAccountDraftGenerator:
    """Tests for AccountDraftGenerator."""

    def test_generate(self, seed: int) -> None:
        draft = AccountDraftGenerator(seed=seed).generate()

        assert isinstance(draft, AccountDraft)
        assert draft.account_type in AccountType
        assert draft.initial_deposit >= 0
        assert draft.initial_deposit == draft.initial_deposit.quantize(Decimal("0.01"))

    def test_generate_for_customer_bounds(self, seed: int) -> None:
        generator = AccountDraftGenerator(seed=seed)

        for _ in range(20):
            drafts = list(generator.generate_for_customer(max_accounts=3))
            assert 1 <= len(drafts) <= 3

    def test_seed_is_reproducible(self, seed: int) -> None:
        first = [AccountDraftGenerator(seed=seed).generate() for _ in range(3)]
        second = [AccountDraftGenerator(seed=seed).generate() for _ in range(3)]

        assert first == second
