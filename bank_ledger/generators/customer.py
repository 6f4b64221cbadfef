"""Sample customers and accounts for demo ledgers."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from bank_ledger.generators.base import BaseGenerator
from bank_ledger.models import AccountType


@dataclass(frozen=True)
class CustomerDraft:
    """Registration input for one customer, before an id is assigned."""

    name: str
    email: str
    phone: str
    address: str


@dataclass(frozen=True)
class AccountDraft:
    """Account opening input: type and opening deposit."""

    account_type: AccountType
    initial_deposit: Decimal


class CustomerGenerator(BaseGenerator):
    """Generate synthetic customer registration data.

    Values never contain line breaks or ``delimiter``, so they survive a
    round trip through the ledger files.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_IN",
        delimiter: str = ",",
    ) -> None:
        super().__init__(seed, locale)
        self.delimiter = delimiter

    def generate(self) -> CustomerDraft:
        """Generate a single customer.

        Returns
        -------
        CustomerDraft
            Generated customer input.
        """
        return CustomerDraft(
            name=self._clean(self.fake.name()),
            email=self._clean(self.fake.email()),
            phone=self._clean(self.fake.phone_number()),
            address=self._clean(f"{self.fake.street_address()} {self.fake.city()}"),
        )

    def generate_batch(self, count: int) -> Iterator[CustomerDraft]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        CustomerDraft
            Generated customers.
        """
        for _ in range(count):
            yield self.generate()

    def _clean(self, value: str) -> str:
        for ch in ("\r", "\n", self.delimiter):
            value = value.replace(ch, " ")
        return " ".join(value.split())


class AccountDraftGenerator(BaseGenerator):
    """Generate account openings with log-normally distributed deposits."""

    ACCOUNT_TYPES = list(AccountType)
    ACCOUNT_WEIGHTS = [0.7, 0.3]

    # Share of accounts opened without a deposit
    ZERO_DEPOSIT_RATE = 0.1

    def generate(self) -> AccountDraft:
        account_type = self.random.choices(self.ACCOUNT_TYPES, weights=self.ACCOUNT_WEIGHTS, k=1)[0]

        if self.random.random() < self.ZERO_DEPOSIT_RATE:
            deposit = Decimal("0.00")
        else:
            # ~8,000 median, capped to keep demo figures readable
            amount = min(self.random.lognormvariate(mu=9.0, sigma=1.0), 500_000)
            deposit = Decimal(str(round(amount, 2))).quantize(Decimal("0.01"))

        return AccountDraft(account_type=account_type, initial_deposit=deposit)

    def generate_for_customer(self, max_accounts: int = 2) -> Iterator[AccountDraft]:
        """Yield between one and ``max_accounts`` account drafts."""
        for _ in range(self.random.randint(1, max(1, max_accounts))):
            yield self.generate()
