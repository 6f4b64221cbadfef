"""Sample data generators."""

from bank_ledger.generators.customer import (
    AccountDraft,
    AccountDraftGenerator,
    CustomerDraft,
    CustomerGenerator,
)

__all__ = [
    "AccountDraft",
    "AccountDraftGenerator",
    "CustomerDraft",
    "CustomerGenerator",
]
