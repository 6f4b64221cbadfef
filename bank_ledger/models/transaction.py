"""Transaction model for the ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bank_ledger.models.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """Account transaction. Append-only, never mutated after creation."""

    transaction_id: int
    account_id: int
    transaction_type: TransactionType
    amount: Decimal
    balance_after: Decimal  # snapshot, not recomputed from history
    date: datetime
    description: str
