"""Account model for the ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bank_ledger.models.enums import AccountStatus, AccountType


@dataclass
class Account:
    """Bank account entity.

    ``customer_id`` is a weak reference: it must resolve when the account is
    opened, but readers have to cope with the customer being missing later.
    ``status`` is kept as free text because files may carry values other
    than ``Active``.
    """

    account_id: int
    customer_id: int
    account_type: AccountType
    balance: Decimal
    created_date: datetime
    status: str = AccountStatus.ACTIVE.value

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE.value
