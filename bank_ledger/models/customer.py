"""Customer model for the ledger."""

from dataclasses import dataclass


@dataclass
class Customer:
    """Bank customer entity."""

    customer_id: int
    name: str
    email: str
    phone: str
    address: str
