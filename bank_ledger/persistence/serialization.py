"""Line codecs for the delimited ledger files."""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from bank_ledger.exceptions import CorruptRecordError
from bank_ledger.models import (
    Account,
    AccountType,
    Customer,
    RecordKind,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Transactions split into at most this many fields; the last one is the
# description and may itself contain the delimiter.
TRANSACTION_FIELDS = 7


def serialize_value(value: Any) -> str:
    """Serialize a single field value for a delimited line."""
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    elif isinstance(value, Enum):
        return str(value.value)
    elif isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    return str(value)


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    return datetime.strptime(text, TIMESTAMP_FORMAT)


def encode_customer(customer: Customer, delimiter: str = ",") -> str:
    """Encode a customer as one line (no trailing newline).

    Free-text fields are written verbatim. A delimiter inside them will
    shift fields on the next load; this is logged but not escaped.
    """
    values = [
        customer.customer_id,
        customer.name,
        customer.email,
        customer.phone,
        customer.address,
    ]
    for name, value in zip(("name", "email", "phone", "address"), values[1:]):
        if delimiter in value:
            logger.warning(
                "Customer %d field %r contains the delimiter %r and will not reload intact",
                customer.customer_id,
                name,
                delimiter,
            )
    return delimiter.join(serialize_value(v) for v in values)


def encode_account(account: Account, delimiter: str = ",") -> str:
    """Encode an account as one line."""
    return delimiter.join(
        serialize_value(v)
        for v in (
            account.account_id,
            account.customer_id,
            account.account_type,
            account.balance,
            account.status,
            account.created_date,
        )
    )


def encode_transaction(transaction: Transaction, delimiter: str = ",") -> str:
    """Encode a transaction as one line."""
    return delimiter.join(
        serialize_value(v)
        for v in (
            transaction.transaction_id,
            transaction.account_id,
            transaction.transaction_type,
            transaction.amount,
            transaction.balance_after,
            transaction.date,
            transaction.description,
        )
    )


def decode_customer(line: str, delimiter: str = ",") -> Customer:
    """Decode a customer line.

    The line is split on every delimiter and the first five fields are
    used, so a delimiter in free text corrupts the record.
    """
    parts = _split(line, delimiter, 5)
    return Customer(
        customer_id=_int(parts[0], "customer_id"),
        name=parts[1],
        email=parts[2],
        phone=parts[3],
        address=parts[4],
    )


def decode_account(line: str, delimiter: str = ",") -> Account:
    """Decode an account line."""
    parts = _split(line, delimiter, 6)
    try:
        account_type = AccountType(parts[2])
    except ValueError as exc:
        raise CorruptRecordError(f"Unknown account type {parts[2]!r}") from exc
    return Account(
        account_id=_int(parts[0], "account_id"),
        customer_id=_int(parts[1], "customer_id"),
        account_type=account_type,
        balance=_decimal(parts[3], "balance"),
        status=parts[4],
        created_date=_timestamp(parts[5], "created_date"),
    )


def decode_transaction(line: str, delimiter: str = ",") -> Transaction:
    """Decode a transaction line.

    Splits into at most seven fields so the description keeps any
    delimiters it contains. A missing description decodes as "".
    """
    parts = line.split(delimiter, TRANSACTION_FIELDS - 1)
    if len(parts) < TRANSACTION_FIELDS - 1:
        raise CorruptRecordError(
            f"Expected at least {TRANSACTION_FIELDS - 1} fields, got {len(parts)}"
        )
    try:
        transaction_type = TransactionType(parts[2])
    except ValueError as exc:
        raise CorruptRecordError(f"Unknown transaction type {parts[2]!r}") from exc
    return Transaction(
        transaction_id=_int(parts[0], "transaction_id"),
        account_id=_int(parts[1], "account_id"),
        transaction_type=transaction_type,
        amount=_decimal(parts[3], "amount"),
        balance_after=_decimal(parts[4], "balance_after"),
        date=_timestamp(parts[5], "date"),
        description=parts[6] if len(parts) == TRANSACTION_FIELDS else "",
    )


ENCODERS = {
    RecordKind.CUSTOMERS: encode_customer,
    RecordKind.ACCOUNTS: encode_account,
    RecordKind.TRANSACTIONS: encode_transaction,
}

DECODERS = {
    RecordKind.CUSTOMERS: decode_customer,
    RecordKind.ACCOUNTS: decode_account,
    RecordKind.TRANSACTIONS: decode_transaction,
}


def _split(line: str, delimiter: str, expected: int) -> list[str]:
    parts = line.split(delimiter)
    if len(parts) < expected:
        raise CorruptRecordError(f"Expected {expected} fields, got {len(parts)}")
    return parts


def _int(text: str, name: str) -> int:
    try:
        return int(text.strip())
    except ValueError as exc:
        raise CorruptRecordError(f"Invalid {name}: {text!r}") from exc


def _decimal(text: str, name: str) -> Decimal:
    try:
        value = Decimal(text.strip())
        if not value.is_finite():
            raise CorruptRecordError(f"Invalid {name}: {text!r}")
        # Fails for values with more digits than the context holds
        return value.quantize(Decimal("0.01"))
    except InvalidOperation as exc:
        raise CorruptRecordError(f"Invalid {name}: {text!r}") from exc


def _timestamp(text: str, name: str) -> datetime:
    try:
        return parse_timestamp(text.strip())
    except ValueError as exc:
        raise CorruptRecordError(f"Invalid {name}: {text!r}") from exc
