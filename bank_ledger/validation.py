"""Parsing of text input from the presentation layer."""

from decimal import Decimal, InvalidOperation

from bank_ledger.exceptions import InvalidAmountError, InvalidInputError
from bank_ledger.models import AccountType

CENT = Decimal("0.01")
# Keeps every balance sum well inside the default 28-digit context
MAX_BALANCE = Decimal("999999999999999.99")


def parse_id(text: str | int, name: str = "id") -> int:
    """Parse a record id from text.

    Raises
    ------
    InvalidInputError
        If the text is not an integer.
    """
    if isinstance(text, int) and not isinstance(text, bool):
        return text
    try:
        return int(str(text).strip())
    except ValueError as exc:
        raise InvalidInputError(f"{name} must be a number, got {text!r}") from exc


def parse_money(text: str | Decimal, name: str = "amount") -> Decimal:
    """Parse a monetary value from text.

    Parameters
    ----------
    text : str | Decimal
        Amount as entered, e.g. ``"500"`` or ``"12.50"``.
    name : str
        Field name used in error messages.

    Returns
    -------
    Decimal
        The value with two decimal places. The sign is not checked here,
        see ``require_positive``.

    Raises
    ------
    InvalidInputError
        If the text is not a number.
    InvalidAmountError
        If the value is not finite, exceeds ``MAX_BALANCE`` or has
        fractions of a cent.
    """
    try:
        value = text if isinstance(text, Decimal) else Decimal(str(text).strip())
    except InvalidOperation as exc:
        raise InvalidInputError(f"{name} must be a number, got {text!r}") from exc

    if not value.is_finite():
        raise InvalidAmountError(f"{name} must be a finite number, got {text!r}")
    if abs(value) > MAX_BALANCE:
        raise InvalidAmountError(f"{name} cannot exceed {MAX_BALANCE}, got {text!r}")
    quantized = value.quantize(CENT)
    if value != quantized:
        raise InvalidAmountError(f"{name} cannot have fractions of a cent, got {text!r}")

    # "-0" parses as negative zero
    return quantized.copy_abs() if quantized.is_zero() else quantized


def require_positive(amount: Decimal, allow_zero: bool = False, name: str = "amount") -> Decimal:
    """Reject non-positive amounts (negative ones only, with ``allow_zero``).

    Raises
    ------
    InvalidAmountError
        If the amount is out of range.
    """
    if allow_zero:
        if amount < 0:
            raise InvalidAmountError(f"{name} cannot be negative")
    elif amount <= 0:
        raise InvalidAmountError(f"{name} must be positive")
    return amount


def parse_account_type(text: str | AccountType) -> AccountType:
    """Parse an account type, case-insensitively ("savings", "Current")."""
    if isinstance(text, AccountType):
        return text
    wanted = str(text).strip().lower()
    for account_type in AccountType:
        if account_type.value.lower() == wanted:
            return account_type
    choices = ", ".join(t.value for t in AccountType)
    raise InvalidInputError(f"Account type must be one of {choices}, got {text!r}")


def require_text(value: str, name: str) -> str:
    """Trim a required free-text field.

    Raises
    ------
    InvalidInputError
        If the field is empty after trimming or spans more than one line.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInputError(f"{name} is required")
    if "\n" in cleaned or "\r" in cleaned:
        raise InvalidInputError(f"{name} must be a single line")
    return cleaned


def require_within_limit(balance: Decimal, amount: Decimal, account_id: int) -> Decimal:
    """Return ``balance + amount``, refusing results above ``MAX_BALANCE``.

    Raises
    ------
    InvalidAmountError
        If crediting ``amount`` would push the account over the limit.
    """
    new_balance = balance + amount
    if new_balance > MAX_BALANCE:
        raise InvalidAmountError(
            f"Crediting {amount} would take account {account_id} over {MAX_BALANCE}"
        )
    return new_balance
