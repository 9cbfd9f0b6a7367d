from decimal import Decimal, InvalidOperation

from budget_manager.services.errors import ValidationError
from budget_manager.utils.constants import CENT, MAX_AMOUNT


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format an amount as currency string, e.g. '$1,234.56'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_signed(amount: Decimal, symbol: str = "$") -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def parse_amount(value) -> Decimal:
    """Parse user input into a positive two-place Decimal.

    Accepts Decimal, int, str ('1,234.50', '$12') or a float such as a JSON
    number. Floats go through repr() so 0.1 becomes Decimal("0.1"), not its
    binary expansion.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}.")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        try:
            amount = Decimal(repr(value))
        except InvalidOperation:
            raise ValidationError(f"Invalid amount: {value!r}.") from None
    else:
        text = str(value).strip().replace(",", "").lstrip("$")
        if not text:
            raise ValidationError("Amount is required.")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValidationError(f"Invalid amount: {value!r}.") from None
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}.")
    if amount <= 0:
        raise ValidationError("Amount must be positive.")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount cannot exceed {MAX_AMOUNT:,}.")
    try:
        cents = amount.quantize(CENT)
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: {value!r}.") from None
    if amount != cents:
        raise ValidationError("Amount cannot have more than two decimal places.")
    return cents


def to_cents(amount: Decimal) -> int:
    return int(amount.quantize(CENT) * 100)


def from_cents(cents: int | None) -> Decimal:
    if not cents:
        return Decimal("0.00")
    return (Decimal(cents) / 100).quantize(CENT)
