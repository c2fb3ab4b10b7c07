"""Money helpers: amounts are Decimals rounded to paise/cents."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest single price or fee the clinic accepts.
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Coerce a stored or submitted amount to a two-place Decimal."""
    if value is None or value == "":
        return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # too many digits for the decimal context
        raise ValueError(f"Amount out of range: {value!r}")


def money_to_float(value: Decimal) -> float:
    """Storage/JSON representation of an amount."""
    return float(value)
