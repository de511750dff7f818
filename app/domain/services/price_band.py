"""Entry price band: base price plus a fixed tolerance."""
import math
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Optional

from app.domain.models.trade import PriceInput

BAND_WIDTH = Decimal("5")
CENTS = Decimal("0.01")

# Wide enough for any value inside float range quantized to cents
_CENTS_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def to_decimal(value: PriceInput) -> Optional[Decimal]:
    """Parse a form value to a finite Decimal, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif isinstance(value, float):
        value = repr(value)
    try:
        number = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not number.is_finite():
        return None
    # Prices beyond float range count as infinite
    if not math.isfinite(float(number)):
        return None
    return number


def format_number(number: Decimal) -> str:
    """Integer literal when whole, else two decimals rounded half up."""
    if number == number.to_integral_value():
        return str(int(number))
    return str(number.quantize(CENTS, context=_CENTS_CONTEXT))


def price_band(value: PriceInput) -> Optional[str]:
    """
    "<low> - <high>" with high = low + 5, or None when value is not a
    finite number.

    >>> price_band("160")
    '160 - 165'
    >>> price_band(160.5)
    '160.50 - 165.50'
    """
    low = to_decimal(value)
    if low is None:
        return None
    return f"{format_number(low)} - {format_number(low + BAND_WIDTH)}"
