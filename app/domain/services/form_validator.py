"""
Form validation.

Checks run before composition. Any failure raises ValidationError with the
message shown to the trader; nothing is defaulted.
"""
from decimal import Decimal
from typing import Mapping, Optional

from app.domain.errors import ValidationError
from app.domain.models.trade import (
    STRIKE_MAX,
    STRIKE_MIN,
    STRIKE_STEP,
    MessageTemplate,
    OptionSide,
    PriceInput,
)
from app.domain.services.price_band import format_number, to_decimal


def is_blank(value: PriceInput) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_price(value: PriceInput, message: str, field: Optional[str] = None) -> Decimal:
    """Required price: non-empty, finite, not negative."""
    if is_blank(value):
        raise ValidationError(message, field=field)
    number = to_decimal(value)
    if number is None or number < 0:
        raise ValidationError(message, field=field)
    return number


def parse_optional_price(value: PriceInput, message: str, field: Optional[str] = None) -> Optional[Decimal]:
    """Optional price (stop loss). Blank means absent."""
    if is_blank(value):
        return None
    return parse_price(value, message, field=field)


def require_both(first: PriceInput, second: PriceInput, message: str) -> None:
    """Both legs of a two-leg form must be filled together."""
    if is_blank(first) or is_blank(second):
        raise ValidationError(message)


def display_price(value: PriceInput) -> str:
    """Price as it appears in the message: typed text kept, numbers normalized."""
    if isinstance(value, str):
        return value.strip()
    number = to_decimal(value)
    if number is None:
        return str(value)
    if number == number.to_integral_value():
        return format_number(number)
    return str(number.normalize())


def validate_strike(strike: int) -> int:
    if (
        isinstance(strike, bool)
        or not isinstance(strike, int)
        or not STRIKE_MIN <= strike <= STRIKE_MAX
        or strike % STRIKE_STEP
    ):
        raise ValidationError("Select a valid strike price", field="strike")
    return strike


def require_option_side(side: Optional[OptionSide], message: str = "Select CE or PE") -> OptionSide:
    if side is None:
        raise ValidationError(message, field="option_side")
    return OptionSide(side)


def require_template(
    template_id: Optional[str],
    templates: Mapping[str, MessageTemplate],
    message: str,
) -> MessageTemplate:
    template = templates.get(template_id or "")
    if template is None:
        raise ValidationError(message, field="template")
    return template


def ensure_complementary(buy_side: OptionSide, sell_side: OptionSide) -> None:
    """The two legs of a directional trade are never the same side."""
    if buy_side == sell_side:
        raise ValidationError(
            f"Buy and sell legs cannot both be {buy_side.value} for a directional trade"
        )
