"""
Domain Models - Trade Alerts
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

# Raw form input: a string as typed, or a number from a JSON client
PriceInput = Union[str, int, float, Decimal, None]

STRIKE_MIN = 24000
STRIKE_MAX = 50000
STRIKE_STEP = 50


class TradeCategory(str, Enum):
    """Kind of alert being composed"""
    FRESH_BUY = "FRESH_BUY"
    FRESH_SELL = "FRESH_SELL"
    FRESH_BOTH = "FRESH_BOTH"
    SQUARE_OFF_BOTH = "SQUARE_OFF_BOTH"
    SQUARE_OFF_SINGLE = "SQUARE_OFF_SINGLE"
    EXPIRY_SINGLE = "EXPIRY_SINGLE"
    IGNORE_ALERT = "IGNORE_ALERT"


class OptionSide(str, Enum):
    """Call or put"""
    CE = "CE"
    PE = "PE"


class MarketDirection(str, Enum):
    """Market view behind a directional trade"""
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"


class ExitMode(str, Enum):
    """Which open position a single-leg square-off closes"""
    BUY = "BUY"    # exit from a buy: sell to close
    SELL = "SELL"  # exit from a sell: buy to close


@dataclass(frozen=True)
class MessageTemplate:
    """Fixed square-off phrasing"""
    id: str
    label: str
    text: str


@dataclass(frozen=True)
class TradeIntent:
    """
    One form submission. Never persisted.

    Prices stay as the user entered them; validation happens at composition.
    """
    category: TradeCategory
    strike: int = STRIKE_MIN
    option_side: Optional[OptionSide] = None
    market_direction: MarketDirection = MarketDirection.BULLISH

    # Fresh trades
    buy_price: PriceInput = None
    sell_price: PriceInput = None
    buy_stop_loss: PriceInput = None
    sell_stop_loss: PriceInput = None

    # Square-off / expiry
    exit_mode: Optional[ExitMode] = None
    ce_exit: PriceInput = None
    pe_exit: PriceInput = None
    exit_price: PriceInput = None
    template: Optional[str] = None


@dataclass(frozen=True)
class PreviewMessage:
    """Composed text awaiting confirmation"""
    text: str
    category: TradeCategory
    expiry: str
    confirmed: bool = False


def strike_grid() -> list[int]:
    """All selectable strikes, ascending."""
    return list(range(STRIKE_MIN, STRIKE_MAX + 1, STRIKE_STEP))
