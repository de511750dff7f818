"""
Domain Models Package
Export all domain entities
"""

from .trade import (
    # Enums
    ExitMode,
    MarketDirection,
    OptionSide,
    TradeCategory,

    # Entities
    MessageTemplate,
    PreviewMessage,
    TradeIntent,

    # Strike grid
    STRIKE_MAX,
    STRIKE_MIN,
    STRIKE_STEP,
    strike_grid,
)

__all__ = [
    "ExitMode",
    "MarketDirection",
    "OptionSide",
    "TradeCategory",
    "MessageTemplate",
    "PreviewMessage",
    "TradeIntent",
    "STRIKE_MAX",
    "STRIKE_MIN",
    "STRIKE_STEP",
    "strike_grid",
]
