"""
Message Composer

Maps a TradeIntent to the exact text posted to the channel. Pure: the same
intent and expiry label always give the same text. Invalid input raises
ValidationError before any text is produced.
"""
from typing import Callable, Dict, Tuple

from app.domain.errors import ValidationError
from app.domain.models.trade import (
    ExitMode,
    MarketDirection,
    MessageTemplate,
    OptionSide,
    TradeCategory,
    TradeIntent,
)
from app.domain.services.form_validator import (
    display_price,
    ensure_complementary,
    is_blank,
    parse_optional_price,
    parse_price,
    require_both,
    require_option_side,
    require_template,
    validate_strike,
)
from app.domain.services.price_band import price_band

IGNORE_ALERT_TEXT = "Kindly ignore the alert"
BOTH_PRICES_MESSAGE = "Enter both buy and sell prices"


def _templates(*items: MessageTemplate) -> Dict[str, MessageTemplate]:
    return {item.id: item for item in items}


SQUARE_OFF_TEMPLATES = _templates(
    MessageTemplate(
        "book100",
        "Book 100% profit",
        "Modify stop loss and book 100% profit.",
    ),
    MessageTemplate(
        "book50",
        "Book 50% profit",
        "Modify stop loss and book 50% profit and now keep trailing stop loss at cost for remaining 50% qty.",
    ),
    MessageTemplate(
        "trailprofit",
        "Trailing SL triggered - book remaining 50% profit",
        "Trailing stop loss triggered. Modify stop loss and book profit for remaining 50% quantity.",
    ),
    MessageTemplate(
        "trailclose",
        "Trailing SL triggered - square off position",
        "Trailing stop loss triggered. Square off position.",
    ),
    MessageTemplate(
        "stoploss",
        "Stop loss triggered",
        "Stop loss triggered. Modify your stop loss and square off position.",
    ),
)

EXPIRY_TEMPLATES = _templates(
    MessageTemplate(
        "book100",
        "Book 100% Profit",
        "Modify stop loss and book 100% profit.",
    ),
    MessageTemplate(
        "book50",
        "Book 50% Profit (Trailing stop loss for remaining 50%)",
        "Modify stop loss and book 50% profit and now keep trailing stop loss at cost for remaining 50% qty.",
    ),
    MessageTemplate(
        "trailprofit",
        "Trailing Stop Loss Triggered - Book Remaining Profit",
        "Trailing stop loss triggered. Modify stop loss and book profit for remaining 50% quantity.",
    ),
    MessageTemplate(
        "trailclose",
        "Trailing Stop Loss Triggered - Square Off",
        "Trailing stop loss triggered. Modify your stop loss and square off position.",
    ),
    MessageTemplate(
        "stoploss",
        "Stop Loss Triggered - Square Off",
        "Stop loss triggered. Modify your stop loss and square off position.",
    ),
)


def directional_legs(direction: MarketDirection) -> Tuple[OptionSide, OptionSide]:
    """(buy side, sell side) of a directional two-leg trade."""
    if direction == MarketDirection.BULLISH:
        return OptionSide.CE, OptionSide.PE
    return OptionSide.PE, OptionSide.CE


def expiry_buyback_side(direction: MarketDirection) -> OptionSide:
    """Side bought back on expiry day: the short leg of the view."""
    return OptionSide.PE if direction == MarketDirection.BULLISH else OptionSide.CE


def _entry_line(verb: str, expiry: str, strike: int, side: OptionSide, band: str) -> str:
    return f'"{verb}" {expiry} "Nifty {strike} {side.value}" between {band}'


def _stop_loss_clause(strike: int, side: OptionSide, stop_loss) -> str:
    return f"{strike} {side.value} is {display_price(stop_loss)}"


# ----------------------------------------------------------------------
# Fresh trades
# ----------------------------------------------------------------------

def _compose_fresh_single(intent: TradeIntent, expiry: str) -> str:
    if intent.category == TradeCategory.FRESH_BUY:
        verb, price, stop_loss = "BUY", intent.buy_price, intent.buy_stop_loss
    else:
        verb, price, stop_loss = "SELL", intent.sell_price, intent.sell_stop_loss

    strike = validate_strike(intent.strike)
    parse_price(price, f"Enter valid {verb.lower()} price", field=f"{verb.lower()}_price")
    side = require_option_side(intent.option_side)
    parse_optional_price(stop_loss, "Enter valid stop loss", field=f"{verb.lower()}_stop_loss")

    message = "FRESH TRADE\n\n" + _entry_line(verb, expiry, strike, side, price_band(price))
    if not is_blank(stop_loss):
        message += "\n\nStop loss for " + _stop_loss_clause(strike, side, stop_loss)
    return message


def _compose_fresh_both(intent: TradeIntent, expiry: str) -> str:
    strike = validate_strike(intent.strike)
    require_both(intent.buy_price, intent.sell_price, BOTH_PRICES_MESSAGE)
    parse_price(intent.buy_price, BOTH_PRICES_MESSAGE, field="buy_price")
    parse_price(intent.sell_price, BOTH_PRICES_MESSAGE, field="sell_price")
    parse_optional_price(intent.buy_stop_loss, "Enter valid stop loss", field="buy_stop_loss")
    parse_optional_price(intent.sell_stop_loss, "Enter valid stop loss", field="sell_stop_loss")

    # Sides follow the market view; any option_side on the intent is ignored
    buy_side, sell_side = directional_legs(intent.market_direction)
    ensure_complementary(buy_side, sell_side)

    message = (
        "FRESH TRADE\n\n"
        + _entry_line("BUY", expiry, strike, buy_side, price_band(intent.buy_price))
        + "\nAND\n"
        + _entry_line("SELL", expiry, strike, sell_side, price_band(intent.sell_price))
    )

    clauses = []
    if not is_blank(intent.buy_stop_loss):
        clauses.append(_stop_loss_clause(strike, buy_side, intent.buy_stop_loss))
    if not is_blank(intent.sell_stop_loss):
        clauses.append(_stop_loss_clause(strike, sell_side, intent.sell_stop_loss))
    if clauses:
        message += "\n\nStop loss for " + " and ".join(clauses)
    return message


# ----------------------------------------------------------------------
# Square off
# ----------------------------------------------------------------------

def _compose_square_off_both(intent: TradeIntent, expiry: str) -> str:
    template = require_template(intent.template, SQUARE_OFF_TEMPLATES, "Select valid action type.")
    strike = validate_strike(intent.strike)
    require_both(intent.ce_exit, intent.pe_exit, "Enter both CE and PE exit prices.")
    parse_price(intent.ce_exit, "Enter both CE and PE exit prices.", field="ce_exit")
    parse_price(intent.pe_exit, "Enter both CE and PE exit prices.", field="pe_exit")

    ce = f"{strike} CE @ {display_price(intent.ce_exit)}"
    pe = f"{strike} PE @ {display_price(intent.pe_exit)}"
    if intent.market_direction == MarketDirection.BULLISH:
        # Long CE / short PE: sell the CE, buy back the PE
        legs = f"Sell {ce} and Buy {pe}"
    else:
        legs = f"Sell {pe} and Buy {ce}"
    return f"SQUARE OFF\n{template.text} {legs}"


def _compose_square_off_single(intent: TradeIntent, expiry: str) -> str:
    template = require_template(intent.template, SQUARE_OFF_TEMPLATES, "Select valid action type.")
    if intent.exit_mode is None:
        raise ValidationError("Select exit mode", field="exit_mode")
    strike = validate_strike(intent.strike)

    if intent.exit_mode == ExitMode.BUY:
        verb, position = "Sell", "Buy"
    else:
        verb, position = "Buy", "Sell"
    side = require_option_side(
        intent.option_side, f"Select CE or PE to exit from {position} position."
    )
    parse_price(intent.exit_price, "Enter exit price.", field="exit_price")

    return f"SQUARE OFF\n{template.text} {verb} {strike} {side.value} @ {display_price(intent.exit_price)}"


def _compose_expiry_single(intent: TradeIntent, expiry: str) -> str:
    parse_price(intent.exit_price, "Enter Exit Price", field="exit_price")
    template = require_template(intent.template, EXPIRY_TEMPLATES, "Select message type")
    strike = validate_strike(intent.strike)
    side = expiry_buyback_side(intent.market_direction)
    return f"SQUARE OFF\n{template.text} Buy {strike} {side.value} @ {display_price(intent.exit_price)}"


def _compose_ignore_alert(intent: TradeIntent, expiry: str) -> str:
    return IGNORE_ALERT_TEXT


_COMPOSERS: Dict[TradeCategory, Callable[[TradeIntent, str], str]] = {
    TradeCategory.FRESH_BUY: _compose_fresh_single,
    TradeCategory.FRESH_SELL: _compose_fresh_single,
    TradeCategory.FRESH_BOTH: _compose_fresh_both,
    TradeCategory.SQUARE_OFF_BOTH: _compose_square_off_both,
    TradeCategory.SQUARE_OFF_SINGLE: _compose_square_off_single,
    TradeCategory.EXPIRY_SINGLE: _compose_expiry_single,
    TradeCategory.IGNORE_ALERT: _compose_ignore_alert,
}


def compose_message(intent: TradeIntent, expiry: str) -> str:
    """
    Build the outbound text for an intent.

    Args:
        intent: form submission
        expiry: weekly expiry label fixed for the session, e.g. "11 Nov"

    Raises:
        ValidationError: a required field is missing or invalid
    """
    composer = _COMPOSERS.get(intent.category)
    if composer is None:
        raise ValidationError("Select a trade type", field="category")
    return composer(intent, expiry)
