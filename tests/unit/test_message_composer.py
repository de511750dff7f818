"""
Unit tests for the message composer

Exact outbound text per category, plus the validation failures that stop
composition.
"""

import pytest

from app.domain.errors import ValidationError
from app.domain.models import ExitMode, MarketDirection, OptionSide, TradeCategory, TradeIntent
from app.domain.services.message_composer import (
    IGNORE_ALERT_TEXT,
    compose_message,
    directional_legs,
    expiry_buyback_side,
)

EXPIRY = "11 Nov"


# ----------------------------------------------------------------------
# Fresh trades
# ----------------------------------------------------------------------

class TestFreshSingle:

    @pytest.mark.unit
    def test_buy_ce(self):
        intent = TradeIntent(
            category=TradeCategory.FRESH_BUY,
            strike=24000,
            option_side=OptionSide.CE,
            buy_price="160",
        )
        assert compose_message(intent, EXPIRY) == (
            'FRESH TRADE\n\n"BUY" 11 Nov "Nifty 24000 CE" between 160 - 165'
        )

    @pytest.mark.unit
    def test_sell_with_stop_loss(self):
        intent = TradeIntent(
            category=TradeCategory.FRESH_SELL,
            strike=25150,
            option_side=OptionSide.PE,
            sell_price="82.5",
            sell_stop_loss="120",
        )
        assert compose_message(intent, EXPIRY) == (
            'FRESH TRADE\n\n"SELL" 11 Nov "Nifty 25150 PE" between 82.50 - 87.50'
            "\n\nStop loss for 25150 PE is 120"
        )

    @pytest.mark.unit
    def test_buy_ignores_sell_fields(self):
        intent = TradeIntent(
            category=TradeCategory.FRESH_BUY,
            option_side=OptionSide.CE,
            buy_price=160,
            sell_price="999",
            sell_stop_loss="50",
        )
        assert "Stop loss" not in compose_message(intent, EXPIRY)

    @pytest.mark.unit
    @pytest.mark.parametrize("price", [None, "", "abc", "1e5000"])
    def test_buy_requires_valid_price(self, price):
        intent = TradeIntent(
            category=TradeCategory.FRESH_BUY,
            option_side=OptionSide.CE,
            buy_price=price,
        )
        with pytest.raises(ValidationError, match="Enter valid buy price"):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_sell_requires_valid_price(self):
        intent = TradeIntent(category=TradeCategory.FRESH_SELL, option_side=OptionSide.CE, sell_price="")
        with pytest.raises(ValidationError, match="Enter valid sell price"):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_requires_option_side(self):
        intent = TradeIntent(category=TradeCategory.FRESH_BUY, buy_price="160")
        with pytest.raises(ValidationError, match="Select CE or PE"):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_rejects_off_grid_strike(self):
        intent = TradeIntent(
            category=TradeCategory.FRESH_BUY,
            strike=24025,
            option_side=OptionSide.CE,
            buy_price="160",
        )
        with pytest.raises(ValidationError, match="strike"):
            compose_message(intent, EXPIRY)


class TestFreshBoth:

    @pytest.mark.unit
    def test_bullish_without_stop_loss(self):
        intent = TradeIntent(
            category=TradeCategory.FRESH_BOTH,
            strike=24500,
            market_direction=MarketDirection.BULLISH,
            buy_price="100",
            sell_price="90",
        )
        assert compose_message(intent, EXPIRY) == (
            'FRESH TRADE\n\n'
            '"BUY" 11 Nov "Nifty 24500 CE" between 100 - 105\n'
            'AND\n'
            '"SELL" 11 Nov "Nifty 24500 PE" between 90 - 95'
        )

    @pytest.mark.unit
    def test_combined_stop_loss(self):
        intent = TradeIntent(
            category=TradeCategory.FRESH_BOTH,
            strike=24500,
            market_direction=MarketDirection.BULLISH,
            buy_price="100",
            sell_price="90",
            buy_stop_loss="80",
            sell_stop_loss="110",
        )
        assert compose_message(intent, EXPIRY).endswith(
            "\n\nStop loss for 24500 CE is 80 and 24500 PE is 110"
        )

    @pytest.mark.unit
    def test_single_stop_loss_names_only_that_side(self):
        intent = TradeIntent(
            category=TradeCategory.FRESH_BOTH,
            strike=24500,
            market_direction=MarketDirection.BULLISH,
            buy_price="100",
            sell_price="90",
            sell_stop_loss="110",
        )
        message = compose_message(intent, EXPIRY)
        assert message.endswith("\n\nStop loss for 24500 PE is 110")
        assert "CE is" not in message

    @pytest.mark.unit
    @pytest.mark.parametrize("manual_side", [None, OptionSide.CE, OptionSide.PE])
    def test_sides_follow_direction_not_manual_selection(self, manual_side):
        bullish = TradeIntent(
            category=TradeCategory.FRESH_BOTH,
            option_side=manual_side,
            market_direction=MarketDirection.BULLISH,
            buy_price="100",
            sell_price="90",
        )
        bearish = TradeIntent(
            category=TradeCategory.FRESH_BOTH,
            option_side=manual_side,
            market_direction=MarketDirection.BEARISH,
            buy_price="100",
            sell_price="90",
        )
        assert '"BUY" 11 Nov "Nifty 24000 CE"' in compose_message(bullish, EXPIRY)
        assert '"SELL" 11 Nov "Nifty 24000 PE"' in compose_message(bullish, EXPIRY)
        assert '"BUY" 11 Nov "Nifty 24000 PE"' in compose_message(bearish, EXPIRY)
        assert '"SELL" 11 Nov "Nifty 24000 CE"' in compose_message(bearish, EXPIRY)

    @pytest.mark.unit
    @pytest.mark.parametrize("buy,sell", [
        ("100", ""),
        ("", "90"),
        (None, None),
        ("abc", "90"),
        ("100", "1e5000"),
    ])
    def test_requires_both_prices(self, buy, sell):
        intent = TradeIntent(category=TradeCategory.FRESH_BOTH, buy_price=buy, sell_price=sell)
        with pytest.raises(ValidationError, match="Enter both buy and sell prices"):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_directional_legs_are_complementary(self):
        assert directional_legs(MarketDirection.BULLISH) == (OptionSide.CE, OptionSide.PE)
        assert directional_legs(MarketDirection.BEARISH) == (OptionSide.PE, OptionSide.CE)


# ----------------------------------------------------------------------
# Square off
# ----------------------------------------------------------------------

class TestSquareOff:

    @pytest.mark.unit
    def test_both_bullish(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_BOTH,
            market_direction=MarketDirection.BULLISH,
            strike=25900,
            ce_exit="120",
            pe_exit="125",
            template="book100",
        )
        assert compose_message(intent, EXPIRY) == (
            "SQUARE OFF\nModify stop loss and book 100% profit. "
            "Sell 25900 CE @ 120 and Buy 25900 PE @ 125"
        )

    @pytest.mark.unit
    def test_both_bearish(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_BOTH,
            market_direction=MarketDirection.BEARISH,
            strike=25900,
            ce_exit="120",
            pe_exit="125",
            template="stoploss",
        )
        assert compose_message(intent, EXPIRY) == (
            "SQUARE OFF\nStop loss triggered. Modify your stop loss and square off position. "
            "Sell 25900 PE @ 125 and Buy 25900 CE @ 120"
        )

    @pytest.mark.unit
    def test_both_requires_both_exits(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_BOTH,
            ce_exit="120",
            template="book100",
        )
        with pytest.raises(ValidationError, match="Enter both CE and PE exit prices."):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_unknown_template(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_BOTH,
            ce_exit="120",
            pe_exit="125",
            template="book75",
        )
        with pytest.raises(ValidationError, match="Select valid action type."):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_exit_from_buy_sells(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_SINGLE,
            exit_mode=ExitMode.BUY,
            option_side=OptionSide.CE,
            exit_price="130",
            template="book50",
        )
        assert compose_message(intent, EXPIRY) == (
            "SQUARE OFF\nModify stop loss and book 50% profit and now keep trailing stop loss "
            "at cost for remaining 50% qty. Sell 24000 CE @ 130"
        )

    @pytest.mark.unit
    def test_exit_from_sell_buys(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_SINGLE,
            exit_mode=ExitMode.SELL,
            strike=24100,
            option_side=OptionSide.PE,
            exit_price=42.5,
            template="trailclose",
        )
        assert compose_message(intent, EXPIRY) == (
            "SQUARE OFF\nTrailing stop loss triggered. Square off position. Buy 24100 PE @ 42.5"
        )
        assert " and " not in compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_single_requires_option_side(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_SINGLE,
            exit_mode=ExitMode.SELL,
            exit_price="42",
            template="book100",
        )
        with pytest.raises(ValidationError, match="Select CE or PE to exit from Sell position."):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_single_requires_exit_price(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_SINGLE,
            exit_mode=ExitMode.BUY,
            option_side=OptionSide.CE,
            template="book100",
        )
        with pytest.raises(ValidationError, match="Enter exit price."):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_single_requires_exit_mode(self):
        intent = TradeIntent(
            category=TradeCategory.SQUARE_OFF_SINGLE,
            option_side=OptionSide.CE,
            exit_price="42",
            template="book100",
        )
        with pytest.raises(ValidationError, match="Select exit mode"):
            compose_message(intent, EXPIRY)


# ----------------------------------------------------------------------
# Expiry day
# ----------------------------------------------------------------------

class TestExpirySingle:

    @pytest.mark.unit
    def test_bullish_buys_back_pe(self):
        intent = TradeIntent(
            category=TradeCategory.EXPIRY_SINGLE,
            market_direction=MarketDirection.BULLISH,
            strike=25900,
            exit_price="45",
            template="trailclose",
        )
        assert compose_message(intent, EXPIRY) == (
            "SQUARE OFF\nTrailing stop loss triggered. Modify your stop loss and square off position. "
            "Buy 25900 PE @ 45"
        )

    @pytest.mark.unit
    def test_bearish_buys_back_ce_regardless_of_option_side(self):
        intent = TradeIntent(
            category=TradeCategory.EXPIRY_SINGLE,
            market_direction=MarketDirection.BEARISH,
            option_side=OptionSide.PE,
            strike=25900,
            exit_price="45",
            template="book100",
        )
        assert compose_message(intent, EXPIRY).endswith("Buy 25900 CE @ 45")
        assert expiry_buyback_side(MarketDirection.BEARISH) == OptionSide.CE

    @pytest.mark.unit
    def test_exit_price_checked_before_template(self):
        intent = TradeIntent(category=TradeCategory.EXPIRY_SINGLE, strike=25900, template=None)
        with pytest.raises(ValidationError, match="Enter Exit Price"):
            compose_message(intent, EXPIRY)

    @pytest.mark.unit
    def test_requires_template(self):
        intent = TradeIntent(category=TradeCategory.EXPIRY_SINGLE, strike=25900, exit_price="45")
        with pytest.raises(ValidationError, match="Select message type"):
            compose_message(intent, EXPIRY)


# ----------------------------------------------------------------------
# Ignore alert / determinism
# ----------------------------------------------------------------------

@pytest.mark.unit
def test_ignore_alert_is_fixed_text():
    noisy = TradeIntent(
        category=TradeCategory.IGNORE_ALERT,
        strike=30000,
        option_side=OptionSide.PE,
        buy_price="1",
        template="book50",
    )
    assert compose_message(noisy, EXPIRY) == "Kindly ignore the alert"
    assert compose_message(TradeIntent(category=TradeCategory.IGNORE_ALERT), "01 Jan") == IGNORE_ALERT_TEXT


@pytest.mark.unit
def test_composition_is_idempotent():
    intent = TradeIntent(
        category=TradeCategory.FRESH_BOTH,
        market_direction=MarketDirection.BEARISH,
        buy_price="101.5",
        sell_price="99",
        buy_stop_loss="70",
    )
    assert compose_message(intent, EXPIRY) == compose_message(intent, EXPIRY)
