"""Time utilities (IST)."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.config import settings

IST = ZoneInfo("Asia/Kolkata")


def market_tz() -> ZoneInfo:
    """Configured market timezone (IST unless overridden)."""
    if settings.TIMEZONE == "Asia/Kolkata":
        return IST
    return ZoneInfo(settings.TIMEZONE)


def today_ist() -> date:
    """Current calendar date in the market timezone."""
    return datetime.now(market_tz()).date()
