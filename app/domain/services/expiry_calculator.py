"""Weekly expiry date for NIFTY options (Tuesday)."""
from datetime import date, timedelta
from typing import Optional

from app.utils.time import today_ist

EXPIRY_WEEKDAY = 1  # Tuesday

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def next_weekly_expiry(today: date) -> date:
    """Next Tuesday after today. On a Tuesday this is a week out, never today."""
    days_ahead = (EXPIRY_WEEKDAY - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def format_expiry_label(expiry: date) -> str:
    # Fixed English abbreviations, independent of the process locale
    return f"{expiry.day:02d} {_MONTHS[expiry.month - 1]}"


def expiry_label(today: Optional[date] = None) -> str:
    """Label such as "11 Nov" for the next weekly expiry."""
    if today is None:
        today = today_ist()
    return format_expiry_label(next_weekly_expiry(today))
