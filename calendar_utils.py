"""
Calendar Utility Functions

This module wraps the jewcal library for Hebrew calendar lookups and provides the
Gregorian date helpers used on the certificate (numeric dates, dates with Hebrew
month names, relative dates and the time-of-day greeting).
"""

from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import NamedTuple, Optional

import pytz
from jewcal import JewCal

from config import TZID
from translations import (
    GREETING_EVENING,
    GREETING_MORNING,
    GREGORIAN_MONTH_NAMES,
    normalize_month_name,
)


class HebrewCalendarDate(NamedTuple):
    """A date in the Hebrew calendar as reported by the calendar library."""

    day: int
    month_name: str
    year: int


@lru_cache(maxsize=128)
def _get_jewcal_cached(gregorian_date: date, diaspora: bool = False) -> JewCal:
    """Get a cached JewCal instance for a specific date (without location).

    Args:
        gregorian_date: The Gregorian date
        diaspora: Whether to use diaspora customs (default: False for Israel)

    Returns:
        A JewCal instance for the given date
    """
    return JewCal(gregorian_date=gregorian_date, diaspora=diaspora)


def clear_jewcal_cache() -> None:
    """Clear the JewCal cache. Useful for testing."""
    _get_jewcal_cached.cache_clear()


def hebrew_calendar_date_of(gregorian_date: date) -> HebrewCalendarDate:
    """
    Convert a Gregorian date to its Hebrew calendar day, month name and year.

    The month name is normalized to the canonical English spelling used by
    translations.HEBREW_MONTH_NAMES.

    Args:
        gregorian_date: The Gregorian date to convert

    Returns:
        HebrewCalendarDate for the given date
    """
    jewish_date = _get_jewcal_cached(gregorian_date, False).jewish_date

    month_name = getattr(jewish_date, "month_name", None)
    if not isinstance(month_name, str):
        # String form is "<day> <month name> <year>", month names may contain spaces
        parts = str(jewish_date).split()
        month_name = " ".join(parts[1:-1]) if len(parts) >= 3 else ""

    return HebrewCalendarDate(
        day=jewish_date.day,
        month_name=normalize_month_name(month_name),
        year=jewish_date.year,
    )


# ========= GREGORIAN HELPERS =========
def format_numeric_date(d: date) -> str:
    """Format a date as DD/MM/YYYY."""
    return f"{d.day:02d}/{d.month:02d}/{d.year}"


def gregorian_month_name(month: int) -> str:
    """Hebrew name of a Gregorian month (1-12)."""
    return GREGORIAN_MONTH_NAMES[month - 1]


def format_gregorian_with_hebrew_month(d: date) -> str:
    """
    Format a Gregorian date with the Hebrew month name.

    Example: date(2025, 12, 1) -> "1 בדצמבר 2025"
    """
    return f"{d.day} ב{gregorian_month_name(d.month)} {d.year}"


def days_ago(days: int, reference: Optional[date] = None) -> date:
    """
    Get the date a number of days before a reference date.

    Args:
        days: Number of days to go back
        reference: The starting date (default: today)

    Returns:
        The earlier date
    """
    if reference is None:
        reference = date.today()
    return reference - timedelta(days=days)


def local_now(now: Optional[datetime] = None) -> datetime:
    """Current time (or the given aware/naive-UTC time) in the configured timezone."""
    tz = pytz.timezone(TZID)
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(tz)


def greeting_for_time(now: Optional[datetime] = None) -> str:
    """Morning greeting before noon in Israel time, evening greeting otherwise."""
    return GREETING_MORNING if local_now(now).hour < 12 else GREETING_EVENING
