"""
Hebrew date formatting for the certificate header.

Renders a Gregorian date as a Hebrew calendar date in traditional numeral
notation, e.g. 31/12/2025 -> י"א בטבת תשפ"ו.

The calendar conversion itself (day, month name, year) comes from
calendar_utils.hebrew_calendar_date_of; this module only turns numbers into
letters and places the gershayim. Out-of-range values are rendered on a
best-effort basis and never raise.
"""

from datetime import date
from typing import Callable

from calendar_utils import HebrewCalendarDate, hebrew_calendar_date_of
from translations import (
    GEMATRIA,
    GERSHAYIM,
    HEBREW_MONTH_NAMES,
    YEAR_HUNDREDS_LETTERS,
    YEAR_PREFIX,
)

CalendarLookup = Callable[[date], HebrewCalendarDate]


def add_gershayim(numeral: str) -> str:
    """Insert a gershayim mark before the last character (numerals of length > 1 only)."""
    if len(numeral) > 1:
        return numeral[:-1] + GERSHAYIM + numeral[-1]
    return numeral


def hebrew_month_letters(month_name: str) -> str:
    """Hebrew spelling of a Hebrew calendar month; unknown names are returned unchanged."""
    return HEBREW_MONTH_NAMES.get(month_name, month_name)


def day_to_gematria(day: int) -> str:
    """
    Convert a day of the Hebrew month (1-30) to letters.

    Two-letter numerals get a gershayim between the letters (11 -> י"א);
    one-letter numerals are left bare (5 -> ה, 20 -> כ). Days outside the
    table are printed as plain decimal numbers.
    """
    if not 1 <= day < len(GEMATRIA):
        return str(day)

    numeral = GEMATRIA[day]
    if len(numeral) == 2:
        numeral = numeral[0] + GERSHAYIM + numeral[1]
    return numeral


def year_to_gematria(year: int) -> str:
    """
    Convert a Hebrew year to letters with gershayim, e.g. 5786 -> תשפ"ו.

    Only the hundreds digit (7 or 8) and the ones digit of the year within the
    millennium are rendered after the fixed תש prefix. The tens digit is not
    written, which only holds for a narrow range of years around 5786.
    Hundreds digits other than 7 and 8 produce no hundreds letter.
    """
    year_short = year - 5000
    hundreds = year_short // 100
    ones = year_short % 10

    numeral = YEAR_PREFIX + YEAR_HUNDREDS_LETTERS.get(hundreds, "")
    if ones > 0:
        numeral += GEMATRIA[ones]

    return add_gershayim(numeral)


def format_hebrew_calendar_date(hebrew_date: HebrewCalendarDate) -> str:
    """Render an already converted Hebrew calendar date as "<day> ב<month> <year>"."""
    day_hebrew = day_to_gematria(hebrew_date.day)
    month_hebrew = hebrew_month_letters(hebrew_date.month_name)
    year_hebrew = year_to_gematria(hebrew_date.year)
    return f"{day_hebrew} ב{month_hebrew} {year_hebrew}"


def format_hebrew_date(
    gregorian_date: date,
    calendar: CalendarLookup = hebrew_calendar_date_of,
) -> str:
    """
    Get the Hebrew date string for a given Gregorian date.

    Args:
        gregorian_date: The Gregorian date to convert
        calendar: Calendar conversion function (default: jewcal-backed lookup)

    Returns:
        Hebrew date string like 'י"א בטבת תשפ"ו'
    """
    return format_hebrew_calendar_date(calendar(gregorian_date))
