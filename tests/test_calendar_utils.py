"""
Unit tests for calendar helpers.

Tests cover:
- Gregorian date formatting (numeric, Hebrew month names)
- Relative dates
- Time-of-day greeting in Israel time
- Hebrew calendar conversion through jewcal
- Month name normalization
"""

import os
import sys
import unittest
from datetime import date, datetime

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytz

from calendar_utils import (
    HebrewCalendarDate,
    clear_jewcal_cache,
    days_ago,
    format_gregorian_with_hebrew_month,
    format_numeric_date,
    greeting_for_time,
    gregorian_month_name,
    hebrew_calendar_date_of,
    local_now,
)
from conftest import TEST_11_TEVET_5786, TEST_ROSH_HASHANA_5786
from hebrew_date import format_hebrew_date
from translations import GREETING_EVENING, GREETING_MORNING, HEBREW_MONTH_NAMES, normalize_month_name


class TestGregorianFormatting(unittest.TestCase):

    def test_numeric_date_zero_padded(self):
        self.assertEqual(format_numeric_date(date(2025, 3, 7)), "07/03/2025")
        self.assertEqual(format_numeric_date(date(2025, 12, 18)), "18/12/2025")

    def test_gregorian_month_names(self):
        self.assertEqual(gregorian_month_name(1), "ינואר")
        self.assertEqual(gregorian_month_name(12), "דצמבר")

    def test_gregorian_with_hebrew_month(self):
        self.assertEqual(format_gregorian_with_hebrew_month(date(2025, 12, 1)), "1 בדצמבר 2025")
        self.assertEqual(format_gregorian_with_hebrew_month(date(2026, 5, 14)), "14 במאי 2026")


class TestDaysAgo(unittest.TestCase):

    def test_six_days_ago(self):
        self.assertEqual(days_ago(6, date(2025, 12, 24)), date(2025, 12, 18))

    def test_crosses_year(self):
        self.assertEqual(days_ago(6, date(2026, 1, 3)), date(2025, 12, 28))

    def test_default_reference_is_today(self):
        self.assertEqual(days_ago(0), date.today())


class TestGreeting(unittest.TestCase):
    """Greeting uses Asia/Jerusalem local time (UTC+2 in December)."""

    def test_morning(self):
        self.assertEqual(greeting_for_time(datetime(2025, 12, 24, 8, 0)), GREETING_MORNING)

    def test_evening_after_local_noon(self):
        self.assertEqual(greeting_for_time(datetime(2025, 12, 24, 11, 0)), GREETING_EVENING)

    def test_aware_datetime(self):
        tz = pytz.timezone("Asia/Jerusalem")
        self.assertEqual(greeting_for_time(tz.localize(datetime(2025, 12, 24, 11, 59))), GREETING_MORNING)

    def test_local_now_is_aware(self):
        self.assertIsNotNone(local_now().tzinfo)


class TestJewcalConversion(unittest.TestCase):
    """Integration tests against the jewcal library."""

    def setUp(self):
        clear_jewcal_cache()

    def test_rosh_hashana_5786(self):
        result = hebrew_calendar_date_of(date.fromisoformat(TEST_ROSH_HASHANA_5786))
        self.assertIsInstance(result, HebrewCalendarDate)
        self.assertEqual(result.day, 1)
        self.assertEqual(result.year, 5786)
        self.assertEqual(result.month_name, "Tishrei")

    def test_month_name_is_known(self):
        result = hebrew_calendar_date_of(date.fromisoformat(TEST_11_TEVET_5786))
        self.assertIn(result.month_name, HEBREW_MONTH_NAMES)

    def test_full_hebrew_date_rosh_hashana(self):
        result = format_hebrew_date(date.fromisoformat(TEST_ROSH_HASHANA_5786))
        self.assertEqual(result, 'א בתשרי תשפ"ו')

    def test_full_hebrew_date_eleven_tevet(self):
        result = format_hebrew_date(date.fromisoformat(TEST_11_TEVET_5786))
        self.assertEqual(result, 'י"א בטבת תשפ"ו')


class TestNormalizeMonthName(unittest.TestCase):

    def test_canonical_unchanged(self):
        for name in HEBREW_MONTH_NAMES:
            self.assertEqual(normalize_month_name(name), name)

    def test_aliases(self):
        self.assertEqual(normalize_month_name("Teves"), "Tevet")
        self.assertEqual(normalize_month_name("Shevat"), "Sh'vat")
        self.assertEqual(normalize_month_name("Adar 2"), "Adar II")

    def test_whitespace_stripped(self):
        self.assertEqual(normalize_month_name("  Kislev "), "Kislev")


if __name__ == "__main__":
    unittest.main()
