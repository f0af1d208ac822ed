"""
Shared translation tables for Hebrew rendering.

This module provides the static lookup data used when printing dates on the certificate:
- Gematria numerals (1-30)
- Hebrew calendar month names (unvocalized)
- Gregorian month names in Hebrew
- Alternative month spellings produced by calendar libraries

All tables are built once at import time and never mutated.
"""

from typing import Dict, List

# ========= GEMATRIA =========
# Index is the number; index 0 has no numeral.
GEMATRIA: List[str] = [
    "", "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט",
    "י", "יא", "יב", "יג", "יד", "טו", "טז", "יז", "יח", "יט",
    "כ", "כא", "כב", "כג", "כד", "כה", "כו", "כז", "כח", "כט",
    "ל",
]

# Hundreds letters for the 58th and 59th centuries of the Hebrew calendar
YEAR_HUNDREDS_LETTERS: Dict[int, str] = {
    7: "פ",
    8: "צ",
}

# Written before every year numeral; thousands are not written
YEAR_PREFIX = "תש"

GERSHAYIM = '"'

# ========= HEBREW CALENDAR MONTHS =========
# Without nikkud, keyed by the canonical English month name
HEBREW_MONTH_NAMES: Dict[str, str] = {
    "Nisan": "ניסן",
    "Iyyar": "אייר",
    "Sivan": "סיון",
    "Tamuz": "תמוז",
    "Av": "אב",
    "Elul": "אלול",
    "Tishrei": "תשרי",
    "Cheshvan": "חשון",
    "Kislev": "כסלו",
    "Tevet": "טבת",
    "Sh'vat": "שבט",
    "Adar": "אדר",
    "Adar I": "אדר א",
    "Adar II": "אדר ב",
}

# Spelling variations seen from calendar libraries, mapped to the canonical names above
MONTH_NAME_ALIASES: Dict[str, str] = {
    "Nissan": "Nisan",
    "Iyar": "Iyyar",
    "Tammuz": "Tamuz",
    "Tishri": "Tishrei",
    "Marcheshvan": "Cheshvan",
    "Cheshvan": "Cheshvan",
    "Heshvan": "Cheshvan",
    "Chislev": "Kislev",
    "Teves": "Tevet",
    "Teveth": "Tevet",
    "Shevat": "Sh'vat",
    "Shvat": "Sh'vat",
    "Sh’vat": "Sh'vat",
    "Adar 1": "Adar I",
    "Adar Rishon": "Adar I",
    "Adar 2": "Adar II",
    "Adar Sheni": "Adar II",
}

# ========= GREGORIAN MONTHS =========
# Index is month - 1
GREGORIAN_MONTH_NAMES: List[str] = [
    "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
    "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
]

# ========= GREETINGS =========
GREETING_MORNING = "בוקר טוב"
GREETING_EVENING = "ערב טוב"


def normalize_month_name(name: str) -> str:
    """Map a calendar library's month spelling to the canonical name (unknown names pass through)."""
    clean_name = name.strip()
    return MONTH_NAME_ALIASES.get(clean_name, clean_name)
