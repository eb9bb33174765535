"""
Date parsing into canonical Buddhist-era "DD/MM/YYYY".

Three notations show up on Thai slips and statements:

    05/12/2023, 5/12/2566       slash form
    5 ธ.ค. 66, 5 ธันวาคม 2566    Thai month
    5 Dec 23, 05 December 2023  English month

Forms are tried in that order; the first one that matches anywhere in the
text wins.
"""
import re
from datetime import date
from typing import Dict, List, Optional

from slipscan.extraction.base import Strategy, first_success
from slipscan.logging_setup import get_logger

logger = get_logger(__name__)

BUDDHIST_ERA_OFFSET = 543
# Years below this are Gregorian (2023 -> 2566)
BUDDHIST_ERA_THRESHOLD = 2400

THAI_MONTHS: Dict[str, int] = {
    "ม.ค.": 1, "ก.พ.": 2, "มี.ค.": 3, "เม.ย.": 4, "พ.ค.": 5, "มิ.ย.": 6,
    "ก.ค.": 7, "ส.ค.": 8, "ก.ย.": 9, "ต.ค.": 10, "พ.ย.": 11, "ธ.ค.": 12,
    "มกราคม": 1, "กุมภาพันธ์": 2, "มีนาคม": 3, "เมษายน": 4, "พฤษภาคม": 5, "มิถุนายน": 6,
    "กรกฎาคม": 7, "สิงหาคม": 8, "กันยายน": 9, "ตุลาคม": 10, "พฤศจิกายน": 11, "ธันวาคม": 12,
}

ENGLISH_MONTHS: Dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

SLASH_DATE = re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4})(?!\d)")

_THAI_MONTH_ALTERNATION = "|".join(
    re.escape(m) for m in sorted(THAI_MONTHS, key=len, reverse=True)
)
THAI_DATE = re.compile(rf"(?<!\d)(\d{{1,2}})\s*({_THAI_MONTH_ALTERNATION})\s*(\d{{2,4}})(?!\d)")

ENGLISH_DATE = re.compile(r"(?<!\d)(\d{1,2})\s*([a-zA-Z]{3,})\.?,?\s*(\d{2,4})(?!\d)")


def format_date(day: int, month: int, year: int) -> str:
    return f"{day:02d}/{month:02d}/{year}"


def to_buddhist_year(year: int) -> int:
    return year + BUDDHIST_ERA_OFFSET if year < BUDDHIST_ERA_THRESHOLD else year


def today_buddhist(today: Optional[date] = None) -> str:
    """Ingestion date in canonical form, used when a document has no date"""
    today = today or date.today()
    return format_date(today.day, today.month, today.year + BUDDHIST_ERA_OFFSET)


def _valid(day: int, month: int) -> bool:
    return 1 <= day <= 31 and 1 <= month <= 12


def parse_slash_date(text: str) -> Optional[str]:
    for match in SLASH_DATE.finditer(text):
        day, month, year = (int(g) for g in match.groups())
        if _valid(day, month):
            return format_date(day, month, to_buddhist_year(year))
    return None


def parse_thai_date(text: str) -> Optional[str]:
    for match in THAI_DATE.finditer(text):
        day = int(match.group(1))
        month = THAI_MONTHS[match.group(2)]
        year = int(match.group(3))
        if not _valid(day, month):
            continue

        if year < 100:
            # "66" is shorthand for 2566
            year += 2500
        else:
            year = to_buddhist_year(year)
        return format_date(day, month, year)
    return None


def parse_english_date(text: str) -> Optional[str]:
    for match in ENGLISH_DATE.finditer(text):
        month = ENGLISH_MONTHS.get(match.group(2)[:3].lower())
        day = int(match.group(1))
        if month is None or not _valid(day, month):
            continue

        year = int(match.group(3))
        if year < 100:
            year += 2000
        return format_date(day, month, year + BUDDHIST_ERA_OFFSET)
    return None


DATE_STRATEGIES: List[Strategy] = [
    parse_slash_date,
    parse_thai_date,
    parse_english_date,
]


def extract_date(text: str) -> Optional[str]:
    """
    Normalise the first recognisable date in the text.

    Returns:
        "DD/MM/YYYY" in the Buddhist era, or None. Callers substitute
        today_buddhist() when None.
    """
    parsed = first_success(DATE_STRATEGIES, text)
    if parsed:
        logger.debug("Detected date: %s", parsed)
    return parsed
