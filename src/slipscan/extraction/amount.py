"""
Amount extraction for OCR'd slips.

A slip carries many numbers (dates, times, account digits, reference
numbers, fees) and only one of them is the amount. Every plausible number
becomes an AmountCandidate with a heuristic score:

    keyword-anchored  100   "ยอดชำระ: 1,234.50", "Amount 60.00"
    unit-anchored      80   "60.00 บาท", "120 THB"
    scanned            50   +30 decimal-formatted, +20 unit seen anywhere,
                            -50 whole number under 10

Anchored candidates beat scanned ones regardless of score; among the rest the
ranking is (score desc, value desc).
"""
import re
from decimal import Decimal
from typing import List, Optional

from slipscan.domain.enums import Bank, CandidateSource
from slipscan.domain.models import AmountCandidate
from slipscan.logging_setup import get_logger

logger = get_logger(__name__)

NUMBER_PATTERN = r"\d[\d,]*(?:\.\d+)?"

AMOUNT_KEYWORDS = [
    "ยอดชำระทั้งหมด",
    "ยอดรวม",
    "ยอดชำระ",
    "จำนวนเงิน",
    "amount",
    "total",
    "ชำระเงิน",
    "paid amount",
]

BANK_AMOUNT_KEYWORDS = {
    Bank.KBANK: ["จำนวน:"],
    Bank.SCB: ["จำนวนเงิน (Baht)"],
}

UNIT_TOKENS = ["บาท", "baht", "thb", "฿"]

KEYWORD_SCORE = 100
UNIT_SCORE = 80
SCAN_BASE_SCORE = 50
DECIMAL_BONUS = 30
UNIT_PRESENT_BONUS = 20
SMALL_WHOLE_PENALTY = 50

MAX_PLAUSIBLE_AMOUNT = Decimal("1000000")

_UNIT_ALTERNATION = "|".join(re.escape(u) for u in UNIT_TOKENS)
_UNIT_ANCHORED = re.compile(rf"({NUMBER_PATTERN})\s*(?:{_UNIT_ALTERNATION})", re.IGNORECASE)
_UNIT_ANYWHERE = re.compile(rf"[\d,.]+\s*(?:{_UNIT_ALTERNATION})", re.IGNORECASE)
_ANY_NUMBER = re.compile(NUMBER_PATTERN)


def keywords_for(bank: Bank) -> List[str]:
    """Amount keywords, extended with the bank's own label variants"""
    # Longer labels first so "จำนวนเงิน (Baht)" wins over "จำนวนเงิน"
    keywords = AMOUNT_KEYWORDS + BANK_AMOUNT_KEYWORDS.get(bank, [])
    return sorted(keywords, key=len, reverse=True)


def _to_decimal(raw: str) -> Decimal:
    return Decimal(raw.replace(",", ""))


def _keyword_candidate(text: str, bank: Bank) -> Optional[AmountCandidate]:
    alternation = "|".join(re.escape(k) for k in keywords_for(bank))
    pattern = re.compile(rf"(?:{alternation})[\s:\-฿]*({NUMBER_PATTERN})", re.IGNORECASE)

    match = pattern.search(text)
    if not match:
        return None

    value = _to_decimal(match.group(1))
    if value <= 0:
        return None
    return AmountCandidate(value, KEYWORD_SCORE, CandidateSource.KEYWORD)


def _unit_candidate(text: str) -> Optional[AmountCandidate]:
    match = _UNIT_ANCHORED.search(text)
    if not match:
        return None

    value = _to_decimal(match.group(1))
    if value <= 0:
        return None
    return AmountCandidate(value, UNIT_SCORE, CandidateSource.UNIT)


def _scanned_candidates(text: str) -> List[AmountCandidate]:
    unit_present = _UNIT_ANYWHERE.search(text) is not None
    candidates = []

    for match in _ANY_NUMBER.finditer(text):
        raw = match.group(0)
        value = _to_decimal(raw)
        if value <= 0 or value > MAX_PLAUSIBLE_AMOUNT:
            continue

        is_decimal = "." in raw
        score = SCAN_BASE_SCORE
        if is_decimal:
            score += DECIMAL_BONUS
        if unit_present:
            score += UNIT_PRESENT_BONUS
        # Counters like "1/3" or "2 items" are rarely the amount
        if value < 10 and not is_decimal:
            score -= SMALL_WHOLE_PENALTY

        candidates.append(AmountCandidate(value, score, CandidateSource.SCAN))

    return candidates


def find_amount_candidates(text: str, bank: Bank = Bank.UNKNOWN) -> List[AmountCandidate]:
    """
    Collect every amount guess in the text, best first.

    Args:
        text: Recognised slip text
        bank: Detected bank, extends the keyword list

    Returns:
        Candidates ordered by (score desc, value desc)
    """
    candidates: List[AmountCandidate] = []

    keyword = _keyword_candidate(text, bank)
    if keyword:
        candidates.append(keyword)

    unit = _unit_candidate(text)
    if unit:
        candidates.append(unit)

    candidates.extend(_scanned_candidates(text))

    return sorted(candidates, key=lambda c: (c.score, c.value), reverse=True)


def extract_amount(text: str, bank: Bank = Bank.UNKNOWN) -> Decimal:
    """
    Pick the most plausible transaction amount.

    Returns:
        The amount, or Decimal("0") when nothing was found. Zero means
        "extraction failed", never a real zero-value transaction.
    """
    candidates = find_amount_candidates(text, bank)
    logger.debug("Amount candidates: %s", candidates[:5])

    if not candidates:
        return Decimal("0")

    for candidate in candidates:
        if candidate.is_anchored:
            return candidate.value

    return candidates[0].value
