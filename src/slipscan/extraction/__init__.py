"""
Field extractors for recognised slip text.

Every extractor is a pure function of the text and never raises on
malformed input; "not found" is Decimal("0") for amounts and None for
everything else.

Quick Start:
    >>> from slipscan.extraction import detect_bank, extract_amount, extract_date
    >>>
    >>> bank = detect_bank(text)
    >>> amount = extract_amount(text, bank)
    >>> slip_date = extract_date(text)
"""
from slipscan.extraction.amount import extract_amount, find_amount_candidates
from slipscan.extraction.bank import detect_bank
from slipscan.extraction.base import first_success
from slipscan.extraction.dates import extract_date, today_buddhist
from slipscan.extraction.receiver import extract_receiver
from slipscan.extraction.reference import extract_reference

__all__ = [
    "detect_bank",
    "extract_amount",
    "find_amount_candidates",
    "extract_receiver",
    "extract_reference",
    "extract_date",
    "today_buddhist",
    "first_success",
]
