import re
from typing import List, Optional

from slipscan.extraction.base import Strategy, first_success
from slipscan.logging_setup import get_logger

logger = get_logger(__name__)

LABELLED_REFERENCE = re.compile(
    r"(?:เลขที่อ้างอิง|Ref(?:\.|\s)?\s*No\.?|Transaction ID|เลขที่รายการ|รหัสอ้างอิง)[:\s]*([A-Z0-9]{10,})",
    re.IGNORECASE,
)

BARE_REFERENCE = re.compile(r"(?<!\d)(\d{10,30})(?!\d)")


def by_label(text: str) -> Optional[str]:
    match = LABELLED_REFERENCE.search(text)
    return match.group(1).strip() if match else None


def by_digit_run(text: str) -> Optional[str]:
    match = BARE_REFERENCE.search(text)
    return match.group(1) if match else None


REFERENCE_STRATEGIES: List[Strategy] = [by_label, by_digit_run]


def extract_reference(text: str) -> Optional[str]:
    """
    Find the slip's reference / transaction number.

    A labelled value ("เลขที่รายการ: 2023120512345678") is preferred over
    any bare run of 10-30 digits.
    """
    reference = first_success(REFERENCE_STRATEGIES, text)
    if reference:
        logger.debug("Detected reference: %s", reference)
    return reference
