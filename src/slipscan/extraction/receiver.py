"""
Counterparty (receiver/merchant) extraction.

Slip layouts differ per bank, so several strategies are tried in priority
order and the first hit wins:

1. phrase-anchored: the words after "ไปยัง" / "To" / "จ่ายบิล" ...
2. account layout: the line above the second masked account number
3. adjacency: a name line directly above a masked account number
4. biller: the text between a "to" marker and "Biller ID"
"""
import re
from typing import List, Optional

from slipscan.extraction.bank import BANK_MARKERS
from slipscan.extraction.base import Strategy, first_success
from slipscan.logging_setup import get_logger

logger = get_logger(__name__)

_NAME_CHARS = r"[ก-๙a-zA-Z0-9 \t./\-()#&']"
# A name runs to the end of its line or up to the next label on that line
_STOP = r"(?=[ \t]*(?:[\r\n]|$|บัญชี|เลขที่|Biller|Account|Number|สำเร็จ))"

PHRASE_PATTERNS = [
    re.compile(rf"ไปยัง\s*:?[ \t]*({_NAME_CHARS}+?){_STOP}"),
    re.compile(rf"\bTo\b\s*:?[ \t]*({_NAME_CHARS}+?){_STOP}"),
    re.compile(rf"รับเงินโดย\s*:?[ \t]*({_NAME_CHARS}+?){_STOP}"),
    re.compile(rf"Transfer to\s*:?[ \t]*({_NAME_CHARS}+?){_STOP}", re.IGNORECASE),
    re.compile(rf"ชำระค่า\s*({_NAME_CHARS}+?){_STOP}"),
    re.compile(rf"จ่ายบิล\s*:?[ \t]*({_NAME_CHARS}+?){_STOP}"),
]

# Account-type words that sometimes follow "To" instead of a name
GENERIC_ACCOUNT_WORDS = {"ออมทรัพย์", "savings", "account", "bank"}

# xxx-x-xxxxx-x, with digits or X masking
MASKED_ACCOUNT = re.compile(
    r"[Xx\d]{3}-[Xx\d]-[Xx\d]{5}-[Xx\d]|[Xx\d]{3}-[Xx\d]{1,2}-[Xx\d]{4,6}-[Xx\d]"
)

BOILERPLATE_MARKERS = ["ไปยัง", "To", "โอนเงิน", "เงินสด", "สำเร็จ"] + [
    marker for _, markers in BANK_MARKERS for marker in markers
]

ACCOUNT_LINE = re.compile(r"^[ \t]*[Xx\d]{3}-[Xx\d]-[Xx\d]{5}-[Xx\d]", re.MULTILINE)
NAME_LINE = re.compile(r"[ก-๙a-zA-Z ./]+")
# Header noise (bank name, "โอนเงินสำเร็จ") sits in the first few lines
MIN_NAME_OFFSET = 50

BILLER = re.compile(
    r"(?:ไปยัง|\bTo\b)[ \t:]*(?:\r?\n[ \t]*)?"
    r"([ก-๙a-zA-Z0-9 .]*[ก-๙a-zA-Z0-9.])[ \t]*(?:\r?\n[ \t]*)?Biller ID"
)

MIN_NAME_LENGTH = 3


def clean_name(name: str) -> str:
    """Drop masked accounts and embedded 3-5 digit groups, then tidy spaces"""
    name = MASKED_ACCOUNT.sub("", name)
    name = re.sub(r"(?<!\d)\d{3,5}(?!\d)", "", name)
    return re.sub(r"\s+", " ", name).strip()


def _accept(name: str) -> Optional[str]:
    cleaned = clean_name(name)
    if len(cleaned) < MIN_NAME_LENGTH:
        return None
    return cleaned


def by_phrase(text: str) -> Optional[str]:
    for pattern in PHRASE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        accepted = _accept(match.group(1))
        if accepted and accepted.lower() not in GENERIC_ACCOUNT_WORDS:
            return accepted
    return None


def by_account_layout(text: str) -> Optional[str]:
    accounts = list(MASKED_ACCOUNT.finditer(text))
    if len(accounts) < 2:
        return None

    lines_before = re.split(r"[\n\r]+", text[:accounts[1].start()])
    for line in reversed(lines_before):
        line = line.strip()
        if len(line) < MIN_NAME_LENGTH:
            continue
        # "ธ.ไทยพาณิชย์" style bank labels sit between names and accounts
        if line.startswith("ธ.") or any(marker in line for marker in BOILERPLATE_MARKERS):
            continue
        return _accept(line)

    return None


def by_adjacent_account(text: str) -> Optional[str]:
    for account in ACCOUNT_LINE.finditer(text):
        # Blank lines between the name and the account are allowed
        before = text[:account.start()].rstrip()
        line_start = max(before.rfind("\n"), before.rfind("\r")) + 1
        name = before[line_start:].strip()

        if line_start <= MIN_NAME_OFFSET or not NAME_LINE.fullmatch(name):
            continue

        accepted = _accept(name)
        if accepted:
            return accepted
    return None


def by_biller(text: str) -> Optional[str]:
    match = BILLER.search(text)
    if not match:
        return None
    return _accept(match.group(1))


RECEIVER_STRATEGIES: List[Strategy] = [
    by_phrase,
    by_account_layout,
    by_adjacent_account,
    by_biller,
]


def extract_receiver(text: str) -> Optional[str]:
    """
    Find the counterparty name in slip text.

    Returns:
        Cleaned name, or None if no strategy produced one longer than
        two characters
    """
    receiver = first_success(RECEIVER_STRATEGIES, text)
    if receiver:
        logger.debug("Detected receiver: %s", receiver)
    return receiver
