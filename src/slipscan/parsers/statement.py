import re
from decimal import Decimal
from typing import List, Mapping, Optional, Tuple

from slipscan.domain.enums import TransactionType
from slipscan.domain.models import Transaction
from slipscan.extraction.amount import AMOUNT_KEYWORDS, BANK_AMOUNT_KEYWORDS
from slipscan.extraction.dates import extract_date, today_buddhist
from slipscan.logging_setup import get_logger
from slipscan.parsers.base import TextParser

logger = get_logger(__name__)

# Well-known merchants, checked in order. First marker found wins.
MERCHANT_LABELS: List[Tuple[Tuple[str, ...], str]] = [
    (("PT ", "PT."), "เติมน้ำมัน PT"),
    (("SHELL",), "เติมน้ำมัน Shell"),
    (("BANGCHAK",), "เติมน้ำมัน บางจาก"),
    (("PTT",), "เติมน้ำมัน PTT"),
    (("CALTEX",), "เติมน้ำมัน Caltex"),
    (("ESSO",), "เติมน้ำมัน Esso"),
    (("TOYOTA",), "เช็ครถ TOYOTA"),
    (("ALLIANZ", "KGIB"), "ประกัน Allianz"),
    (("MSIG",), "ประกัน MSIG"),
    (("BANGKOK LIFE",), "ประกัน Bangkok Life"),
    (("7-ELEVEN",), "7-Eleven"),
    (("LOTUS'S", "LOTUS"), "Lotus"),
    (("BIGC",), "BigC"),
    (("WATSON",), "Watson"),
    (("CJ",), "CJ"),
    (("CP",), "CP"),
]


def simplify_merchant_name(name: str) -> str:
    """
    Map statement spellings of well-known merchants to a display label.

    Example:
        >>> simplify_merchant_name("SHELL RAMA 9 BANGKOK")
        'เติมน้ำมัน Shell'
    """
    upper_name = name.upper()
    for markers, label in MERCHANT_LABELS:
        if any(marker in upper_name for marker in markers):
            return label
    return name


class StatementParser(TextParser):
    """
    Parser for itemized statements (credit card bills, e-wallet histories).

    Finds every "description  1,234.56 บาท" row, left to right and
    non-overlapping, and turns each into its own expense.

    Handles:
    - Leading OCR'd posting dates ("05 ธ.ค. SHELL ...")
    - Optional currency suffix (บาท, THB, and common OCR misreads)
    - Summary lines ("ยอดรวม 1,234.00") which are not rows

    Example:
        parser = StatementParser()
        transactions = parser.parse(ocr_text, preferences)
    """

    ROW_PATTERN = re.compile(
        r"([ก-๙a-zA-Z0-9_. \t()\-:/&',*+]+?)[ \t]+(\d[\d,]*\.\d{2})(?!\d)(?![ \t]*น\.)[ \t]*(?:บาท|THB|บาก|บ|ฯ)?",
        re.IGNORECASE,
    )

    # "05 ธ.ค." or "05 ธ.ค. 66" glued in front of the description
    LEADING_DATE = re.compile(r"^\d{1,2}\s*(?:[ก-๙]{1,3}\.\s*)+(?:\d{2,4}\s+)?")

    # Slip and statement lines that carry a total, not a purchase
    SUMMARY_LABELS = tuple(
        k.lower()
        for k in AMOUNT_KEYWORDS
        + [kw for kws in BANK_AMOUNT_KEYWORDS.values() for kw in kws]
        + ["จำนวน", "ยอดเงิน", "ค่าธรรมเนียม", "fee", "ยอดคงเหลือ", "balance"]
    )

    # Thai labels match as prefixes, English ones only as whole words
    THAI_SUMMARY_LABELS = tuple(label for label in SUMMARY_LABELS if not label.isascii())
    ENGLISH_SUMMARY_WORDS = frozenset(
        word for label in SUMMARY_LABELS if label.isascii() for word in label.split()
    ) | {"due", "baht", "thb"}

    # "เวลา 14.32" is a time of day
    TIME_LABELS = ("เวลา", "time")

    MIN_NAME_LENGTH = 3

    NOTE_SUFFIX = "(จ่ายบัตร)"

    def parse(
        self,
        text: str,
        preferences: Optional[Mapping[str, str]] = None,
    ) -> List[Transaction]:
        """
        Parse every itemized row.

        Args:
            text: Recognised statement text
            preferences: Learned receiver -> category snapshot

        Returns:
            One expense per row in document order, all dated with the
            document's date (or today when it has none)
        """
        if not text:
            return []

        preferences = preferences or {}
        statement_date = extract_date(text) or today_buddhist()

        transactions = []
        for match in self.ROW_PATTERN.finditer(text):
            txn = self._parse_row(match, statement_date, preferences)
            if txn:
                transactions.append(txn)

        if transactions:
            logger.debug("Statement rows found: %d", len(transactions))

        return transactions

    def _clean_name(self, raw_name: str) -> str:
        name = raw_name.strip()
        return self.LEADING_DATE.sub("", name).strip()

    def _is_summary_label(self, name: str) -> bool:
        label = name.strip(" :-").lower()
        if label.startswith(self.THAI_SUMMARY_LABELS):
            return True

        words = label.split()
        return bool(words) and all(
            word.strip(":()") in self.ENGLISH_SUMMARY_WORDS
            or word.startswith(self.THAI_SUMMARY_LABELS)
            for word in words
        )

    def _is_time_of_day(self, name: str) -> bool:
        return name.lower().rstrip(" :").endswith(self.TIME_LABELS)

    def _parse_row(
        self,
        match: re.Match,
        statement_date: str,
        preferences: Mapping[str, str],
    ) -> Optional[Transaction]:
        """
        Build a Transaction from a row match.

        Returns:
            Transaction, or None for rows that are too short, summary
            lines or zero amounts
        """
        name = self._clean_name(match.group(1))
        amount = Decimal(match.group(2).replace(",", ""))

        if len(name) < self.MIN_NAME_LENGTH or self._is_summary_label(name):
            return None

        if self._is_time_of_day(name):
            return None

        if amount <= 0:
            return None

        category = self.categorization_engine.categorize(
            name,
            TransactionType.EXPENSE,
            receiver=name,
            preferences=preferences,
        )

        return Transaction(
            id=self.id_factory(),
            amount=amount,
            type=TransactionType.EXPENSE,
            category=category,
            date=statement_date,
            note=f"{simplify_merchant_name(name)} {self.NOTE_SUFFIX}",
            receiver_name=name,
        )

    def __repr__(self) -> str:
        return "StatementParser()"
