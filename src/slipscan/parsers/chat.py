import re
from decimal import Decimal
from typing import List, Mapping, Optional, Tuple

from slipscan.categorization import categories
from slipscan.domain.enums import TransactionType
from slipscan.domain.models import Transaction
from slipscan.extraction.dates import today_buddhist
from slipscan.parsers.base import TextParser


INCOME_WORDS = [
    "เงินเดือน", "ได้เงิน", "เข้า", "รายรับ", "โอนเข้า", "ถอนเงิน", "ค่าคอม",
    "รับ", "รับเงิน", "ขาย", "ขายของ", "ขายได้", "กำไร", "โบนัส", "ทิป",
    "ถูกหวย", "สลาก", "ปันผล", "มรดก", "คืนเงิน",
]

# "หมวด<word>" picks the category explicitly. Checked in order.
CATEGORY_ALIASES: List[Tuple[str, str]] = [
    ("อาหาร", categories.FOOD),
    ("กิน", categories.FOOD),
    ("ทอด", categories.FOOD),
    ("ย่าง", categories.FOOD),
    ("ปิ้ง", categories.FOOD),
    ("เดินทาง", categories.TRANSPORT),
    ("รถ", categories.TRANSPORT),
    ("จำเป็น", categories.ESSENTIALS),
    ("ใช้จ่าย", categories.ESSENTIALS),
    ("สุขภาพ", categories.HEALTH),
    ("ยา", categories.HEALTH),
    ("หนี้", categories.CREDIT_LOAN),
    ("บัตร", categories.CREDIT_LOAN),
    ("บันเทิง", categories.ENTERTAINMENT),
    ("เกม", categories.ENTERTAINMENT),
    ("ช้อปปิ้ง", categories.SHOPPING),
    ("ซื้อของ", categories.SHOPPING),
    ("บ้าน", categories.ESSENTIALS),
    ("น้ำไฟ", categories.UTILITIES),
]

NEW_INCOME_NOTE = "รายรับเพิ่มขึ้น"
NEW_EXPENSE_NOTE = "รายจ่ายใหม่"


class ChatParser(TextParser):
    """
    Parser for short typed entries such as "กินข้าว 60 บาท".

    - amount: the first number in the sentence
    - direction: expense unless an income word appears
    - category: keyword scoring, overridden by an explicit "หมวด..." marker
    - note: the sentence without numbers, currency words and the marker
    """

    AMOUNT = re.compile(r"\d[\d,]*(?:\.\d+)?")
    NUMBERS = re.compile(r"\d[\d,.]*")
    CURRENCY_WORDS = re.compile(r"บาท|บ\.")
    CATEGORY_MARKER = re.compile(r"หมวด\s*([ก-๙a-zA-Z]+)")

    def parse(
        self,
        text: str,
        preferences: Optional[Mapping[str, str]] = None,
    ) -> List[Transaction]:
        """Parse a sentence; returns [] when it holds no amount"""
        txn = self.parse_sentence(text)
        return [txn] if txn else []

    def parse_sentence(self, text: str) -> Optional[Transaction]:
        """
        Parse one sentence into a transaction dated today.

        Returns:
            Transaction, or None when there is no (non-zero) amount

        Example:
            >>> ChatParser().parse_sentence("กินข้าว 60 บาท").category
            'อาหารและเครื่องดื่ม'
        """
        if not text:
            return None

        amount = self._parse_amount(text)
        if amount is None:
            return None

        transaction_type = self._parse_type(text)

        return Transaction(
            id=self.id_factory(),
            amount=amount,
            type=transaction_type,
            category=self._parse_category(text, transaction_type),
            date=today_buddhist(),
            note=self._parse_note(text, transaction_type),
        )

    def _parse_amount(self, text: str) -> Optional[Decimal]:
        match = self.AMOUNT.search(text)
        if not match:
            return None

        amount = Decimal(match.group(0).replace(",", ""))
        return amount if amount > 0 else None

    def _parse_type(self, text: str) -> TransactionType:
        if any(word in text for word in INCOME_WORDS):
            return TransactionType.INCOME
        return TransactionType.EXPENSE

    def _parse_category(self, text: str, transaction_type: TransactionType) -> str:
        category = self.categorization_engine.categorize(text, transaction_type)

        marker = self.CATEGORY_MARKER.search(text)
        if marker:
            keyword = marker.group(1)
            for alias, aliased_category in CATEGORY_ALIASES:
                if alias in keyword:
                    return aliased_category

        return category

    def _parse_note(self, text: str, transaction_type: TransactionType) -> str:
        note = self.NUMBERS.sub("", text)
        note = self.CURRENCY_WORDS.sub("", note)
        note = self.CATEGORY_MARKER.sub("", note)
        note = re.sub(r"\s+", " ", note).strip()

        if not note:
            return NEW_INCOME_NOTE if transaction_type == TransactionType.INCOME else NEW_EXPENSE_NOTE
        return note

    def __repr__(self) -> str:
        return "ChatParser()"
