import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional
from slipscan.domain.enums import CandidateSource, TransactionType


def new_transaction_id() -> str:
    """Default id factory for records built by the scanners"""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Transaction:
    """Core domain model representing a single transaction"""
    amount: Decimal
    type: TransactionType
    category: str
    date: str # DD/MM/YYYY, Buddhist era
    note: str
    reference_id: Optional[str] = None
    receiver_name: Optional[str] = None
    id: str = field(default_factory=new_transaction_id)

    def with_note(self, note: str) -> "Transaction":
        """Return a copy carrying a different note"""
        return replace(self, note=note)

    def __repr__(self):
        sign = "+" if self.type == TransactionType.INCOME else "-"
        return f"Transaction({self.date}, {self.note[:30]}, {sign}฿{self.amount})"


@dataclass(frozen=True)
class AmountCandidate:
    """A scored guess at the transaction amount"""
    value: Decimal
    score: int
    source: CandidateSource

    @property
    def is_anchored(self) -> bool:
        return self.source != CandidateSource.SCAN
