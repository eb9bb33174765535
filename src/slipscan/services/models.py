"""
Service layer models - DTOs for scan operations.

These models represent the results of service operations, not domain entities.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List
from slipscan.domain.enums import Bank
from slipscan.domain.models import Transaction

@dataclass
class ScanResult:
    """
    Result of scanning one document.

    - Which records were extracted (duplicates included, already marked)
    - Which of them look like repeats of stored records
    - Whether the document was read as an itemized statement
    """
    transactions: List[Transaction] = field(default_factory=list)
    duplicates: List[Transaction] = field(default_factory=list)
    bank: Bank = Bank.UNKNOWN
    is_statement: bool = False
    source: str = ""

    @property
    def count(self) -> int:
        return len(self.transactions)

    @property
    def total(self) -> Decimal:
        """Sum of all extracted amounts"""
        return sum((t.amount for t in self.transactions), Decimal("0"))

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)

    @property
    def success(self) -> bool:
        """At least one record with a detected amount"""
        return any(t.amount > 0 for t in self.transactions)

    def __str__(self) -> str:
        "Human-readable summary"
        kind = "statement" if self.is_statement else "slip"
        lines = [
            f"Scan summary for {self.source or 'document'} ({self.bank.value} {kind}):",
            f" ✅ Transactions: {self.count}",
            f" 💰 Total: ฿{self.total:,.2f}",
        ]

        if self.duplicates:
            lines.append(f" ⚠️ Possible duplicates: {self.duplicate_count}")

        return "\n".join(lines)

    def __post_init__(self):
        """Duplicates must be a subset of the extracted records"""
        ids = {t.id for t in self.transactions}
        stray = [t for t in self.duplicates if t.id not in ids]
        if stray:
            raise ValueError(
                f"{len(stray)} duplicate(s) are not among the scanned transactions"
            )


@dataclass
class BatchSummary:
    """
    Summary of scanning a queue of documents, in queue order.
    """
    results: List[ScanResult] = field(default_factory=list)

    @property
    def transactions(self) -> List[Transaction]:
        return [t for result in self.results for t in result.transactions]

    @property
    def count(self) -> int:
        return sum(result.count for result in self.results)

    @property
    def total(self) -> Decimal:
        return sum((result.total for result in self.results), Decimal("0"))

    @property
    def duplicate_count(self) -> int:
        return sum(result.duplicate_count for result in self.results)

    def __str__(self) -> str:
        return (
            f"📊 Scanned {len(self.results)} document(s): "
            f"{self.count} transactions, ฿{self.total:,.2f}"
        )
