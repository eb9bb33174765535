from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from slipscan.categorization import CategorizationEngine
from slipscan.domain.enums import Bank, TransactionType
from slipscan.domain.models import Transaction, new_transaction_id
from slipscan.extraction import (
    detect_bank,
    extract_amount,
    extract_date,
    extract_receiver,
    extract_reference,
    today_buddhist,
)
from slipscan.logging_setup import get_logger
from slipscan.parsers.statement import StatementParser
from slipscan.services.duplicates import is_duplicate, mark_duplicate
from slipscan.services.models import BatchSummary, ScanResult

logger = get_logger(__name__)

AMOUNT_NOT_FOUND_SUFFIX = "(ไม่พบยอดเงิน)"
LOTTERY_NOTE = "ซื้อสลากดิจิทัล"
TRANSFER_NOTE = "โอนเงิน"


class ScanService:
    """
    Turns recognised document text into transaction records.

    Flow per document:
        bank -> itemized statement rows (if any, done)
             -> else amount + receiver + reference + date -> category
             -> duplicate check against the caller's records

    The service holds no state between calls. Existing records and learned
    preferences are passed in by the caller, and nothing is persisted here.
    """

    def __init__(
        self,
        categorization_engine: Optional[CategorizationEngine] = None,
        statement_parser: Optional[StatementParser] = None,
        id_factory: Callable[[], str] = new_transaction_id,
    ):
        self._categorization_engine = categorization_engine
        self._statement_parser = statement_parser
        self.id_factory = id_factory

    @property
    def categorization_engine(self) -> CategorizationEngine:
        """Lazy-load categorization engine"""
        if self._categorization_engine is None:
            self._categorization_engine = CategorizationEngine()
        return self._categorization_engine

    @property
    def statement_parser(self) -> StatementParser:
        if self._statement_parser is None:
            self._statement_parser = StatementParser(
                self.categorization_engine, self.id_factory
            )
        return self._statement_parser

    def scan_text(
        self,
        text: str,
        existing: Sequence[Transaction] = (),
        preferences: Optional[Mapping[str, str]] = None,
        index: int = 1,
        source: str = "",
    ) -> ScanResult:
        """
        Scan one document's recognised text.

        Args:
            text: OCR output (may be empty or garbage)
            existing: Records the caller already stores, for duplicate checks
            preferences: Learned receiver -> category snapshot
            index: 1-based position in the scan queue, used in placeholder notes
            source: Label for the document (file name), informational only

        Returns:
            A ScanResult. Possible duplicates are kept and their notes
            prefixed with "[ซ้ำ?]".
        """
        text = text or ""
        preferences = preferences or {}

        bank = detect_bank(text)
        logger.debug("Detected bank: %s", bank.value)

        rows = self.statement_parser.parse(text, preferences)
        if rows:
            transactions = rows
            is_statement = True
        else:
            transactions = [self._scan_slip(text, bank, preferences, index)]
            is_statement = False

        checked: List[Transaction] = []
        duplicates: List[Transaction] = []
        for txn in transactions:
            if is_duplicate(txn, existing):
                txn = mark_duplicate(txn)
                duplicates.append(txn)
            checked.append(txn)

        return ScanResult(
            transactions=checked,
            duplicates=duplicates,
            bank=bank,
            is_statement=is_statement,
            source=source,
        )

    def scan_many(
        self,
        texts: Iterable[str],
        existing: Sequence[Transaction] = (),
        preferences: Optional[Mapping[str, str]] = None,
    ) -> BatchSummary:
        """
        Scan a queue of documents one after another.

        Records from earlier documents in the queue count as existing for
        later ones, so the same slip photographed twice is flagged.
        """
        seen: List[Transaction] = list(existing)
        results: List[ScanResult] = []

        for index, text in enumerate(texts, start=1):
            result = self.scan_text(text, seen, preferences, index=index)
            results.append(result)
            seen.extend(result.transactions)

        return BatchSummary(results=results)

    def _scan_slip(
        self,
        text: str,
        bank: Bank,
        preferences: Mapping[str, str],
        index: int,
    ) -> Transaction:
        """Build the single record of a payment slip"""
        amount = extract_amount(text, bank)
        receiver = extract_receiver(text)
        reference = extract_reference(text)
        slip_date = extract_date(text) or today_buddhist()

        category = self.categorization_engine.categorize(
            text,
            TransactionType.EXPENSE,
            receiver=receiver,
            preferences=preferences,
        )

        note = self._synthesize_note(text, receiver, index)
        if amount == 0:
            note = f"{note} {AMOUNT_NOT_FOUND_SUFFIX}"

        return Transaction(
            id=self.id_factory(),
            amount=amount,
            type=TransactionType.EXPENSE,
            category=category,
            date=slip_date,
            note=note,
            reference_id=reference,
            receiver_name=receiver,
        )

    def _synthesize_note(self, text: str, receiver: Optional[str], index: int) -> str:
        if receiver:
            return receiver
        if "สลาก" in text or "GLO" in text:
            return LOTTERY_NOTE
        if "โอนเงิน" in text or "Transfer" in text:
            return TRANSFER_NOTE
        return f"สแกนจากสลิป #{index}"
