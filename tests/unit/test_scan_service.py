import pytest
from decimal import Decimal

from slipscan.categorization import categories
from slipscan.categorization.categorizer import CategorizationEngine
from slipscan.domain.enums import Bank, TransactionType
from slipscan.domain.models import Transaction
from slipscan.services.duplicates import DUPLICATE_MARKER
from slipscan.services.models import BatchSummary, ScanResult
from slipscan.services.scan_service import ScanService

@pytest.fixture
def mock_engine(mocker) -> CategorizationEngine:
    """Create a mock engine"""
    engine = mocker.Mock(spec=CategorizationEngine)
    engine.categorize.return_value = categories.OTHER
    return engine

@pytest.fixture
def mocked_service(mock_engine) -> ScanService:
    """Service with mocked engine and predictable ids"""
    ids = iter(f"txn-{i}" for i in range(1, 100))
    return ScanService(categorization_engine=mock_engine, id_factory=lambda: next(ids))


@pytest.mark.unit
class TestScanSlip:
    """Test single-slip assembly"""

    def test_kbank_slip(self, service: ScanService, kbank_slip_text: str):
        # Act
        result = service.scan_text(kbank_slip_text, source="kbank_transfer_slip.txt")

        # Assert
        assert result.bank == Bank.KBANK
        assert not result.is_statement
        assert result.count == 1

        txn = result.transactions[0]
        assert txn.amount == Decimal("150.00")
        assert txn.type == TransactionType.EXPENSE
        assert txn.category == categories.FOOD
        assert txn.date == "05/12/2566"
        assert txn.reference_id == "015339143521ATF06123"
        assert txn.receiver_name == "ร้านกาแฟบ้านสวน"
        assert txn.note == "ร้านกาแฟบ้านสวน"

    def test_scb_bill_payment(self, service: ScanService, scb_bill_text: str):
        # Act
        txn = service.scan_text(scb_bill_text).transactions[0]

        # Assert
        assert txn.amount == Decimal("1024.75")
        assert txn.category == categories.UTILITIES
        assert txn.date == "12/01/2567"
        assert txn.receiver_name == "MEA Electricity"

    def test_dotted_time_keeps_slip_path(self, service: ScanService):
        """Test that a time like 14.32 น. does not turn a slip into a statement row"""

        # Arrange
        text = "ไปยัง ร้านป้าแดง\nจำนวนเงิน 60.00 บาท\nวันที่ 5 ธ.ค. 66 เวลา 14.32 น."

        # Act
        result = service.scan_text(text)

        # Assert
        assert not result.is_statement
        assert result.count == 1

        txn = result.transactions[0]
        assert txn.amount == Decimal("60.00")
        assert txn.receiver_name == "ร้านป้าแดง"
        assert txn.date == "05/12/2566"

    def test_engine_receives_receiver_and_preferences(
            self,
            mocked_service: ScanService,
            mock_engine: CategorizationEngine,
            kbank_slip_text: str,
    ):
        """Test that the slip text, receiver and preferences reach the engine"""

        # Arrange
        preferences = {"ร้านกาแฟบ้านสวน": categories.HEALTH}

        # Act
        mocked_service.scan_text(kbank_slip_text, preferences=preferences)

        # Assert
        mock_engine.categorize.assert_called_once_with(
            kbank_slip_text,
            TransactionType.EXPENSE,
            receiver="ร้านกาแฟบ้านสวน",
            preferences=preferences,
        )

    def test_injected_ids(self, mocked_service: ScanService, kbank_slip_text: str):
        result = mocked_service.scan_text(kbank_slip_text)

        assert result.transactions[0].id == "txn-1"


@pytest.mark.unit
class TestSynthesizedNotes:
    """Test notes for slips without a receiver"""

    @pytest.fixture(autouse=True)
    def fixed_today(self, mocker):
        mocker.patch("slipscan.services.scan_service.today_buddhist", return_value="01/01/2567")

    def test_lottery(self, mocked_service: ScanService):
        # Act
        txn = mocked_service.scan_text("GLO สลากดิจิทัล\nยอดชำระ 80.00").transactions[0]

        # Assert
        assert txn.amount == Decimal("80.00")
        assert txn.note == "ซื้อสลากดิจิทัล"

    def test_transfer_without_amount(self, mocked_service: ScanService):
        """Test that a slip with no amount is kept and flagged"""

        # Act
        result = mocked_service.scan_text("โอนเงินสำเร็จ")

        # Assert
        txn = result.transactions[0]
        assert txn.amount == Decimal("0")
        assert txn.note == "โอนเงิน (ไม่พบยอดเงิน)"
        assert txn.date == "01/01/2567"
        assert not result.success

    def test_placeholder_uses_queue_index(self, mocked_service: ScanService):
        # Act
        txn = mocked_service.scan_text("xyz", index=3).transactions[0]

        # Assert
        assert txn.note == "สแกนจากสลิป #3 (ไม่พบยอดเงิน)"

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text_degrades(self, mocked_service: ScanService, text):
        # Act
        result = mocked_service.scan_text(text)

        # Assert
        assert result.count == 1
        assert result.transactions[0].amount == Decimal("0")
        assert result.bank == Bank.UNKNOWN


@pytest.mark.unit
class TestScanStatement:

    def test_statement_rows(self, service: ScanService, card_statement_text: str):
        # Act
        result = service.scan_text(card_statement_text)

        # Assert
        assert result.is_statement
        assert result.bank == Bank.KRUNGSRI
        assert result.count == 3
        assert result.total == Decimal("2164.50")
        assert all(t.date == "15/12/2566" for t in result.transactions)


@pytest.mark.unit
class TestDuplicateMarking:

    def test_existing_reference_marked(self, service: ScanService, kbank_slip_text: str):
        # Arrange
        stored = Transaction(
            amount=Decimal("1.00"),
            type=TransactionType.EXPENSE,
            category=categories.OTHER,
            date="01/01/2560",
            note="old",
            reference_id="015339143521ATF06123",
        )

        # Act
        result = service.scan_text(kbank_slip_text, existing=[stored])

        # Assert
        assert result.duplicate_count == 1
        assert result.duplicates[0] is result.transactions[0]
        assert result.transactions[0].note.startswith(DUPLICATE_MARKER)

    def test_same_slip_twice_in_batch(self, service: ScanService, kbank_slip_text: str):
        """Test that a slip photographed twice is flagged on the second scan"""

        # Act
        summary = service.scan_many([kbank_slip_text, kbank_slip_text])

        # Assert
        assert summary.count == 2
        assert summary.duplicate_count == 1
        assert summary.results[0].duplicate_count == 0
        assert summary.results[1].transactions[0].note == f"{DUPLICATE_MARKER} ร้านกาแฟบ้านสวน"

    def test_statement_rescanned(self, service: ScanService, card_statement_text: str):
        summary = service.scan_many([card_statement_text, card_statement_text])

        assert summary.results[1].duplicate_count == 3
        assert summary.total == Decimal("4329.00")


@pytest.mark.unit
class TestScanModels:

    def test_duplicates_must_be_scanned_records(self):
        # Arrange
        stray = Transaction(
            amount=Decimal("1"),
            type=TransactionType.EXPENSE,
            category=categories.OTHER,
            date="01/01/2567",
            note="x",
        )

        # Act / Assert
        with pytest.raises(ValueError):
            ScanResult(transactions=[], duplicates=[stray])

    def test_batch_summary_str(self, service: ScanService, kbank_slip_text: str, scb_bill_text: str):
        # Act
        summary = service.scan_many([kbank_slip_text, scb_bill_text])

        # Assert
        assert isinstance(summary, BatchSummary)
        assert summary.total == Decimal("1174.75")
        assert "2 document(s)" in str(summary)
        assert [t.amount for t in summary.transactions] == [Decimal("150.00"), Decimal("1024.75")]
