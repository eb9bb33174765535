import pytest
from pathlib import Path

from slipscan.categorization.categorizer import CategorizationEngine
from slipscan.parsers.chat import ChatParser
from slipscan.parsers.statement import StatementParser
from slipscan.services.scan_service import ScanService

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def engine() -> CategorizationEngine:
    """Engine with the bundled taxonomy"""
    return CategorizationEngine()

@pytest.fixture
def statement_parser(engine: CategorizationEngine) -> StatementParser:
    """Create a parser instance for each test"""
    return StatementParser(engine)

@pytest.fixture
def chat_parser(engine: CategorizationEngine) -> ChatParser:
    return ChatParser(engine)

@pytest.fixture
def service(engine: CategorizationEngine) -> ScanService:
    """Service wired with the real engine"""
    return ScanService(categorization_engine=engine)

@pytest.fixture
def kbank_slip_file() -> Path:
    """Provide a path to an OCR'd KBank transfer slip"""
    return FIXTURES_DIR / "kbank_transfer_slip.txt"

@pytest.fixture
def scb_bill_file() -> Path:
    """Provide a path to an OCR'd SCB bill payment slip"""
    return FIXTURES_DIR / "scb_bill_payment.txt"

@pytest.fixture
def card_statement_file() -> Path:
    """Provide a path to an OCR'd three-row credit card statement"""
    return FIXTURES_DIR / "krungsri_card_statement.txt"

@pytest.fixture
def kbank_slip_text(kbank_slip_file: Path) -> str:
    return kbank_slip_file.read_text(encoding="utf-8")

@pytest.fixture
def scb_bill_text(scb_bill_file: Path) -> str:
    return scb_bill_file.read_text(encoding="utf-8")

@pytest.fixture
def card_statement_text(card_statement_file: Path) -> str:
    return card_statement_file.read_text(encoding="utf-8")
