import pytest

from slipscan.domain.enums import Bank
from slipscan.extraction.bank import detect_bank
from slipscan.extraction.reference import extract_reference


@pytest.mark.unit
class TestReferenceExtraction:

    def test_labelled_reference(self):
        assert extract_reference("เลขที่อ้างอิง: 2023120512345678") == "2023120512345678"

    def test_label_on_previous_line(self, kbank_slip_text: str):
        assert extract_reference(kbank_slip_text) == "015339143521ATF06123"

    def test_english_label(self, scb_bill_text: str):
        """Test that 'Ref No:' wins over the earlier Biller ID digits"""
        assert extract_reference(scb_bill_text) == "2024011212345ABCDE"

    def test_label_beats_bare_digits(self):
        # Arrange
        text = "9999999999999\nTransaction ID ABC1234567890"

        # Act
        reference = extract_reference(text)

        # Assert
        assert reference == "ABC1234567890"

    def test_bare_digit_run(self):
        assert extract_reference("slip 01234567890123 end") == "01234567890123"

    @pytest.mark.parametrize("text", ["", "ref 12345", "โอนเงินสำเร็จ"])
    def test_not_found(self, text: str):
        assert extract_reference(text) is None


@pytest.mark.unit
class TestBankDetection:

    @pytest.mark.parametrize("text, expected", [
        ("KASIKORNBANK", Bank.KBANK),
        ("ธนาคารกสิกรไทย", Bank.KBANK),
        ("SCB Easy", Bank.SCB),
        ("กรุงไทย NEXT", Bank.KRUNGTHAI),
        ("Bangkok Bank", Bank.BBL),
        ("บัตรเครดิต/สินเชื่อ", Bank.KRUNGSRI),
        ("", Bank.UNKNOWN),
        ("ร้านป้าแดง", Bank.UNKNOWN),
    ])
    def test_markers(self, text: str, expected: Bank):
        assert detect_bank(text) == expected

    def test_earliest_marker_wins(self):
        """Test that the issuer header beats a destination bank further down"""

        # Act
        kbank = detect_bank("KASIKORNBANK\nไปยัง\nธ.ไทยพาณิชย์")
        scb = detect_bank("ธนาคารไทยพาณิชย์\nจาก\nธ.กสิกรไทย")

        # Assert
        assert kbank == Bank.KBANK
        assert scb == Bank.SCB

    def test_fixture_documents(self, kbank_slip_text: str, card_statement_text: str):
        assert detect_bank(kbank_slip_text) == Bank.KBANK
        assert detect_bank(card_statement_text) == Bank.KRUNGSRI
