import time

import pytest

from slipscan.extraction.receiver import (
    by_account_layout,
    by_adjacent_account,
    by_biller,
    clean_name,
    extract_receiver,
)


@pytest.mark.unit
class TestPhraseAnchoredReceiver:
    """Test names that follow 'ไปยัง' / 'To' style phrases"""

    def test_thai_phrase(self):
        # Arrange
        text = "โอนเงินสำเร็จ\nไปยัง นาย สมชาย ใจดี\nxxx-x-x1234-x"

        # Act
        receiver = extract_receiver(text)

        # Assert
        assert receiver == "นาย สมชาย ใจดี"

    def test_english_phrase_on_next_line(self, scb_bill_text: str):
        """Test that a name on the line after a bare 'To' is picked up"""
        assert extract_receiver(scb_bill_text) == "MEA Electricity"

    def test_embedded_digits_removed(self):
        """Test that branch codes and masked digits are stripped from names"""
        assert extract_receiver("ไปยัง ร้านข้าวมันไก่ 1234\n") == "ร้านข้าวมันไก่"

    def test_generic_account_word_rejected(self):
        """Test that 'To: Savings' is not taken as a receiver"""
        assert extract_receiver("To: Savings\n") is None

    def test_to_inside_word_ignored(self):
        assert extract_receiver("Total 500.00\n") is None

    def test_short_name_rejected(self):
        assert extract_receiver("ไปยัง AB\n") is None


@pytest.mark.unit
class TestStructuralReceiver:
    """Test layouts without a phrase anchor"""

    def test_line_above_second_account(self, kbank_slip_text: str):
        """Test that the receiver sits above the second masked account, skipping the bank label"""

        # Act
        receiver = by_account_layout(kbank_slip_text)

        # Assert
        assert receiver == "ร้านกาแฟบ้านสวน"

    def test_single_account_not_enough(self):
        assert by_account_layout("นาย ก\nxxx-x-x1234-x") is None

    def test_name_directly_above_account(self):
        # Arrange
        text = (
            "ธนาคารกรุงเทพ Bangkok Bank\n"
            "รายการสำเร็จ\n"
            "วันที่ทำรายการ 1 มี.ค. 2567\n"
            "บริษัท ตัวอย่าง จำกัด\n"
            "123-4-56789-0\n"
        )

        # Act
        receiver = extract_receiver(text)

        # Assert
        assert receiver == "บริษัท ตัวอย่าง จำกัด"

    def test_name_in_header_ignored(self):
        """Test that a name-like line near the top is header noise"""
        assert by_adjacent_account("KBank\n123-4-56789-0") is None

    def test_blank_lines_between_name_and_account(self):
        # Arrange
        text = "ธนาคารกรุงเทพ Bangkok Bank\n" + "รายการสำเร็จ\n" * 4 + "ร้านป้าแดง\n\n \n123-4-56789-0"

        # Act
        receiver = by_adjacent_account(text)

        # Assert
        assert receiver == "ร้านป้าแดง"

    def test_blank_line_runs_return_promptly(self):
        """Test that long runs of blank lines without an account don't stall extraction"""

        # Arrange
        text = "โอนเงินสำเร็จ\n" + "ร้านป้าแดง สาขา\n" * 40 + "\n \n" * 2000 + "xxx-x-x1234"

        # Act
        started = time.perf_counter()
        adjacent = by_adjacent_account("ก" * 60 + "\n \n" * 2000)
        receiver = extract_receiver(text)
        elapsed = time.perf_counter() - started

        # Assert
        assert adjacent is None
        assert receiver is None
        assert elapsed < 1.0

    def test_biller_name(self):
        # Act
        receiver = by_biller("ชำระบิล\nไปยัง การไฟฟ้านครหลวง Biller ID 0994000158041")

        # Assert
        assert receiver == "การไฟฟ้านครหลวง"


@pytest.mark.unit
class TestReceiverNotFound:

    @pytest.mark.parametrize("text", ["", "12345", "โอนเงินสำเร็จ"])
    def test_returns_none(self, text: str):
        assert extract_receiver(text) is None

    def test_clean_name_collapses_whitespace(self):
        assert clean_name("  ร้าน   ป้าแดง  xxx-x-x1234-x ") == "ร้าน ป้าแดง"
