from typing import List, Tuple

from slipscan.domain.enums import Bank

BANK_MARKERS: List[Tuple[Bank, Tuple[str, ...]]] = [
    (Bank.KBANK, ("KASIKORNBANK", "กสิกรไทย")),
    (Bank.SCB, ("SCB", "ไทยพาณิชย์")),
    (Bank.KRUNGTHAI, ("Krungthai", "กรุงไทย")),
    (Bank.BBL, ("Bangkok Bank", "กรุงเทพ")),
    (Bank.KRUNGSRI, ("Krungsri", "บัตรเครดิต/สินเชื่อ")),
]


def detect_bank(text: str) -> Bank:
    """
    Classify the issuing institution from marker substrings.

    The marker appearing earliest in the document wins, so a KBank slip
    that mentions an SCB destination account is still a KBank slip.
    """
    best_bank = Bank.UNKNOWN
    best_pos = len(text) + 1

    for bank, markers in BANK_MARKERS:
        for marker in markers:
            pos = text.find(marker)
            if pos != -1 and pos < best_pos:
                best_bank, best_pos = bank, pos

    return best_bank
