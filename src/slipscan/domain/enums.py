from enum import Enum

class TransactionType(Enum):
    """Represents whether money is coming in or out"""
    INCOME = "income" # in
    EXPENSE = "expense" # out


class Bank(Enum):
    """Institutions recognised on slips. Only used to bias amount keywords."""
    KBANK = "KBank"
    SCB = "SCB"
    KRUNGTHAI = "Krungthai"
    BBL = "BBL"
    KRUNGSRI = "Krungsri"
    UNKNOWN = "Unknown"


class CandidateSource(Enum):
    """Where an amount candidate was found"""
    KEYWORD = "keyword"
    UNIT = "unit"
    SCAN = "scan"
