"""
Categorization system for scanned transactions.

Provides automatic categorization using a chain of responsibility:
income first, then the user's learned receiver preferences, then a
weighted keyword taxonomy, then the "อื่นๆ" fallback.

Quick Start:
    >>> from slipscan.categorization import CategorizationEngine
    >>>
    >>> engine = CategorizationEngine()
    >>> category = engine.categorize("กินข้าว 60 บาท")
    >>> print(f"Categorized as: {category}")
"""
from slipscan.categorization.categorizer import CategorizationEngine
from slipscan.categorization.base import CategorizationRequest, CategorizationRule
from slipscan.categorization.rules import (
    CategorySpec,
    IncomeRule,
    PreferenceRule,
    WeightedKeywordRule,
    DefaultRule,
)
from slipscan.categorization.preferences import learn_category_preference
from slipscan.categorization import categories

__all__ = [
    "CategorizationEngine",
    "CategorizationRequest",
    "CategorizationRule",
    "CategorySpec",
    "IncomeRule",
    "PreferenceRule",
    "WeightedKeywordRule",
    "DefaultRule",
    "learn_category_preference",
    "categories",
]
