from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from slipscan.categorization.base import CategorizationRequest, CategorizationRule
from slipscan.categorization.categories import INCOME, OTHER
from slipscan.domain.enums import TransactionType


@dataclass(frozen=True)
class CategorySpec:
    """One row of the taxonomy: a category, its keyword list and its weight"""
    name: str
    weight: float
    keywords: Tuple[str, ...]

    @classmethod
    def from_config(cls, entry: Dict[str, Any]) -> "CategorySpec":
        """
        Build from a categories.json entry.

        Raises:
            ValueError: If the entry is missing fields or has a bad weight
        """
        try:
            name = str(entry["name"]).strip()
            weight = float(entry.get("weight", 1.0))
            raw_keywords = entry["keywords"]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid category entry {entry!r}: {e}")

        if not isinstance(raw_keywords, list):
            raise ValueError(f"Category '{name}' keywords must be a list")
        keywords = tuple(str(k) for k in raw_keywords if str(k).strip())

        if not name:
            raise ValueError(f"Category entry has an empty name: {entry!r}")
        if weight <= 0:
            raise ValueError(f"Category '{name}' must have a positive weight, got {weight}")

        return cls(name=name, weight=weight, keywords=keywords)


class IncomeRule(CategorizationRule):
    """Income is never scored, it always lands in the income category."""

    def __init__(self, income_category: str = INCOME):
        super().__init__()
        self.income_category = income_category

    def _matches(self, request: CategorizationRequest) -> bool:
        return request.type == TransactionType.INCOME

    def _get_category(self, _: CategorizationRequest) -> str:
        return self.income_category

    def __repr__(self) -> str:
        return f"IncomeRule('{self.income_category}')"


class PreferenceRule(CategorizationRule):
    """
    Rule that applies the user's learned receiver -> category choices.

    Sits above keyword scoring: once a user has recategorized a receiver,
    every later expense to that receiver follows their choice.
    """

    def _matches(self, request: CategorizationRequest) -> bool:
        # Empty learned values are ignored
        return bool(request.receiver) and bool(request.preferences.get(request.receiver))

    def _get_category(self, request: CategorizationRequest) -> str:
        return request.preferences[request.receiver]


class WeightedKeywordRule(CategorizationRule):
    """
    Rule that scores every category by its keyword hits.

    score = keyword occurrences x category weight

    Features:
    - Case-insensitive matching
    - Precise keyword lists (utility providers) carry more weight than
      broad ones (shopping)
    - Ties go to the category declared first

    Example:
        ```
        rule = WeightedKeywordRule([
            CategorySpec("สาธารณูปโภค", 2.0, ("ค่าไฟ", "MEA")),
            CategorySpec("ช็อปปิ้ง", 1.0, ("ซื้อ", "Shopee")),
        ])
        ```
    """

    def __init__(self, taxonomy: List[CategorySpec]):
        super().__init__()
        self.taxonomy = taxonomy

        # Pre-process keywords to lowercase for case-insensitive matching
        self._normalized: List[Tuple[CategorySpec, List[str]]] = [
            (spec, [kw.lower() for kw in spec.keywords]) for spec in taxonomy
        ]

    def scores(self, text: str) -> Dict[str, float]:
        """Score of every category for the text, in declaration order"""
        text_lower = text.lower()
        return {
            spec.name: sum(text_lower.count(kw) for kw in keywords) * spec.weight
            for spec, keywords in self._normalized
        }

    def _best(self, text: str) -> Tuple[str, float]:
        best_category, best_score = OTHER, 0.0
        for category, score in self.scores(text).items():
            if score > best_score:
                best_category, best_score = category, score
        return best_category, best_score

    def _matches(self, request: CategorizationRequest) -> bool:
        _, score = self._best(request.text)
        return score > 0

    def _get_category(self, request: CategorizationRequest) -> str:
        category, _ = self._best(request.text)
        return category

    def __repr__(self) -> str:
        return f"WeightedKeywordRule({len(self.taxonomy)} categories)"


class DefaultRule(CategorizationRule):
    """
    Fallback rule that always matches.

    Should be the last rule in the chain.
    """

    def __init__(self, default_category: str = OTHER):
        super().__init__()
        self.default_category = default_category

    def _matches(self, _: CategorizationRequest) -> bool:
        """Always matches"""
        return True

    def _get_category(self, _: CategorizationRequest) -> str:
        """Only returns the default category."""
        return self.default_category

    def __repr__(self) -> str:
        return f"DefaultRule('{self.default_category}')"
