from typing import Dict, Any, List, Mapping, Optional

from slipscan.categorization.base import CategorizationRequest, CategorizationRule
from slipscan.categorization.rules import (
    CategorySpec,
    DefaultRule,
    IncomeRule,
    PreferenceRule,
    WeightedKeywordRule,
)
from slipscan.categorization.categories import INCOME, OTHER
from slipscan.config.settings import ConfigLoader
from slipscan.domain.enums import TransactionType

class CategorizationEngine:
    """
    Main engine for categorizing transactions.

    Builds a chain of rules in priority order:
    1. Income (always the income category)
    2. Learned receiver preferences
    3. Weighted keyword taxonomy (from categories.json)
    4. Default ("อื่นๆ")

    Usage:
        # Production - loads taxonomy from ConfigLoader
        engine = CategorizationEngine()

        # Testing - inject custom taxonomy
        test_config = {"categories": [...]}
        engine = CategorizationEngine(config=test_config)

        category = engine.categorize(text, receiver="ร้านป้าแดง", preferences=prefs)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize categorization engine.

        Args:
            config: Optional taxonomy dict. If None, loads categories.json
                through ConfigLoader.

        Raises:
            ValueError: If the taxonomy is malformed
        """
        self._rule_chain: Optional[CategorizationRule] = None
        self._keyword_rule: Optional[WeightedKeywordRule] = None

        self._build_rule_chain(config)

    def _load_taxonomy(self, config: Optional[Dict[str, Any]] = None) -> List[CategorySpec]:
        if config is None:
            try:
                config = ConfigLoader.load_categories_config()
            except FileNotFoundError:
                # No taxonomy at all - everything falls to the default rule
                config = {"categories": []}

        return [CategorySpec.from_config(entry) for entry in config.get("categories", [])]

    def _build_rule_chain(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Build the chain of responsibility for categorization rules.

        Args:
            config: Optional taxonomy config for testing
        """
        self._keyword_rule = WeightedKeywordRule(self._load_taxonomy(config))

        rules: List[CategorizationRule] = [
            IncomeRule(INCOME),
            PreferenceRule(),
            self._keyword_rule,
            DefaultRule(OTHER),
        ]

        self._rule_chain = rules[0]
        for i in range(len(rules) - 1):
            rules[i].set_next(rules[i + 1])

    @property
    def category_names(self) -> List[str]:
        """Taxonomy categories in declaration order"""
        return [spec.name for spec in self._keyword_rule.taxonomy]

    def categorize(
        self,
        text: str,
        transaction_type: TransactionType = TransactionType.EXPENSE,
        receiver: Optional[str] = None,
        preferences: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Categorize a piece of transaction text.

        Args:
            text: Slip text, statement row or chat sentence
            transaction_type: INCOME short-circuits to the income category
            receiver: Extracted counterparty, the key into preferences
            preferences: Learned receiver -> category snapshot (read only)

        Returns:
            Category name, never empty

        Example:
            ```
            >>> engine = CategorizationEngine()
            >>> engine.categorize("ชำระค่าไฟ MEA")
            'สาธารณูปโภค'
            ```
        """
        if not self._rule_chain:
            raise RuntimeError("Rule chain not initialized")

        request = CategorizationRequest(
            text=text or "",
            type=transaction_type,
            receiver=receiver,
            preferences=preferences or {},
        )
        category = self._rule_chain.categorize(request)

        assert category is not None, "Rule chain should never return None"

        return category

    def keyword_scores(self, text: str) -> Dict[str, float]:
        """
        Per-category keyword scores, for explaining a classification.

        Example:
            >>> engine.keyword_scores("กินข้าว")["อาหารและเครื่องดื่ม"]
            2.4
        """
        return self._keyword_rule.scores(text or "")

    def get_rule_chain_info(self) -> str:
        """
        Get information about the current rule chain.

        Returns:
            String description of the current rule chain.
        """
        if not self._rule_chain:
            return "No rules loaded"

        rules = []
        current = self._rule_chain
        priority = 1

        while current:
            rules.append(f"{priority}. {current}")
            current = current._next_rule
            priority += 1

        return "\n".join(rules)

    def __repr__(self) -> str:
        return f"CategorizationEngine({len(self.category_names)} categories)"
