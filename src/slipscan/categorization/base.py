from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Optional

from slipscan.domain.enums import TransactionType


@dataclass(frozen=True)
class CategorizationRequest:
    """
    Everything a rule may look at when picking a category.

    preferences is the caller's learned receiver -> category snapshot.
    Rules only read it.
    """
    text: str
    type: TransactionType = TransactionType.EXPENSE
    receiver: Optional[str] = None
    preferences: Mapping[str, str] = field(default_factory=dict)


class CategorizationRule(ABC):
    """
    Abstract base class for all categorization rules.

    Implements Chain of Responsibility:
    - Each rule tries to categorize a request
    - If it can't it passes to the next rule
    - Rules are tried in priority order

    Usage:
        Create chain: income -> learned preference -> keywords -> default
        ```
        income_rule = IncomeRule()
        income_rule.set_next(PreferenceRule()).set_next(DefaultRule())

        category = income_rule.categorize(request)
        ```
    """

    def __init__(self):
        self._next_rule: Optional['CategorizationRule'] = None


    def set_next(self, rule: 'CategorizationRule') -> 'CategorizationRule':
        """
        Set the next rule in the chain.

        Args:
            rule: The next rule to try if this one doesn't match

        Returns:
            The rule that was set (for chaining)

        Example:
            `rule1.set_next(rule2).set_next(rule3)`
        """
        self._next_rule = rule
        return rule

    @abstractmethod
    def _matches(self, request: CategorizationRequest) -> bool:
        """
        Check if this rule matches the request.

        Subclasses implement their specific matching logic here.
        """
        pass


    @abstractmethod
    def _get_category(self, request: CategorizationRequest) -> str:
        """
        Get the category for the request.

        Called only if _matches() returns True.
        """
        pass


    def categorize(self, request: CategorizationRequest) -> Optional[str]:
        """
        Attempt to categorize a request.

        1. Checks if this rule matches
        2. If yes, returns the category
        3. If no, tries the next rule in the chain

        Returns:
            Category name, or None if no rules matched
        """
        if self._matches(request):
            return self._get_category(request)

        if self._next_rule:
            return self._next_rule.categorize(request)

        return None

    def __repr__(self):
        return f"{self.__class__.__name__}()"
