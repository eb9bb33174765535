from abc import ABC, abstractmethod
from typing import Callable, List, Mapping, Optional

from slipscan.categorization import CategorizationEngine
from slipscan.domain.models import Transaction, new_transaction_id

class TextParser(ABC):
    """
    Abstract base class for all text parsers.

    This implements the Strategy pattern - each kind of input text
    (itemized statement, chat sentence) gets its own concrete parser
    that implements this interface.
    """

    def __init__(
        self,
        categorization_engine: Optional[CategorizationEngine] = None,
        id_factory: Callable[[], str] = new_transaction_id,
    ):
        self._categorization_engine = categorization_engine
        self.id_factory = id_factory

    @property
    def categorization_engine(self) -> CategorizationEngine:
        """Lazy-load categorization engine"""
        if self._categorization_engine is None:
            self._categorization_engine = CategorizationEngine()
        return self._categorization_engine

    @abstractmethod
    def parse(
        self,
        text: str,
        preferences: Optional[Mapping[str, str]] = None,
    ) -> List[Transaction]:
        """
        Parse text and return the transactions found in it.

        Args:
            text: Recognised or typed text
            preferences: Learned receiver -> category snapshot

        Returns:
            List of Transaction objects, empty when nothing was found.
            Parsers never raise on malformed text.
        """
        pass
