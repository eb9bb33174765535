from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")

Strategy = Callable[[str], Optional[T]]


def first_success(strategies: Sequence[Strategy], text: str) -> Optional[T]:
    """
    Run extraction strategies in priority order and return the first hit.

    Each strategy is a pure function from text to an optional result.
    None means "no match, try the next one".

    Example:
        `first_success([by_phrase, by_account_layout], text)`
    """
    for strategy in strategies:
        result = strategy(text)
        if result is not None:
            return result
    return None
