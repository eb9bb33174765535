from typing import Iterable

from slipscan.domain.models import Transaction

DUPLICATE_MARKER = "[ซ้ำ?]"


def _same_transaction(candidate: Transaction, existing: Transaction) -> bool:
    # A shared reference number is the strongest signal there is
    if candidate.reference_id and existing.reference_id:
        if candidate.reference_id == existing.reference_id:
            return True

    if (
        candidate.date != existing.date
        or candidate.amount != existing.amount
        or candidate.category != existing.category
    ):
        return False

    if candidate.receiver_name and existing.receiver_name:
        return candidate.receiver_name == existing.receiver_name

    return True


def is_duplicate(candidate: Transaction, existing: Iterable[Transaction]) -> bool:
    """
    Check whether a freshly scanned record probably repeats a stored one.

    A record is a duplicate if both carry the same reference id, or if date,
    amount and category all match (and the receivers match when both have
    one).

    This is advisory. Repeated small purchases are legitimately identical,
    so callers should mark the record for review instead of dropping it.

    Args:
        candidate: Newly extracted transaction
        existing: Transactions already stored by the caller

    Returns:
        True if any existing record looks like the same transaction
    """
    return any(_same_transaction(candidate, txn) for txn in existing)


def mark_duplicate(txn: Transaction) -> Transaction:
    """Return a copy whose note flags it for review"""
    if txn.note.startswith(DUPLICATE_MARKER):
        return txn
    return txn.with_note(f"{DUPLICATE_MARKER} {txn.note}")
