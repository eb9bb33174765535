from typing import Dict, Mapping, Optional

# Receivers this short are OCR fragments, not names worth remembering
MIN_RECEIVER_LENGTH = 3


def learn_category_preference(
    preferences: Mapping[str, str],
    receiver: Optional[str],
    category: str,
) -> Dict[str, str]:
    """
    Record that expenses to `receiver` belong in `category`.

    Called by the caller when a user recategorizes a record whose receiver
    is known. The input mapping is never modified; a new one is returned
    for the caller to store.

    Args:
        preferences: Current receiver -> category snapshot
        receiver: Receiver name exactly as extracted
        category: The category the user picked

    Returns:
        A new mapping including the learned entry (an unchanged copy when
        the receiver is missing or too short)

    Raises:
        ValueError: If category is empty

    Example:
        ```
        prefs = learn_category_preference({}, "ร้านป้าแดง", "อาหารและเครื่องดื่ม")
        engine.categorize("...", receiver="ร้านป้าแดง", preferences=prefs)
        ```
    """
    if not category or not category.strip():
        raise ValueError("Cannot learn an empty category")

    updated = dict(preferences)
    if receiver and len(receiver.strip()) >= MIN_RECEIVER_LENGTH:
        updated[receiver] = category

    return updated
