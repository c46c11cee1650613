"""
Utility functions for EventBus:
    - ID generation
    - collision pair matching
"""

import uuid
from typing import Iterable, Tuple


# ---------- ID Helpers ----------
def new_msg_id() -> str:
    """
    Generate a globally unique event ID.

    Returns:
        str: UUID string for a new event.
    """
    return str(uuid.uuid4())


# ---------- Payload Helpers ----------
def has_pair(pairs: Iterable[Tuple[str, str]], label_a: str, label_b: str) -> bool:
    """
    Check whether a collision payload contains the pair {label_a, label_b}.

    Args:
        pairs (Iterable[Tuple[str, str]]): Colliding body labels, one tuple per pair.
        label_a (str): First label.
        label_b (str): Second label.

    Returns:
        bool: True if any pair matches in either order.
    """
    for first, second in pairs:
        if (first == label_a and second == label_b) or (
            first == label_b and second == label_a
        ):
            return True
    return False
