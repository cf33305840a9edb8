"""Identifier generation."""
from typing import Callable, Optional

from ulid import ULID

IdFactory = Callable[[Optional[str]], str]


def generate_id(prefix: Optional[str] = None) -> str:
    """Generate a unique, time-sortable identifier.

    Args:
        prefix: Optional prefix (e.g., ``"snap"``, ``"issue"``).

    Returns:
        A 26-char ULID, or ``"<prefix>-<ulid>"`` when a prefix is given.
    """
    value = str(ULID())
    return f"{prefix}-{value}" if prefix else value
