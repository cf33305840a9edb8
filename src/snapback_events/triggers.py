"""Session trigger bitmask codec.

Triggers are stored as a compact integer mask:

    bit 0 (1): filewatch
    bit 1 (2): pre-commit
    bit 2 (4): manual
    bit 3 (8): idle-finalize

Example: mask 5 is filewatch (1) + manual (4).
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Union


class Trigger(str, Enum):
    """Named cause of a session event."""

    FILEWATCH = "filewatch"
    PRE_COMMIT = "pre-commit"
    MANUAL = "manual"
    IDLE_FINALIZE = "idle-finalize"


# Ascending bit order; decode emits triggers in this order
TRIGGER_BITS: Dict[Trigger, int] = {
    Trigger.FILEWATCH: 1,
    Trigger.PRE_COMMIT: 2,
    Trigger.MANUAL: 4,
    Trigger.IDLE_FINALIZE: 8,
}

_BITS_BY_NAME: Dict[str, int] = {t.value: bit for t, bit in TRIGGER_BITS.items()}


def encode_triggers(triggers: Iterable[Union[Trigger, str]]) -> int:
    """OR together the bit of every trigger.

    Duplicates collapse. Names that are not known triggers contribute no bit.
    """
    mask = 0
    for trigger in triggers:
        name = trigger.value if isinstance(trigger, Trigger) else trigger
        mask |= _BITS_BY_NAME.get(name, 0)
    return mask


def decode_triggers(mask: int) -> List[Trigger]:
    """Expand *mask* into triggers in ascending bit order.

    Bits outside the four known ones are ignored.
    """
    return [trigger for trigger, bit in TRIGGER_BITS.items() if mask & bit]


def normalize_triggers(triggers: Iterable[Union[Trigger, str]]) -> List[Trigger]:
    """Deduplicate and order triggers via one encode/decode round trip."""
    return decode_triggers(encode_triggers(triggers))
