"""Validation of arbitrary payloads against the event registries.

``check_*``, ``validate_*`` and ``explain_*`` NEVER raise: every failure is
reported as a value. ``parse_*`` is the raising variant for callers that
prefer exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, FrozenSet, Optional

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from snapback_events.core import CORE_EVENT_ADAPTER, CORE_EVENT_TYPES
from snapback_events.legacy import LEGACY_EVENT_ADAPTER, LEGACY_EVENT_TYPES
from snapback_events.models import EventValidationError


@dataclass(frozen=True)
class EventValidationResult:
    """Result of checking one candidate payload."""

    valid: bool
    message: Optional[str] = None
    event: Optional[Any] = None


def _format_errors(error: PydanticValidationError) -> str:
    lines = []
    for item in error.errors():
        path = ".".join(str(loc) for loc in item["loc"]) or "$"
        lines.append(f"{path}: {item['msg']}")
    return "; ".join(lines)


def _check(
    candidate: object,
    adapter: TypeAdapter[Any],
    known_types: FrozenSet[str],
    family: str,
) -> EventValidationResult:
    if isinstance(candidate, BaseModel):
        candidate = candidate.model_dump(by_alias=True)

    if not isinstance(candidate, Mapping):
        return EventValidationResult(
            valid=False,
            message=f"Expected a {family} event object; got {type(candidate).__name__}",
        )

    tag = candidate.get("event")
    if not isinstance(tag, str) or tag not in known_types:
        return EventValidationResult(
            valid=False,
            message=(
                f"Unknown {family} event type: {tag!r}. "
                f"Known types: {sorted(known_types)}"
            ),
        )

    try:
        parsed = adapter.validate_python(dict(candidate))
    except PydanticValidationError as e:
        return EventValidationResult(
            valid=False,
            message=f"Invalid {tag!r} event: {_format_errors(e)}",
        )
    return EventValidationResult(valid=True, event=parsed)


# ---------------------------------------------------------------------------
# Canonical events
# ---------------------------------------------------------------------------


def check_core_event(candidate: object) -> EventValidationResult:
    """Check a candidate against the canonical registry in a single pass.

    Envelope defaults (``event_version``, ``timestamp``) are applied to the
    parsed event and never count as failures. Unknown extra keys are ignored.

    Args:
        candidate: Any value, typically a dict decoded from JSON.

    Returns:
        EventValidationResult carrying either the parsed event or a
        diagnostic message.
    """
    return _check(candidate, CORE_EVENT_ADAPTER, CORE_EVENT_TYPES, "core")


def validate_core_event(candidate: object) -> bool:
    """Return True if *candidate* conforms to one of the canonical events."""
    return check_core_event(candidate).valid


def explain_core_event(candidate: object) -> Optional[str]:
    """Return None for a conforming candidate, otherwise a diagnostic."""
    return check_core_event(candidate).message


def parse_core_event(candidate: object) -> Any:
    """Parse *candidate* into a canonical event model.

    Raises:
        EventValidationError: If the candidate does not conform.
    """
    result = check_core_event(candidate)
    if not result.valid:
        raise EventValidationError(result.message or "invalid core event")
    return result.event


# ---------------------------------------------------------------------------
# Legacy events
# ---------------------------------------------------------------------------


def check_legacy_event(candidate: object) -> EventValidationResult:
    """Check a candidate against the legacy registry in a single pass."""
    return _check(candidate, LEGACY_EVENT_ADAPTER, LEGACY_EVENT_TYPES, "legacy")


def validate_legacy_event(candidate: object) -> bool:
    return check_legacy_event(candidate).valid


def explain_legacy_event(candidate: object) -> Optional[str]:
    return check_legacy_event(candidate).message


def parse_legacy_event(candidate: object) -> Any:
    """Parse *candidate* into a legacy event model.

    Raises:
        EventValidationError: If the candidate does not conform.
    """
    result = check_legacy_event(candidate)
    if not result.valid:
        raise EventValidationError(result.message or "invalid legacy event")
    return result.event
