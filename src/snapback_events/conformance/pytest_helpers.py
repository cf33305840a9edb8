"""Reusable test helpers for snapback-events conformance testing.

Consumers can import these to write their own conformance assertions:
    from snapback_events.conformance.pytest_helpers import (
        assert_payload_conforms,
        assert_payload_fails,
        assert_maps_to,
    )
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from snapback_events.conformance.validators import (
    ConformanceResult,
    validate_event,
)
from snapback_events.mapper import LegacyEventMapper


def _describe(result: ConformanceResult) -> str:
    lines = [f"  Model: {mv.field}: {mv.message}" for mv in result.model_violations]
    lines.extend(
        f"  Schema: {sv.json_path}: {sv.message}" for sv in result.schema_violations
    )
    return "\n".join(lines)


def assert_payload_conforms(
    payload: Dict[str, Any],
    event_type: str,
    *,
    strict: bool = False,
) -> ConformanceResult:
    """Assert a payload conforms to its event contract."""
    result = validate_event(event_type, payload, strict=strict)
    if not result.valid:
        raise AssertionError(
            f"Payload for {event_type!r} failed conformance:\n" + _describe(result)
        )
    return result


def assert_payload_fails(
    payload: Dict[str, Any],
    event_type: str,
    *,
    strict: bool = False,
) -> ConformanceResult:
    """Assert a payload DOES NOT conform (expected invalid)."""
    result = validate_event(event_type, payload, strict=strict)
    if result.valid:
        raise AssertionError(
            f"Payload for {event_type!r} was expected to fail but passed conformance."
        )
    return result


def assert_maps_to(
    legacy_payload: Dict[str, Any],
    expected_core_type: Optional[str],
    mapper: Optional[LegacyEventMapper] = None,
) -> Optional[Any]:
    """Assert a legacy payload maps to *expected_core_type* (``None``: unmapped).

    Returns:
        The canonical event produced, or ``None``.
    """
    active = mapper if mapper is not None else LegacyEventMapper()
    result = active.map_event(legacy_payload)
    actual = result.event if result is not None else None
    assert actual == expected_core_type, (
        f"Expected {legacy_payload.get('event')!r} to map to "
        f"{expected_core_type!r}, got {actual!r}"
    )
    return result
