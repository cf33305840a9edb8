"""Conformance test suite for snapback-events.

Run: pytest --pyargs snapback_events.conformance
"""
from snapback_events.conformance.loader import (
    FixtureCase,
    load_fixtures,
)
from snapback_events.conformance.pytest_helpers import (
    assert_maps_to,
    assert_payload_conforms,
    assert_payload_fails,
)
from snapback_events.conformance.validators import (
    ConformanceResult,
    ModelViolation,
    SchemaViolation,
    validate_event,
)

__all__ = [
    "ConformanceResult",
    "FixtureCase",
    "ModelViolation",
    "SchemaViolation",
    "assert_maps_to",
    "assert_payload_conforms",
    "assert_payload_fails",
    "load_fixtures",
    "validate_event",
]
