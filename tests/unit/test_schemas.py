"""Unit tests for the schemas subpackage."""
from __future__ import annotations

import json

import pytest

from snapback_events import CORE_EVENT_TYPES, LEGACY_EVENT_TYPES
from snapback_events.schemas import (
    SCHEMA_DIALECT,
    build_schema,
    core_schema_name,
    legacy_schema_name,
    list_schemas,
    schema_to_json,
)


def test_schema_names() -> None:
    assert core_schema_name("save_attempt") == "save_attempt_event"
    assert legacy_schema_name("walkthrough.step.completed") == (
        "legacy_walkthrough_step_completed_event"
    )


def test_list_schemas_covers_every_event() -> None:
    names = set(list_schemas())
    assert {core_schema_name(t) for t in CORE_EVENT_TYPES} <= names
    assert {legacy_schema_name(t) for t in LEGACY_EVENT_TYPES} <= names
    assert {"core_event", "legacy_event", "severity", "trigger"} <= names


def test_list_schemas_is_sorted() -> None:
    names = list_schemas()
    assert names == sorted(names)


def test_build_schema_metadata() -> None:
    schema = build_schema("save_attempt_event")
    assert schema["$schema"] == SCHEMA_DIALECT
    assert schema["$id"] == "snapback-events/save_attempt_event"


def test_policy_changed_schema_uses_wire_name() -> None:
    schema = build_schema("policy_changed_event")
    props = schema["$defs"]["PolicyChangedProperties"]["properties"]
    assert "from" in props
    assert "from_level" not in props


def test_legacy_schema_uses_camel_case() -> None:
    schema = build_schema("legacy_snapback_used_event")
    props = schema["$defs"]["SnapBackUsedProperties"]["properties"]
    assert set(props) == {"filesRestored", "duration", "success"}


def test_enum_schema() -> None:
    schema = build_schema("severity")
    assert schema["enum"] == ["low", "medium", "high", "critical"]


def test_unknown_schema() -> None:
    with pytest.raises(KeyError, match="No schema named"):
        build_schema("nonexistent")


def test_schema_to_json_is_deterministic() -> None:
    text = schema_to_json(build_schema("core_event"))
    assert text.endswith("\n")
    assert text == schema_to_json(json.loads(text))
