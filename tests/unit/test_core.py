"""Unit tests for the canonical event models."""

import pydantic
import pytest

from snapback_events import (
    CORE_EVENT_ADAPTER,
    CORE_EVENT_MODELS,
    CORE_EVENT_TYPES,
    EVENT_VERSION,
    AIAssistLevel,
    AIProvider,
    IssueType,
    Outcome,
    PolicyChangedEvent,
    PolicyChangedProperties,
    PolicyLevel,
    ProtectionLevel,
    SaveAttemptEvent,
    SaveAttemptProperties,
    SessionFinalizedEvent,
    Severity,
)
from snapback_events.core import now_ms


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

VALID_SAVE_ATTEMPT_PROPERTIES: dict = {
    "protection": "block",
    "severity": "critical",
    "file_kind": "env",
    "reason": "blocked_secret",
    "ai_present": False,
    "ai_burst": False,
    "outcome": "blocked",
}


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    """The canonical tag set and its model registry."""

    def test_seven_tags(self) -> None:
        assert CORE_EVENT_TYPES == {
            "save_attempt",
            "snapshot_created",
            "session_finalized",
            "issue_created",
            "issue_resolved",
            "session_restored",
            "policy_changed",
        }

    def test_registry_matches_tags(self) -> None:
        assert set(CORE_EVENT_MODELS) == set(CORE_EVENT_TYPES)

    @pytest.mark.parametrize("tag", sorted(CORE_EVENT_TYPES))
    def test_models_carry_their_tag(self, tag: str, core_payload) -> None:
        event = CORE_EVENT_MODELS[tag].model_validate(core_payload(tag))
        assert event.event == tag


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class TestEnvelope:
    """event_version / timestamp defaults and serialization."""

    def test_defaults_applied_when_absent(self) -> None:
        before = now_ms()
        event = SaveAttemptEvent(
            event="save_attempt",
            properties=SaveAttemptProperties(**VALID_SAVE_ATTEMPT_PROPERTIES),
        )
        after = now_ms()
        assert event.event_version == EVENT_VERSION == "1.0.0"
        assert before <= event.timestamp <= after

    def test_explicit_envelope_is_kept(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(
            core_payload("issue_resolved", event_version="0.9.0", timestamp=42)
        )
        assert event.event_version == "0.9.0"
        assert event.timestamp == 42

    def test_timestamp_must_be_integer(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("issue_resolved", timestamp="1700000000000")
            )

    def test_to_dict_round_trips_wire_shape(self, core_payload) -> None:
        payload = core_payload("policy_changed")
        event = CORE_EVENT_ADAPTER.validate_python(payload)
        assert event.to_dict() == payload

    def test_to_dict_drops_absent_optionals(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(core_payload("session_finalized"))
        assert "ai_provider" not in event.to_dict()["properties"]

    def test_models_are_frozen(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(core_payload("save_attempt"))
        with pytest.raises(pydantic.ValidationError):
            event.timestamp = 0  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------


class TestStrictFields:
    """Primitive fields reject coercible look-alikes."""

    def test_enum_values_parse(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(core_payload("save_attempt"))
        assert event.properties.protection is ProtectionLevel.WARN
        assert event.properties.severity is Severity.HIGH
        assert event.properties.outcome is Outcome.CANCELED

    def test_string_bool_rejected(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("save_attempt", props={"ai_present": "true"})
            )

    def test_numeric_string_rejected(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("snapshot_created", props={"bytes_stored": "512"})
            )

    def test_bool_is_not_a_number(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("snapshot_created", props={"latency_ms": True})
            )

    def test_fractional_numbers_accepted(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(
            core_payload("session_restored", props={"time_to_restore_ms": 12.5})
        )
        assert event.properties.time_to_restore_ms == 12.5

    def test_list_items_must_be_strings(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("session_restored", props={"files_restored": ["a", 1]})
            )

    def test_issue_type_outside_set_rejected(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("issue_created", props={"type": "license"})
            )

    def test_extra_keys_ignored(self, core_payload) -> None:
        payload = core_payload("issue_resolved", client="vscode", props={"by": "me"})
        event = CORE_EVENT_ADAPTER.validate_python(payload)
        assert event.properties.issue_id == "issue_12345"


class TestPolicyChanged:
    """'from' is a reserved word in Python; it is exposed as from_level."""

    def test_from_alias(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(
            core_payload("policy_changed", props={"from": "unprotected"})
        )
        assert isinstance(event, PolicyChangedEvent)
        assert event.properties.from_level is PolicyLevel.UNPROTECTED

    def test_construct_by_field_name(self) -> None:
        props = PolicyChangedProperties(
            pattern="*.pem", from_level="warn", to="block", source="cli"
        )
        assert props.model_dump(by_alias=True)["from"] == "warn"

    def test_to_rejects_unprotected_typo(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("policy_changed", props={"to": "lockdown"})
            )


class TestSessionFinalizedAttribution:
    """Optional AI attribution fields."""

    def test_all_optional_fields(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(
            core_payload(
                "session_finalized",
                props={
                    "ai_assist_level": "heavy",
                    "ai_confidence_score": 7.5,
                    "ai_provider": "cursor",
                    "ai_large_insert_count": 5,
                    "ai_total_chars": 2000,
                },
            )
        )
        assert isinstance(event, SessionFinalizedEvent)
        assert event.properties.ai_assist_level is AIAssistLevel.HEAVY
        assert event.properties.ai_provider is AIProvider.CURSOR
        assert event.properties.ai_confidence_score == 7.5

    def test_optional_fields_default_to_none(self, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(core_payload("session_finalized"))
        assert event.properties.ai_assist_level is None
        assert event.properties.ai_total_chars is None

    @pytest.mark.parametrize("score", [0, 10, 3.3])
    def test_confidence_in_range(self, score: float, core_payload) -> None:
        event = CORE_EVENT_ADAPTER.validate_python(
            core_payload("session_finalized", props={"ai_confidence_score": score})
        )
        assert event.properties.ai_confidence_score == score

    @pytest.mark.parametrize("score", [-0.1, 10.5, 100])
    def test_confidence_out_of_range(self, score: float, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("session_finalized", props={"ai_confidence_score": score})
            )

    def test_insert_count_must_be_integer(self, core_payload) -> None:
        with pytest.raises(pydantic.ValidationError):
            CORE_EVENT_ADAPTER.validate_python(
                core_payload("session_finalized", props={"ai_large_insert_count": 1.5})
            )


class TestEnums:
    def test_severity_rank_orders_buckets(self) -> None:
        ranks = [s.rank for s in (Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL)]
        assert ranks == [0, 1, 2, 3]

    def test_issue_types(self) -> None:
        assert {t.value for t in IssueType} == {"secret", "mock", "phantom"}
