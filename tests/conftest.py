"""Shared pytest fixtures for all tests."""
import copy
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest

from snapback_events import LegacyEventMapper

TIMESTAMP = 1700000000000

# One valid wire payload per canonical tag
CORE_PROPERTIES: Dict[str, Dict[str, Any]] = {
    "save_attempt": {
        "protection": "warn",
        "severity": "high",
        "file_kind": "typescript",
        "reason": "User tried to save a file with a secret",
        "ai_present": True,
        "ai_burst": False,
        "outcome": "canceled",
    },
    "snapshot_created": {
        "session_id": "sess_12345",
        "snapshot_id": "snap_67890",
        "bytes_original": 1024,
        "bytes_stored": 512,
        "dedup_hit": True,
        "latency_ms": 45.5,
    },
    "session_finalized": {
        "session_id": "sess_12345",
        "files": ["src/index.ts", "package.json"],
        "triggers": ["filewatch", "manual"],
        "duration_ms": 120000,
        "ai_present": True,
        "ai_burst": True,
        "highest_severity": "medium",
    },
    "issue_created": {
        "issue_id": "issue_12345",
        "session_id": "sess_12345",
        "file_kind": "typescript",
        "type": "secret",
        "severity": "critical",
        "recommendation": "Remove the secret from the file",
    },
    "issue_resolved": {
        "issue_id": "issue_12345",
        "resolution": "fixed",
    },
    "session_restored": {
        "session_id": "sess_12345",
        "files_restored": ["src/index.ts"],
        "time_to_restore_ms": 2500,
        "reason": "User requested rollback",
    },
    "policy_changed": {
        "pattern": "*.env",
        "from": "watch",
        "to": "block",
        "source": "dashboard",
    },
}

# One valid wire payload per legacy tag
LEGACY_PROPERTIES: Dict[str, Dict[str, Any]] = {
    "extension.activated": {"version": "1.2.0", "vscodeVersion": "1.85.0"},
    "extension.deactivated": {},
    "command.execution": {"command": "snapback.createSnapshot", "duration": 120, "success": True},
    "snapshot.created": {"method": "manual", "filesCount": 3},
    "snapback.used": {"filesRestored": 2, "duration": 850, "success": True},
    "risk.detected": {"riskLevel": "high", "patterns": ["aws_key"], "confidence": 0.92},
    "view.activated": {"viewId": "snapback.timeline"},
    "notification.shown": {"notificationType": "risk_warning", "actionTaken": None},
    "feature.used": {"feature": "diff_view"},
    "error": {"errorType": "StorageError", "errorMessage": "Disk full"},
    "walkthrough.step.completed": {"stepId": "protect", "stepTitle": "Protect a file"},
    "onboarding.protection.assigned": {
        "level": "medium",
        "trigger": "auto",
        "fileType": "typescript",
        "isFirstProtection": True,
    },
    "onboarding.phase.progressed": {
        "phase": 2,
        "trigger": "snapshot_count",
        "unlockedFeatures": ["timeline"],
    },
    "onboarding.contextual.prompt.shown": {"promptType": "first_risk", "actionTaken": "dismissed"},
    "signature.verification.success": {},
    "signature.verification.failed": {},
    "rules.cached.fallback": {},
}


def make_core_event(event: str = "save_attempt", /, **overrides: Any) -> Dict[str, Any]:
    """Build a valid canonical wire dict for *event*.

    Keyword overrides replace top-level keys; pass ``properties=`` to
    replace the whole property object, or ``props=`` to merge into it.
    """
    props_patch: Optional[Dict[str, Any]] = overrides.pop("props", None)
    payload: Dict[str, Any] = {
        "event": event,
        "event_version": "1.0.0",
        "timestamp": TIMESTAMP,
        "properties": copy.deepcopy(CORE_PROPERTIES[event]),
    }
    payload.update(overrides)
    if props_patch:
        payload["properties"].update(props_patch)
    return payload


def make_legacy_event(event: str = "snapback.used", /, **overrides: Any) -> Dict[str, Any]:
    """Build a valid legacy wire dict for *event* (same override rules)."""
    props_patch: Optional[Dict[str, Any]] = overrides.pop("props", None)
    payload: Dict[str, Any] = {
        "event": event,
        "timestamp": TIMESTAMP,
        "properties": copy.deepcopy(LEGACY_PROPERTIES[event]),
    }
    payload.update(overrides)
    if props_patch:
        payload["properties"].update(props_patch)
    return payload


class SequentialIds:
    """Deterministic id factory: ``snap-1``, ``issue-2``, ..."""

    def __init__(self) -> None:
        self.calls: List[Optional[str]] = []

    def __call__(self, prefix: Optional[str] = None) -> str:
        self.calls.append(prefix)
        return f"{prefix}-{len(self.calls)}"


@pytest.fixture
def core_payload() -> Callable[..., Dict[str, Any]]:
    """Builder for canonical wire dicts, see :func:`make_core_event`."""
    return make_core_event


@pytest.fixture
def legacy_payload() -> Callable[..., Dict[str, Any]]:
    """Builder for legacy wire dicts, see :func:`make_legacy_event`."""
    return make_legacy_event


@pytest.fixture
def id_factory() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def mapper(id_factory: SequentialIds) -> LegacyEventMapper:
    """Mapper with deterministic ids and the default logger."""
    return LegacyEventMapper(id_factory=id_factory)


@pytest.fixture
def mapper_logger() -> Iterator[logging.Logger]:
    """The mapper's logger, with DEBUG enabled for the duration of a test."""
    logger = logging.getLogger("snapback_events.mapper")
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    yield logger
    logger.setLevel(previous)
