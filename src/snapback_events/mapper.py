"""Mapping of legacy telemetry events onto the canonical taxonomy.

Every legacy tag has an explicit entry in :data:`LEGACY_TO_CORE`. Tags that
map to ``None`` have no canonical equivalent; they only feed derived metrics
computed elsewhere.

Fields a legacy event cannot supply are filled with documented placeholders:

    session_id        "legacy_session"
    snapshot_id       generated, prefix "snap"
    issue_id          generated, prefix "issue"
    latency_ms        0
    file_kind         "unknown" (risk.detected only)
    bytes_*           estimated from filesCount (1024 / 512 bytes per file)

A snapback.used record claiming more than MAX_FILES_RESTORED restored files
is treated as malformed and left unmapped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel

from snapback_events import core, legacy
from snapback_events.ids import IdFactory, generate_id
from snapback_events.models import (
    IssueType,
    Outcome,
    ProtectionLevel,
    Severity,
)
from snapback_events.risk import parse_severity
from snapback_events.validation import parse_core_event, parse_legacy_event

LEGACY_SESSION_ID: str = "legacy_session"
LEGACY_FILE_PLACEHOLDER: str = "legacy_file"
LEGACY_FILE_KIND: str = "unknown"
ESTIMATED_BYTES_ORIGINAL_PER_FILE: int = 1024
ESTIMATED_BYTES_STORED_PER_FILE: int = 512
RISK_RECOMMENDATION: str = "Review detected risk pattern"
# Upper bound on placeholder entries built for one snapback.used record
MAX_FILES_RESTORED: int = 100_000

LEGACY_TO_CORE: Dict[str, Optional[str]] = {
    legacy.ONBOARDING_PROTECTION_ASSIGNED: core.SAVE_ATTEMPT,
    legacy.LEGACY_SNAPSHOT_CREATED: core.SNAPSHOT_CREATED,
    legacy.SNAPBACK_USED: core.SESSION_RESTORED,
    legacy.RISK_DETECTED: core.ISSUE_CREATED,
    legacy.EXTENSION_ACTIVATED: None,
    legacy.EXTENSION_DEACTIVATED: None,
    legacy.COMMAND_EXECUTION: None,
    legacy.VIEW_ACTIVATED: None,
    legacy.NOTIFICATION_SHOWN: None,
    legacy.FEATURE_USED: None,
    legacy.ERROR: None,
    legacy.WALKTHROUGH_STEP_COMPLETED: None,
    legacy.ONBOARDING_PHASE_PROGRESSED: None,
    legacy.ONBOARDING_CONTEXTUAL_PROMPT_SHOWN: None,
    legacy.SIGNATURE_VERIFICATION_SUCCESS: None,
    legacy.SIGNATURE_VERIFICATION_FAILED: None,
    legacy.RULES_CACHED_FALLBACK: None,
}

_PROTECTION_BY_LEVEL: Dict[str, ProtectionLevel] = {
    "low": ProtectionLevel.WATCH,
    "medium": ProtectionLevel.WARN,
    "high": ProtectionLevel.BLOCK,
    "critical": ProtectionLevel.BLOCK,
}

_MOCK_MARKERS = ("mock", "test")
_PHANTOM_MARKERS = ("phantom", "unused")


def classify_issue(patterns: Iterable[str]) -> IssueType:
    """Pick an issue type from detected pattern names.

    Mock/test markers win over phantom/unused markers; anything else is a
    secret. Matching is a case-sensitive substring test.
    """
    patterns = list(patterns)
    if any(m in p for p in patterns for m in _MOCK_MARKERS):
        return IssueType.MOCK
    if any(m in p for p in patterns for m in _PHANTOM_MARKERS):
        return IssueType.PHANTOM
    return IssueType.SECRET


# ---------------------------------------------------------------------------
# Projections: legacy model -> canonical wire dict
# ---------------------------------------------------------------------------


def _project_protection_assigned(
    event: legacy.OnboardingProtectionAssignedEvent, new_id: IdFactory
) -> Dict[str, Any]:
    props = event.properties
    return {
        "event": core.SAVE_ATTEMPT,
        "timestamp": event.timestamp,
        "properties": {
            "protection": _PROTECTION_BY_LEVEL.get(props.level, ProtectionLevel.WATCH),
            "severity": parse_severity(props.level, Severity.LOW),
            "file_kind": props.file_type,
            "reason": f"onboarding_{props.trigger}",
            # onboarding assignments never involve AI
            "ai_present": False,
            "ai_burst": False,
            "outcome": Outcome.SAVED,
        },
    }


def _project_snapshot_created(
    event: legacy.LegacySnapshotCreatedEvent, new_id: IdFactory
) -> Dict[str, Any]:
    files_count = event.properties.files_count
    return {
        "event": core.SNAPSHOT_CREATED,
        "timestamp": event.timestamp,
        "properties": {
            "session_id": LEGACY_SESSION_ID,
            "snapshot_id": new_id("snap"),
            "bytes_original": files_count * ESTIMATED_BYTES_ORIGINAL_PER_FILE,
            "bytes_stored": files_count * ESTIMATED_BYTES_STORED_PER_FILE,
            "dedup_hit": False,
            "latency_ms": 0,
        },
    }


def _project_snapback_used(
    event: legacy.SnapBackUsedEvent, new_id: IdFactory
) -> Dict[str, Any]:
    props = event.properties
    count = props.files_restored
    if count < 0 or count > MAX_FILES_RESTORED or count != int(count):
        raise ValueError(
            f"filesRestored must be an integer in 0..{MAX_FILES_RESTORED}; got {count!r}"
        )
    return {
        "event": core.SESSION_RESTORED,
        "timestamp": event.timestamp,
        "properties": {
            "session_id": LEGACY_SESSION_ID,
            "files_restored": [LEGACY_FILE_PLACEHOLDER] * int(count),
            "time_to_restore_ms": props.duration,
            "reason": "user_initiated" if props.success else "failed",
        },
    }


def _project_risk_detected(
    event: legacy.RiskDetectedEvent, new_id: IdFactory
) -> Dict[str, Any]:
    props = event.properties
    return {
        "event": core.ISSUE_CREATED,
        "timestamp": event.timestamp,
        "properties": {
            "issue_id": new_id("issue"),
            "session_id": LEGACY_SESSION_ID,
            "file_kind": LEGACY_FILE_KIND,
            "type": classify_issue(props.patterns),
            "severity": parse_severity(props.risk_level, Severity.MEDIUM),
            "recommendation": RISK_RECOMMENDATION,
        },
    }


Projection = Callable[[Any, IdFactory], Dict[str, Any]]

_PROJECTIONS: Dict[str, Projection] = {
    legacy.ONBOARDING_PROTECTION_ASSIGNED: _project_protection_assigned,
    legacy.LEGACY_SNAPSHOT_CREATED: _project_snapshot_created,
    legacy.SNAPBACK_USED: _project_snapback_used,
    legacy.RISK_DETECTED: _project_risk_detected,
}


class LegacyEventMapper:
    """Maps legacy events to canonical events.

    Stateless apart from its collaborators, so independent instances (or one
    shared instance) can be used from any number of callers.

    Args:
        logger: Receives diagnostics for records that cannot be mapped.
            Defaults to the ``snapback_events.mapper`` logger, which is
            silent unless the application configures logging.
        id_factory: Generates identifiers the legacy shapes lack. Called
            with a prefix. Defaults to :func:`snapback_events.ids.generate_id`.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self._logger = (
            logger if logger is not None else logging.getLogger("snapback_events.mapper")
        )
        self._id_factory: IdFactory = id_factory if id_factory is not None else generate_id

    def map_event(self, event: object) -> Optional[Any]:
        """Map one legacy event to its canonical counterpart.

        Args:
            event: A legacy wire dict or a legacy event model.

        Returns:
            The canonical event, or ``None`` when the tag has no canonical
            equivalent, is unknown, or the record cannot be converted.
            Never raises.
        """
        if isinstance(event, BaseModel):
            event = event.model_dump(by_alias=True)
        if not isinstance(event, Mapping):
            self._logger.debug("Ignoring non-object legacy record: %r", type(event).__name__)
            return None

        tag = event.get("event")
        if not isinstance(tag, str) or tag not in LEGACY_TO_CORE:
            self._logger.debug("No mapping for unknown legacy event type: %r", tag)
            return None

        projection = _PROJECTIONS.get(tag)
        if projection is None:
            self._logger.debug("Legacy event %s has no canonical equivalent", tag)
            return None

        try:
            parsed = parse_legacy_event(event)
            return parse_core_event(projection(parsed, self._id_factory))
        except Exception as e:
            self._logger.warning("Failed to map legacy %s event: %s", tag, e)
            return None


def map_legacy_events(
    events: Iterable[object],
    mapper: Optional[LegacyEventMapper] = None,
) -> List[Any]:
    """Map a batch and keep only the events that have a canonical form."""
    active = mapper if mapper is not None else LegacyEventMapper()
    mapped = []
    for event in events:
        result = active.map_event(event)
        if result is not None:
            mapped.append(result)
    return mapped
