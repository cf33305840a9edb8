"""
snapback-events: Versioned telemetry event contracts for SnapBack.

This library defines the canonical event taxonomy (seven versioned event
shapes), the legacy ad-hoc taxonomy it replaces, strict validation for both,
risk-score normalization, a trigger bitmask codec, and the mapping and batch
migration of legacy events onto canonical ones.

Example:
    >>> from snapback_events import LegacyEventMapper
    >>> mapper = LegacyEventMapper()
    >>> event = mapper.map_event({
    ...     "event": "snapback.used",
    ...     "timestamp": 1700000000000,
    ...     "properties": {"filesRestored": 2, "duration": 850, "success": True},
    ... })
    >>> event.event
    'session_restored'
    >>> event.properties.files_restored
    ['legacy_file', 'legacy_file']

Logging:
    Diagnostics are emitted on the ``snapback_events`` logger hierarchy
    (``snapback_events.mapper`` for unmapped records). A ``NullHandler`` is
    attached so the library is silent unless the application configures
    logging.
"""

import logging

__version__ = "1.0.0"

logging.getLogger("snapback_events").addHandler(logging.NullHandler())

# Shared enums, constants and exceptions
from snapback_events.models import (
    EVENT_VERSION,
    SEVERITY_ORDER,
    AIAssistLevel,
    AIProvider,
    EventValidationError,
    IssueType,
    MigrationError,
    Outcome,
    PolicyLevel,
    ProtectionLevel,
    Resolution,
    Severity,
    SnapbackEventsError,
    UnknownRiskScaleError,
)

# Canonical event contracts
from snapback_events.core import (
    CORE_EVENT_ADAPTER,
    CORE_EVENT_MODELS,
    CORE_EVENT_TYPES,
    ISSUE_CREATED,
    ISSUE_RESOLVED,
    POLICY_CHANGED,
    SAVE_ATTEMPT,
    SESSION_FINALIZED,
    SESSION_RESTORED,
    SNAPSHOT_CREATED,
    CoreEvent,
    CoreEventBase,
    IssueCreatedEvent,
    IssueCreatedProperties,
    IssueResolvedEvent,
    IssueResolvedProperties,
    PolicyChangedEvent,
    PolicyChangedProperties,
    SaveAttemptEvent,
    SaveAttemptProperties,
    SessionFinalizedEvent,
    SessionFinalizedProperties,
    SessionRestoredEvent,
    SessionRestoredProperties,
    SnapshotCreatedEvent,
    SnapshotCreatedProperties,
)

# Legacy event contracts
from snapback_events.legacy import (
    LEGACY_EVENT_ADAPTER,
    LEGACY_EVENT_MODELS,
    LEGACY_EVENT_TYPES,
    LegacyEvent,
    LegacyEventBase,
)

# Validation
from snapback_events.validation import (
    EventValidationResult,
    check_core_event,
    check_legacy_event,
    explain_core_event,
    explain_legacy_event,
    parse_core_event,
    parse_legacy_event,
    validate_core_event,
    validate_legacy_event,
)

# Risk scores
from snapback_events.risk import (
    MAX_RISK_SCORE,
    SEVERITY_THRESHOLDS,
    RiskScale,
    batch_normalize,
    denormalize_risk_score,
    exceeds_threshold,
    normalize_risk_score,
    round_risk_score,
    severity_of,
)

# Trigger bitmask
from snapback_events.triggers import (
    TRIGGER_BITS,
    Trigger,
    decode_triggers,
    encode_triggers,
    normalize_triggers,
)

# Identifiers
from snapback_events.ids import generate_id

# Legacy mapping and migration
from snapback_events.mapper import (
    LEGACY_TO_CORE,
    LegacyEventMapper,
    classify_issue,
    map_legacy_events,
)
from snapback_events.migration import (
    MigrationReport,
    MigrationResult,
    migrate,
    migrate_file,
)

# Public API (controls what's exported with "from snapback_events import *")
__all__ = [
    # Version
    "__version__",
    # Enums and constants
    "EVENT_VERSION",
    "SEVERITY_ORDER",
    "AIAssistLevel",
    "AIProvider",
    "IssueType",
    "Outcome",
    "PolicyLevel",
    "ProtectionLevel",
    "Resolution",
    "Severity",
    # Exceptions
    "SnapbackEventsError",
    "EventValidationError",
    "MigrationError",
    "UnknownRiskScaleError",
    # Canonical events
    "CORE_EVENT_ADAPTER",
    "CORE_EVENT_MODELS",
    "CORE_EVENT_TYPES",
    "SAVE_ATTEMPT",
    "SNAPSHOT_CREATED",
    "SESSION_FINALIZED",
    "ISSUE_CREATED",
    "ISSUE_RESOLVED",
    "SESSION_RESTORED",
    "POLICY_CHANGED",
    "CoreEvent",
    "CoreEventBase",
    "SaveAttemptEvent",
    "SaveAttemptProperties",
    "SnapshotCreatedEvent",
    "SnapshotCreatedProperties",
    "SessionFinalizedEvent",
    "SessionFinalizedProperties",
    "IssueCreatedEvent",
    "IssueCreatedProperties",
    "IssueResolvedEvent",
    "IssueResolvedProperties",
    "SessionRestoredEvent",
    "SessionRestoredProperties",
    "PolicyChangedEvent",
    "PolicyChangedProperties",
    # Legacy events
    "LEGACY_EVENT_ADAPTER",
    "LEGACY_EVENT_MODELS",
    "LEGACY_EVENT_TYPES",
    "LegacyEvent",
    "LegacyEventBase",
    # Validation
    "EventValidationResult",
    "check_core_event",
    "validate_core_event",
    "explain_core_event",
    "parse_core_event",
    "check_legacy_event",
    "validate_legacy_event",
    "explain_legacy_event",
    "parse_legacy_event",
    # Risk scores
    "MAX_RISK_SCORE",
    "SEVERITY_THRESHOLDS",
    "RiskScale",
    "normalize_risk_score",
    "denormalize_risk_score",
    "batch_normalize",
    "severity_of",
    "exceeds_threshold",
    "round_risk_score",
    # Triggers
    "TRIGGER_BITS",
    "Trigger",
    "encode_triggers",
    "decode_triggers",
    "normalize_triggers",
    # Identifiers
    "generate_id",
    # Mapping and migration
    "LEGACY_TO_CORE",
    "LegacyEventMapper",
    "classify_issue",
    "map_legacy_events",
    "MigrationResult",
    "MigrationReport",
    "migrate",
    "migrate_file",
]
