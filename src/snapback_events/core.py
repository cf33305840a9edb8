"""Canonical (core) telemetry event contracts.

Seven versioned event shapes, discriminated by the ``event`` tag. Every event
carries the envelope ``event_version`` / ``timestamp`` plus a tag-specific
``properties`` object.

Sections:
    1. Constants (event type strings)
    2. Envelope base model
    3. Property and event models
    4. Discriminated union and registry
"""

from __future__ import annotations

import time
from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Optional, Type, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
    field_validator,
)

from snapback_events.models import (
    EVENT_VERSION,
    AIAssistLevel,
    AIProvider,
    IssueType,
    Number,
    Outcome,
    PolicyLevel,
    ProtectionLevel,
    Resolution,
    Severity,
)

# ── Section 1: Constants ─────────────────────────────────────────────────────

SAVE_ATTEMPT: str = "save_attempt"
SNAPSHOT_CREATED: str = "snapshot_created"
SESSION_FINALIZED: str = "session_finalized"
ISSUE_CREATED: str = "issue_created"
ISSUE_RESOLVED: str = "issue_resolved"
SESSION_RESTORED: str = "session_restored"
POLICY_CHANGED: str = "policy_changed"

CORE_EVENT_TYPES: FrozenSet[str] = frozenset({
    SAVE_ATTEMPT,
    SNAPSHOT_CREATED,
    SESSION_FINALIZED,
    ISSUE_CREATED,
    ISSUE_RESOLVED,
    SESSION_RESTORED,
    POLICY_CHANGED,
})


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


# ── Section 2: Envelope ──────────────────────────────────────────────────────


class CoreEventBase(BaseModel):
    """Envelope shared by every canonical event.

    Not intended to be instantiated directly; use one of the seven concrete
    event models or :data:`CORE_EVENT_ADAPTER`.
    """

    model_config = ConfigDict(frozen=True)

    event_version: StrictStr = Field(
        default=EVENT_VERSION,
        description="Version of the canonical event taxonomy",
    )
    timestamp: StrictInt = Field(
        default_factory=now_ms,
        description="Capture time in epoch milliseconds",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape (JSON-compatible, wire field names)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Section 3: Property and event models ─────────────────────────────────────


class SaveAttemptProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    protection: ProtectionLevel = Field(
        ..., description="Protection level applied to the file"
    )
    severity: Severity = Field(..., description="Severity of the risk detected")
    file_kind: StrictStr = Field(
        ..., description="Type of file being protected (e.g., 'typescript')"
    )
    reason: StrictStr = Field(..., description="Reason for the save attempt")
    ai_present: StrictBool = Field(
        ..., description="Whether AI was involved in the decision"
    )
    ai_burst: StrictBool = Field(
        ..., description="Whether this was part of an AI burst operation"
    )
    outcome: Outcome = Field(..., description="Outcome of the save attempt")


class SaveAttemptEvent(CoreEventBase):
    """A user tried to save a protected file."""

    event: Literal["save_attempt"]
    properties: SaveAttemptProperties


class SnapshotCreatedProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: StrictStr = Field(..., description="Session identifier")
    snapshot_id: StrictStr = Field(..., description="Snapshot identifier")
    bytes_original: Number = Field(
        ..., description="Original size of the content in bytes"
    )
    bytes_stored: Number = Field(
        ..., description="Size of the stored snapshot in bytes"
    )
    dedup_hit: StrictBool = Field(
        ..., description="Whether stored content matched existing content"
    )
    latency_ms: Number = Field(
        ..., description="Time taken to create the snapshot in milliseconds"
    )


class SnapshotCreatedEvent(CoreEventBase):
    """A snapshot was written to storage."""

    event: Literal["snapshot_created"]
    properties: SnapshotCreatedProperties


class SessionFinalizedProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: StrictStr = Field(..., description="Session identifier")
    files: List[StrictStr] = Field(..., description="Files touched in the session")
    triggers: List[StrictStr] = Field(
        ..., description="Triggers that activated during the session"
    )
    duration_ms: Number = Field(
        ..., description="Duration of the session in milliseconds"
    )
    ai_present: StrictBool = Field(
        ..., description="Whether AI was involved in the session"
    )
    ai_burst: StrictBool = Field(
        ..., description="Whether this was part of an AI burst operation"
    )
    highest_severity: Severity = Field(
        ..., description="Highest severity of issues in the session"
    )
    ai_assist_level: Optional[AIAssistLevel] = Field(
        None, description="AI assistance level inferred from change patterns"
    )
    ai_confidence_score: Optional[Number] = Field(
        None, description="Confidence score for AI detection (0-10)"
    )
    ai_provider: Optional[AIProvider] = Field(
        None, description="Detected AI tool/provider"
    )
    ai_large_insert_count: Optional[StrictInt] = Field(
        None, ge=0, description="Count of large insertions detected"
    )
    ai_total_chars: Optional[StrictInt] = Field(
        None, ge=0, description="Total characters in large insertions"
    )

    @field_validator("ai_confidence_score")
    @classmethod
    def _check_confidence_range(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0 <= v <= 10:
            raise ValueError("ai_confidence_score must be between 0 and 10")
        return v


class SessionFinalizedEvent(CoreEventBase):
    """A work session was closed."""

    event: Literal["session_finalized"]
    properties: SessionFinalizedProperties


class IssueCreatedProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_id: StrictStr = Field(..., description="Issue identifier")
    session_id: StrictStr = Field(..., description="Session identifier")
    file_kind: StrictStr = Field(
        ..., description="Type of file where the issue was detected"
    )
    type: IssueType = Field(..., description="Type of issue detected")
    severity: Severity = Field(..., description="Severity of the issue")
    recommendation: StrictStr = Field(
        ..., description="Recommendation for resolving the issue"
    )


class IssueCreatedEvent(CoreEventBase):
    """An issue (secret, mock, phantom dependency) was detected."""

    event: Literal["issue_created"]
    properties: IssueCreatedProperties


class IssueResolvedProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_id: StrictStr = Field(..., description="Issue identifier")
    resolution: Resolution = Field(..., description="How the issue was resolved")


class IssueResolvedEvent(CoreEventBase):
    """A previously reported issue was closed."""

    event: Literal["issue_resolved"]
    properties: IssueResolvedProperties


class SessionRestoredProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: StrictStr = Field(..., description="Session identifier")
    files_restored: List[StrictStr] = Field(
        ..., description="Files that were restored"
    )
    time_to_restore_ms: Number = Field(
        ..., description="Time taken to restore the session in milliseconds"
    )
    reason: StrictStr = Field(..., description="Reason for the restoration")


class SessionRestoredEvent(CoreEventBase):
    """Files of a session were rolled back."""

    event: Literal["session_restored"]
    properties: SessionRestoredProperties


class PolicyChangedProperties(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pattern: StrictStr = Field(
        ..., description="File pattern the policy applies to (e.g., '*.env')"
    )
    from_level: PolicyLevel = Field(
        ..., alias="from", description="Previous protection level"
    )
    to: PolicyLevel = Field(..., description="New protection level")
    source: StrictStr = Field(
        ..., description="Source of the policy change (e.g., 'dashboard')"
    )


class PolicyChangedEvent(CoreEventBase):
    """The protection level for a file pattern changed."""

    event: Literal["policy_changed"]
    properties: PolicyChangedProperties


# ── Section 4: Discriminated union and registry ──────────────────────────────

CoreEvent = Annotated[
    Union[
        SaveAttemptEvent,
        SnapshotCreatedEvent,
        SessionFinalizedEvent,
        IssueCreatedEvent,
        IssueResolvedEvent,
        SessionRestoredEvent,
        PolicyChangedEvent,
    ],
    Field(discriminator="event"),
]

CORE_EVENT_ADAPTER: TypeAdapter[Any] = TypeAdapter(CoreEvent)

CORE_EVENT_MODELS: Dict[str, Type[CoreEventBase]] = {
    SAVE_ATTEMPT: SaveAttemptEvent,
    SNAPSHOT_CREATED: SnapshotCreatedEvent,
    SESSION_FINALIZED: SessionFinalizedEvent,
    ISSUE_CREATED: IssueCreatedEvent,
    ISSUE_RESOLVED: IssueResolvedEvent,
    SESSION_RESTORED: SessionRestoredEvent,
    POLICY_CHANGED: PolicyChangedEvent,
}
