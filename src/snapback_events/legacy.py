"""Legacy telemetry event contracts.

The historical, ad-hoc event taxonomy that predates the canonical events in
:mod:`snapback_events.core`. Property names on the wire are camelCase; the
models expose snake_case attributes and accept either spelling on input.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Optional, Type, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    TypeAdapter,
)

from snapback_events.models import Number

# ── Constants ────────────────────────────────────────────────────────────────

EXTENSION_ACTIVATED: str = "extension.activated"
EXTENSION_DEACTIVATED: str = "extension.deactivated"
COMMAND_EXECUTION: str = "command.execution"
LEGACY_SNAPSHOT_CREATED: str = "snapshot.created"
SNAPBACK_USED: str = "snapback.used"
RISK_DETECTED: str = "risk.detected"
VIEW_ACTIVATED: str = "view.activated"
NOTIFICATION_SHOWN: str = "notification.shown"
FEATURE_USED: str = "feature.used"
ERROR: str = "error"
WALKTHROUGH_STEP_COMPLETED: str = "walkthrough.step.completed"
ONBOARDING_PROTECTION_ASSIGNED: str = "onboarding.protection.assigned"
ONBOARDING_PHASE_PROGRESSED: str = "onboarding.phase.progressed"
ONBOARDING_CONTEXTUAL_PROMPT_SHOWN: str = "onboarding.contextual.prompt.shown"
SIGNATURE_VERIFICATION_SUCCESS: str = "signature.verification.success"
SIGNATURE_VERIFICATION_FAILED: str = "signature.verification.failed"
RULES_CACHED_FALLBACK: str = "rules.cached.fallback"

LEGACY_EVENT_TYPES: FrozenSet[str] = frozenset({
    EXTENSION_ACTIVATED,
    EXTENSION_DEACTIVATED,
    COMMAND_EXECUTION,
    LEGACY_SNAPSHOT_CREATED,
    SNAPBACK_USED,
    RISK_DETECTED,
    VIEW_ACTIVATED,
    NOTIFICATION_SHOWN,
    FEATURE_USED,
    ERROR,
    WALKTHROUGH_STEP_COMPLETED,
    ONBOARDING_PROTECTION_ASSIGNED,
    ONBOARDING_PHASE_PROGRESSED,
    ONBOARDING_CONTEXTUAL_PROMPT_SHOWN,
    SIGNATURE_VERIFICATION_SUCCESS,
    SIGNATURE_VERIFICATION_FAILED,
    RULES_CACHED_FALLBACK,
})


# ── Base models ──────────────────────────────────────────────────────────────


class LegacyProperties(BaseModel):
    """Base for legacy property objects (camelCase on the wire)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class EmptyProperties(LegacyProperties):
    """Properties of events that carry no data."""

    pass


class LegacyEventBase(BaseModel):
    """Envelope shared by legacy events."""

    model_config = ConfigDict(frozen=True)

    timestamp: Number = Field(..., description="Capture time in epoch milliseconds")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the legacy wire shape."""
        return self.model_dump(mode="json", by_alias=True)


# ── Property and event models ────────────────────────────────────────────────


class ExtensionActivatedProperties(LegacyProperties):
    version: StrictStr
    vscode_version: StrictStr = Field(..., alias="vscodeVersion")


class ExtensionActivatedEvent(LegacyEventBase):
    event: Literal["extension.activated"]
    properties: ExtensionActivatedProperties


class ExtensionDeactivatedEvent(LegacyEventBase):
    event: Literal["extension.deactivated"]
    properties: EmptyProperties = Field(default_factory=EmptyProperties)


class CommandExecutionProperties(LegacyProperties):
    command: StrictStr
    duration: Number
    success: StrictBool


class CommandExecutionEvent(LegacyEventBase):
    event: Literal["command.execution"]
    properties: CommandExecutionProperties


class LegacySnapshotCreatedProperties(LegacyProperties):
    method: StrictStr
    files_count: Number = Field(..., alias="filesCount")


class LegacySnapshotCreatedEvent(LegacyEventBase):
    event: Literal["snapshot.created"]
    properties: LegacySnapshotCreatedProperties


class SnapBackUsedProperties(LegacyProperties):
    files_restored: Number = Field(..., alias="filesRestored")
    duration: Number
    success: StrictBool


class SnapBackUsedEvent(LegacyEventBase):
    event: Literal["snapback.used"]
    properties: SnapBackUsedProperties


class RiskDetectedProperties(LegacyProperties):
    risk_level: StrictStr = Field(..., alias="riskLevel")
    patterns: List[StrictStr]
    confidence: Number


class RiskDetectedEvent(LegacyEventBase):
    event: Literal["risk.detected"]
    properties: RiskDetectedProperties


class ViewActivatedProperties(LegacyProperties):
    view_id: StrictStr = Field(..., alias="viewId")


class ViewActivatedEvent(LegacyEventBase):
    event: Literal["view.activated"]
    properties: ViewActivatedProperties


class NotificationShownProperties(LegacyProperties):
    notification_type: StrictStr = Field(..., alias="notificationType")
    action_taken: Optional[StrictStr] = Field(..., alias="actionTaken")


class NotificationShownEvent(LegacyEventBase):
    event: Literal["notification.shown"]
    properties: NotificationShownProperties


class FeatureUsedProperties(LegacyProperties):
    feature: StrictStr


class FeatureUsedEvent(LegacyEventBase):
    event: Literal["feature.used"]
    properties: FeatureUsedProperties


class ErrorProperties(LegacyProperties):
    error_type: StrictStr = Field(..., alias="errorType")
    error_message: StrictStr = Field(..., alias="errorMessage")


class ErrorEvent(LegacyEventBase):
    event: Literal["error"]
    properties: ErrorProperties


class WalkthroughStepCompletedProperties(LegacyProperties):
    step_id: StrictStr = Field(..., alias="stepId")
    step_title: StrictStr = Field(..., alias="stepTitle")


class WalkthroughStepCompletedEvent(LegacyEventBase):
    event: Literal["walkthrough.step.completed"]
    properties: WalkthroughStepCompletedProperties


class OnboardingProtectionAssignedProperties(LegacyProperties):
    level: StrictStr
    trigger: StrictStr
    file_type: StrictStr = Field(..., alias="fileType")
    is_first_protection: StrictBool = Field(..., alias="isFirstProtection")


class OnboardingProtectionAssignedEvent(LegacyEventBase):
    event: Literal["onboarding.protection.assigned"]
    properties: OnboardingProtectionAssignedProperties


class OnboardingPhaseProgressedProperties(LegacyProperties):
    phase: Number
    trigger: StrictStr
    unlocked_features: List[StrictStr] = Field(..., alias="unlockedFeatures")


class OnboardingPhaseProgressedEvent(LegacyEventBase):
    event: Literal["onboarding.phase.progressed"]
    properties: OnboardingPhaseProgressedProperties


class OnboardingContextualPromptShownProperties(LegacyProperties):
    prompt_type: StrictStr = Field(..., alias="promptType")
    action_taken: Optional[StrictStr] = Field(..., alias="actionTaken")


class OnboardingContextualPromptShownEvent(LegacyEventBase):
    event: Literal["onboarding.contextual.prompt.shown"]
    properties: OnboardingContextualPromptShownProperties


class SignatureVerificationSuccessEvent(LegacyEventBase):
    event: Literal["signature.verification.success"]
    properties: EmptyProperties = Field(default_factory=EmptyProperties)


class SignatureVerificationFailedEvent(LegacyEventBase):
    event: Literal["signature.verification.failed"]
    properties: EmptyProperties = Field(default_factory=EmptyProperties)


class RulesCachedFallbackEvent(LegacyEventBase):
    event: Literal["rules.cached.fallback"]
    properties: EmptyProperties = Field(default_factory=EmptyProperties)


# ── Discriminated union and registry ─────────────────────────────────────────

LegacyEvent = Annotated[
    Union[
        ExtensionActivatedEvent,
        ExtensionDeactivatedEvent,
        CommandExecutionEvent,
        LegacySnapshotCreatedEvent,
        SnapBackUsedEvent,
        RiskDetectedEvent,
        ViewActivatedEvent,
        NotificationShownEvent,
        FeatureUsedEvent,
        ErrorEvent,
        WalkthroughStepCompletedEvent,
        OnboardingProtectionAssignedEvent,
        OnboardingPhaseProgressedEvent,
        OnboardingContextualPromptShownEvent,
        SignatureVerificationSuccessEvent,
        SignatureVerificationFailedEvent,
        RulesCachedFallbackEvent,
    ],
    Field(discriminator="event"),
]

LEGACY_EVENT_ADAPTER: TypeAdapter[Any] = TypeAdapter(LegacyEvent)

LEGACY_EVENT_MODELS: Dict[str, Type[LegacyEventBase]] = {
    EXTENSION_ACTIVATED: ExtensionActivatedEvent,
    EXTENSION_DEACTIVATED: ExtensionDeactivatedEvent,
    COMMAND_EXECUTION: CommandExecutionEvent,
    LEGACY_SNAPSHOT_CREATED: LegacySnapshotCreatedEvent,
    SNAPBACK_USED: SnapBackUsedEvent,
    RISK_DETECTED: RiskDetectedEvent,
    VIEW_ACTIVATED: ViewActivatedEvent,
    NOTIFICATION_SHOWN: NotificationShownEvent,
    FEATURE_USED: FeatureUsedEvent,
    ERROR: ErrorEvent,
    WALKTHROUGH_STEP_COMPLETED: WalkthroughStepCompletedEvent,
    ONBOARDING_PROTECTION_ASSIGNED: OnboardingProtectionAssignedEvent,
    ONBOARDING_PHASE_PROGRESSED: OnboardingPhaseProgressedEvent,
    ONBOARDING_CONTEXTUAL_PROMPT_SHOWN: OnboardingContextualPromptShownEvent,
    SIGNATURE_VERIFICATION_SUCCESS: SignatureVerificationSuccessEvent,
    SIGNATURE_VERIFICATION_FAILED: SignatureVerificationFailedEvent,
    RULES_CACHED_FALLBACK: RulesCachedFallbackEvent,
}
