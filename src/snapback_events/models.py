"""Shared enumerations, constants and exceptions for snapback-events."""
from enum import Enum
from typing import Dict, Tuple, Union

from pydantic import StrictFloat, StrictInt

EVENT_VERSION: str = "1.0.0"

# JSON number: ints stay ints, bools and numeric strings are rejected
Number = Union[StrictInt, StrictFloat]


class ProtectionLevel(str, Enum):
    """Protection level applied to a file."""

    WATCH = "watch"
    WARN = "warn"
    BLOCK = "block"


class PolicyLevel(str, Enum):
    """Protection level on either side of a policy change."""

    WATCH = "watch"
    WARN = "warn"
    BLOCK = "block"
    UNPROTECTED = "unprotected"


class Severity(str, Enum):
    """Risk bucket derived from a 0-10 risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER.index(self)


SEVERITY_ORDER: Tuple[Severity, ...] = (
    Severity.LOW,
    Severity.MEDIUM,
    Severity.HIGH,
    Severity.CRITICAL,
)


class Outcome(str, Enum):
    """Outcome of a save attempt."""

    SAVED = "saved"
    CANCELED = "canceled"
    BLOCKED = "blocked"


class IssueType(str, Enum):
    """Kind of issue detected in a file."""

    SECRET = "secret"
    MOCK = "mock"
    PHANTOM = "phantom"


class Resolution(str, Enum):
    """How an issue was resolved."""

    FIXED = "fixed"
    IGNORED = "ignored"
    ALLOWLISTED = "allowlisted"


class AIAssistLevel(str, Enum):
    """AI assistance level inferred from change patterns."""

    NONE = "none"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    UNKNOWN = "unknown"


class AIProvider(str, Enum):
    """Detected AI tool."""

    CURSOR = "cursor"
    CLAUDE = "claude"
    UNKNOWN = "unknown"
    NONE = "none"


SEVERITY_BY_VALUE: Dict[str, Severity] = {s.value: s for s in Severity}


# Custom Exceptions
class SnapbackEventsError(Exception):
    """Base exception for all library errors."""
    pass


class EventValidationError(SnapbackEventsError):
    """A payload does not conform to its event contract."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MigrationError(SnapbackEventsError):
    """A batch migration could not read, parse or write its files."""
    pass


class UnknownRiskScaleError(SnapbackEventsError):
    """Raised when a risk scale name is not one of the supported scales."""

    def __init__(self, scale: object) -> None:
        self.scale = scale
        super().__init__(
            f"Unknown risk scale: {scale!r}. "
            f"Known values: 0-1, 0-10, 0-100"
        )
