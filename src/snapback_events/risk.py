"""Risk score conversion utilities.

The canonical scale is 0-10. Older producers report scores on 0-1 or 0-100;
every conversion here clamps instead of raising on out-of-range input.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Iterable, List, Tuple, Union

from snapback_events.models import (
    SEVERITY_BY_VALUE,
    Severity,
    UnknownRiskScaleError,
)


class RiskScale(str, Enum):
    """Supported risk scoring scales."""

    UNIT = "0-1"
    STANDARD = "0-10"
    PERCENT = "0-100"


# Upper bound of each scale
_SCALE_MAX = {
    RiskScale.UNIT: 1.0,
    RiskScale.STANDARD: 10.0,
    RiskScale.PERCENT: 100.0,
}

# Lower bound (inclusive) of each bucket above LOW, ascending
SEVERITY_THRESHOLDS: Tuple[Tuple[float, Severity], ...] = (
    (3.0, Severity.MEDIUM),
    (5.0, Severity.HIGH),
    (7.0, Severity.CRITICAL),
)

MAX_RISK_SCORE: float = 10.0


def _resolve_scale(scale: Union[RiskScale, str]) -> RiskScale:
    try:
        return RiskScale(scale)
    except ValueError:
        raise UnknownRiskScaleError(scale) from None


def _clamp(value: float, upper: float) -> float:
    return float(min(upper, max(0.0, value)))


def normalize_risk_score(score: float, from_scale: Union[RiskScale, str]) -> float:
    """Normalize a score on any supported scale to the 0-10 scale.

    Args:
        score: Risk score on ``from_scale``. Out-of-range and negative values
            are accepted and clamped.
        from_scale: ``"0-1"``, ``"0-10"`` or ``"0-100"``.

    Returns:
        Score on the 0-10 scale, always within ``[0, 10]``.

    Raises:
        UnknownRiskScaleError: If *from_scale* is not a supported scale.

    Example:
        >>> normalize_risk_score(0.5, "0-1")
        5.0
        >>> normalize_risk_score(150, "0-100")
        10.0
    """
    scale = _resolve_scale(from_scale)
    if scale is RiskScale.UNIT:
        return _clamp(score * 10, MAX_RISK_SCORE)
    if scale is RiskScale.PERCENT:
        return _clamp(score / 10, MAX_RISK_SCORE)
    return _clamp(score, MAX_RISK_SCORE)


def denormalize_risk_score(score: float, to_scale: Union[RiskScale, str]) -> float:
    """Convert a 0-10 score to another scale, clamped to that scale's range.

    >>> denormalize_risk_score(5.0, "0-1")
    0.5
    >>> denormalize_risk_score(8.0, "0-100")
    80.0
    """
    scale = _resolve_scale(to_scale)
    if scale is RiskScale.UNIT:
        return _clamp(score / 10, _SCALE_MAX[scale])
    if scale is RiskScale.PERCENT:
        return _clamp(score * 10, _SCALE_MAX[scale])
    return _clamp(score, _SCALE_MAX[scale])


def batch_normalize(
    scores: Iterable[float], from_scale: Union[RiskScale, str]
) -> List[float]:
    """Element-wise :func:`normalize_risk_score`."""
    scale = _resolve_scale(from_scale)
    return [normalize_risk_score(score, scale) for score in scores]


def severity_of(score: float) -> Severity:
    """Bucket a 0-10 score: [0,3) low, [3,5) medium, [5,7) high, [7,10] critical.

    The score is clamped to [0, 10] first.
    """
    clamped = _clamp(score, MAX_RISK_SCORE)
    severity = Severity.LOW
    for lower_bound, bucket in SEVERITY_THRESHOLDS:
        if clamped >= lower_bound:
            severity = bucket
    return severity


def parse_severity(value: object, default: Severity) -> Severity:
    """Carry a raw severity string over to :class:`Severity`.

    Anything that is not exactly one of the severity values yields *default*.
    """
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        return SEVERITY_BY_VALUE.get(value, default)
    return default


def exceeds_threshold(score: float, threshold: float) -> bool:
    """True when *score* reaches *threshold* (both on the 0-10 scale)."""
    return score >= threshold


def round_risk_score(score: float, decimals: int = 1) -> float:
    """Round half away from zero to *decimals* places.

    >>> round_risk_score(5.25)
    5.3
    >>> round_risk_score(-5.25)
    -5.3
    >>> round_risk_score(5.12345, 2)
    5.12
    """
    if not math.isfinite(score):
        return float(score)
    quantum = Decimal(1).scaleb(-decimals)
    try:
        rounded = Decimal(str(score)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context holds; nothing left to round
        return float(score)
    return float(rounded)
