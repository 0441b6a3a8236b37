"""Condition model: one True/False/Unknown judgment within a diagnostic result."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from odh_lint.core.errors import InvalidConditionError


class ConditionStatus(enum.Enum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class Severity(enum.Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


class Impact(enum.Enum):
    NONE = "none"
    ADVISORY = "advisory"
    BLOCKING = "blocking"

    @property
    def rank(self) -> int:
        return _IMPACT_RANK[self]


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.CRITICAL: 2}
_IMPACT_RANK = {Impact.NONE: 0, Impact.ADVISORY: 1, Impact.BLOCKING: 2}

# Standard condition types
TYPE_VALIDATED = "Validated"
TYPE_AVAILABLE = "Available"
TYPE_READY = "Ready"
TYPE_COMPATIBLE = "Compatible"
TYPE_CONFIGURED = "Configured"
TYPE_AUTHORIZED = "Authorized"

# Standard reasons - success
REASON_REQUIREMENTS_MET = "RequirementsMet"
REASON_RESOURCE_FOUND = "ResourceFound"
REASON_RESOURCE_AVAILABLE = "ResourceAvailable"
REASON_CONFIGURATION_VALID = "ConfigurationValid"
REASON_VERSION_COMPATIBLE = "VersionCompatible"
REASON_PERMISSION_GRANTED = "PermissionGranted"

# Standard reasons - failure
REASON_RESOURCE_NOT_FOUND = "ResourceNotFound"
REASON_RESOURCE_UNAVAILABLE = "ResourceUnavailable"
REASON_CONFIGURATION_INVALID = "ConfigurationInvalid"
REASON_VERSION_INCOMPATIBLE = "VersionIncompatible"
REASON_PERMISSION_DENIED = "PermissionDenied"
REASON_QUOTA_EXCEEDED = "QuotaExceeded"
REASON_DEPENDENCY_UNAVAILABLE = "DependencyUnavailable"
REASON_DEPRECATED = "Deprecated"
REASON_WORKLOADS_IMPACTED = "WorkloadsImpacted"

# Standard reasons - unknown / error
REASON_CHECK_EXECUTION_FAILED = "CheckExecutionFailed"
REASON_CHECK_SKIPPED = "CheckSkipped"
REASON_API_ACCESS_DENIED = "APIAccessDenied"
REASON_INSUFFICIENT_DATA = "InsufficientData"

_DEFAULT_REASONS = {
    ConditionStatus.TRUE: REASON_REQUIREMENTS_MET,
    ConditionStatus.FALSE: REASON_CONFIGURATION_INVALID,
    ConditionStatus.UNKNOWN: REASON_INSUFFICIENT_DATA,
}

_clock_lock = threading.Lock()
_last_timestamp: datetime | None = None


def _now() -> datetime:
    """Return the current UTC time, never earlier than a previously returned value."""
    global _last_timestamp
    with _clock_lock:
        now = datetime.now(timezone.utc)
        if _last_timestamp is not None and now < _last_timestamp:
            now = _last_timestamp
        _last_timestamp = now
        return now


def derive_severity(status: ConditionStatus) -> Severity:
    if status is ConditionStatus.FALSE:
        return Severity.CRITICAL
    if status is ConditionStatus.UNKNOWN:
        return Severity.WARNING
    return Severity.INFO


def derive_impact(status: ConditionStatus) -> Impact:
    """Default impact for a status.

    A False condition is advisory unless the check explicitly marks it blocking.
    """
    if status is ConditionStatus.TRUE:
        return Impact.NONE
    return Impact.ADVISORY


@dataclass
class Condition:
    type: str
    status: ConditionStatus
    reason: str
    message: str = ""
    last_transition_time: datetime = field(default_factory=_now)
    severity: Severity | None = None
    impact: Impact | None = None
    remediation: str = ""

    @property
    def effective_severity(self) -> Severity:
        if self.severity is not None:
            return self.severity
        return derive_severity(self.status)

    @property
    def effective_impact(self) -> Impact:
        if self.impact is not None:
            return self.impact
        return derive_impact(self.status)

    @property
    def is_failing(self) -> bool:
        return self.status is not ConditionStatus.TRUE

    def validate(self) -> None:
        if not self.type:
            raise InvalidConditionError("condition with empty type found")
        if not isinstance(self.status, ConditionStatus):
            raise InvalidConditionError(
                f"condition {self.type!r} has invalid status (must be True, False, or Unknown)"
            )
        if not self.reason:
            raise InvalidConditionError(f"condition {self.type!r} has empty reason")
        if self.severity is not None and not isinstance(self.severity, Severity):
            raise InvalidConditionError(
                f"condition {self.type!r} has invalid severity (must be critical, warning, or info)"
            )
        if self.impact is not None and not isinstance(self.impact, Impact):
            raise InvalidConditionError(
                f"condition {self.type!r} has invalid impact (must be none, advisory, or blocking)"
            )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "status": self.status.value,
            "reason": self.reason,
            "message": self.message,
            "lastTransitionTime": self.last_transition_time.isoformat(),
            "severity": self.effective_severity.value,
            "impact": self.effective_impact.value,
        }
        if self.remediation:
            data["remediation"] = self.remediation
        return data


def new_condition(
    condition_type: str,
    status: ConditionStatus,
    *message_args: Any,
    reason: str | None = None,
    message: str = "",
    severity: Severity | None = None,
    impact: Impact | None = None,
    remediation: str = "",
) -> Condition:
    """Build a validated condition.

    *message* is a ``%``-style template formatted with *message_args*. Reason
    defaults per status; severity and impact are derived from the status unless
    given explicitly.

    Example::

        new_condition(
            TYPE_COMPATIBLE,
            ConditionStatus.FALSE,
            state,
            reason=REASON_VERSION_INCOMPATIBLE,
            message="CodeFlare is enabled (state: %s) but will be removed in 3.x",
            impact=Impact.BLOCKING,
        )
    """
    if message_args:
        message = message % message_args
    condition = Condition(
        type=condition_type,
        status=status,
        reason=reason if reason is not None else _DEFAULT_REASONS.get(status, ""),
        message=message,
        severity=severity,
        impact=impact,
        remediation=remediation,
    )
    condition.validate()
    return condition
