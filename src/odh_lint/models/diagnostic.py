"""Diagnostic result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from odh_lint.core.errors import InvalidConditionError, InvalidResultError
from odh_lint.models.condition import Condition, ConditionStatus, Impact, Severity

STATUS_PASS = "Pass"
STATUS_FAIL = "Fail"
STATUS_ERROR = "Error"
STATUS_UNKNOWN = "Unknown"


def is_valid_annotation_key(key: object) -> bool:
    """Return True if *key* is in ``domain/key`` form with a dotted domain.

    Valid: ``openshiftai.io/version``. Invalid: ``version``, ``openshiftai/version``,
    ``openshiftai.io/``.
    """
    if not isinstance(key, str):
        return False
    parts = key.split("/")
    if len(parts) != 2:
        return False
    domain, name = parts
    if not domain or not name:
        return False
    return "." in domain


@dataclass
class ImpactedObject:
    kind: str
    name: str
    namespace: str = ""
    api_version: str = ""
    annotations: dict[str, str] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        name = f"{self.namespace}/{self.name}" if self.namespace else self.name
        return f"{name} ({self.kind})"

    @classmethod
    def from_resource(cls, obj: dict) -> ImpactedObject:
        metadata = obj.get("metadata", {}) or {}
        return cls(
            kind=obj.get("kind", ""),
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", "") or "",
            api_version=obj.get("apiVersion", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": {"name": self.name},
        }
        if self.namespace:
            data["metadata"]["namespace"] = self.namespace
        if self.annotations:
            data["metadata"]["annotations"] = dict(self.annotations)
        return data


@dataclass
class DiagnosticResult:
    group: str
    kind: str
    name: str
    description: str = ""
    annotations: dict[str, str] = field(default_factory=dict)
    conditions: list[Condition] = field(default_factory=list)
    impacted_objects: list[ImpactedObject] = field(default_factory=list)

    def set_condition(self, condition: Condition) -> None:
        """Append *condition*, replacing an existing condition of the same type in place."""
        for i, existing in enumerate(self.conditions):
            if existing.type == condition.type:
                self.conditions[i] = condition
                return
        self.conditions.append(condition)

    def validate(self) -> None:
        """Raise InvalidResultError on the first schema violation found."""
        if not self.group:
            raise InvalidResultError("group must not be empty")
        if not self.kind:
            raise InvalidResultError("kind must not be empty")
        if not self.name:
            raise InvalidResultError("name must not be empty")
        for key in self.annotations:
            if not is_valid_annotation_key(key):
                raise InvalidResultError(
                    f"annotation key {key!r} must be in domain/key format (e.g., openshiftai.io/version)"
                )
        if not self.conditions:
            raise InvalidResultError("status.conditions must contain at least one condition")
        for condition in self.conditions:
            if not isinstance(condition, Condition):
                raise InvalidResultError(f"conditions must hold Condition objects, got {type(condition).__name__}")
            try:
                condition.validate()
            except InvalidConditionError as e:
                raise InvalidResultError(str(e)) from e

    @property
    def is_failing(self) -> bool:
        return any(c.is_failing for c in self.conditions)

    @property
    def message(self) -> str:
        """The first condition's message is the primary message."""
        if not self.conditions:
            return ""
        return self.conditions[0].message

    @property
    def severity(self) -> Severity | None:
        if not self.conditions:
            return None
        return max((c.effective_severity for c in self.conditions), key=lambda s: s.rank)

    @property
    def impact(self) -> Impact | None:
        if not self.conditions:
            return None
        return max((c.effective_impact for c in self.conditions), key=lambda i: i.rank)

    @property
    def status_string(self) -> str:
        if not self.conditions:
            return STATUS_UNKNOWN
        for c in self.conditions:
            if c.status is ConditionStatus.FALSE:
                return STATUS_FAIL
            if c.status is ConditionStatus.UNKNOWN:
                return STATUS_ERROR
        return STATUS_PASS

    @property
    def remediation(self) -> str:
        for c in self.conditions:
            if c.is_failing and c.remediation:
                return c.remediation
        return ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "group": self.group,
            "kind": self.kind,
            "name": self.name,
        }
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        data["spec"] = {"description": self.description}
        data["status"] = {"conditions": [c.to_dict() for c in self.conditions]}
        if self.impacted_objects:
            data["impactedObjects"] = [o.to_dict() for o in self.impacted_objects]
        return data


def new_result(group: str, kind: str, name: str, description: str = "") -> DiagnosticResult:
    """Create an empty result ready for conditions to be appended."""
    return DiagnosticResult(
        group=group,
        kind=kind,
        name=name,
        description=description,
        annotations={},
        conditions=[],
    )


@dataclass
class DiagnosticResultList:
    cluster_version: str | None = None
    target_version: str | None = None
    results: list[DiagnosticResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.cluster_version is not None:
            data["clusterVersion"] = self.cluster_version
        if self.target_version is not None:
            data["targetVersion"] = self.target_version
        data["results"] = [r.to_dict() for r in self.results]
        return data
