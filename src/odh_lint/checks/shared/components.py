"""Helpers for checks driven by DataScienceCluster component state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from odh_lint.config.settings import settings
from odh_lint.core.check import BaseCheck
from odh_lint.core.target import ResourceReader, Target
from odh_lint.models.condition import (
    REASON_REQUIREMENTS_MET,
    REASON_RESOURCE_NOT_FOUND,
    REASON_VERSION_COMPATIBLE,
    REASON_VERSION_INCOMPATIBLE,
    TYPE_AVAILABLE,
    TYPE_COMPATIBLE,
    TYPE_CONFIGURED,
    ConditionStatus,
    Impact,
    new_condition,
)
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.models.resources import DATA_SCIENCE_CLUSTER, DSC_INITIALIZATION, ResourceType
from odh_lint.utils.jsonpath import lookup_str
from odh_lint.utils.version_compare import major_minor_label

logger = logging.getLogger(__name__)

MANAGED = "Managed"
UNMANAGED = "Unmanaged"
REMOVED = "Removed"
ENABLED_STATES = (MANAGED, UNMANAGED)

ANNOTATION_MANAGEMENT_STATE = f"component.{settings.annotation_domain}/management-state"
ANNOTATION_TARGET_VERSION = f"check.{settings.annotation_domain}/target-version"


def get_singleton(reader: ResourceReader | None, resource_type: ResourceType) -> dict | None:
    """Return the single instance of a cluster-scoped singleton, or None."""
    if reader is None:
        return None
    items = reader.list_resources(resource_type)
    if not items:
        return None
    if len(items) > 1:
        logger.debug("Found %d %s instances, using the first", len(items), resource_type.kind)
    return items[0]


def get_data_science_cluster(reader: ResourceReader | None) -> dict | None:
    return get_singleton(reader, DATA_SCIENCE_CLUSTER)


def get_dsc_initialization(reader: ResourceReader | None) -> dict | None:
    return get_singleton(reader, DSC_INITIALIZATION)


def get_management_state(dsc: dict, component: str) -> str | None:
    """Return ``spec.components.<component>.managementState`` or None if unset."""
    return lookup_str(dsc, f"spec.components.{component}.managementState")


def has_management_state(dsc: dict | None, component: str, *states: str) -> bool:
    if dsc is None:
        return False
    return get_management_state(dsc, component) in states


def set_target_version(result: DiagnosticResult, target: Target) -> None:
    if target.target_version is not None:
        result.annotations[ANNOTATION_TARGET_VERSION] = str(target.target_version)


def not_found_result(check: BaseCheck, kind: str) -> DiagnosticResult:
    """Result for a missing singleton (DataScienceCluster, DSCInitialization)."""
    dr = check.new_result()
    dr.set_condition(new_condition(
        TYPE_AVAILABLE,
        ConditionStatus.FALSE,
        kind,
        reason=REASON_RESOURCE_NOT_FOUND,
        message="No %s found",
    ))
    return dr


def not_configured_result(check: BaseCheck, label: str, owner: str = "DataScienceCluster") -> DiagnosticResult:
    dr = check.new_result()
    dr.set_condition(new_condition(
        TYPE_CONFIGURED,
        ConditionStatus.TRUE,
        label,
        owner,
        reason=REASON_REQUIREMENTS_MET,
        message="%s is not configured in %s",
    ))
    return dr


def set_compatibility_success(result: DiagnosticResult, message: str, *args) -> None:
    result.set_condition(new_condition(
        TYPE_COMPATIBLE,
        ConditionStatus.TRUE,
        *args,
        reason=REASON_VERSION_COMPATIBLE,
        message=message,
    ))


def set_compatibility_failure(
    result: DiagnosticResult,
    message: str,
    *args,
    impact: Impact = Impact.BLOCKING,
    remediation: str = "",
) -> None:
    result.set_condition(new_condition(
        TYPE_COMPATIBLE,
        ConditionStatus.FALSE,
        *args,
        reason=REASON_VERSION_INCOMPATIBLE,
        message=message,
        impact=impact,
        remediation=remediation,
    ))


@dataclass
class ComponentRequest:
    """Data handed to a component validation callback."""

    target: Target
    result: DiagnosticResult
    dsc: dict
    management_state: str


ComponentValidateFn = Callable[[ComponentRequest], None]


class ComponentValidation:
    """Fetch the DataScienceCluster and run *fn* for a configured component.

    - no DataScienceCluster: a ResourceNotFound result
    - component unset, or not in one of *states*: a passing "not configured" result
    - otherwise the result is annotated with the management state and target
      version before *fn* adds its conditions
    """

    def __init__(
        self,
        check: BaseCheck,
        target: Target,
        component: str | None = None,
        label: str | None = None,
        states: Iterable[str] = (),
    ):
        self.check = check
        self.target = target
        self.component = component or check.kind
        self.label = label or self.component
        self.states = tuple(states)

    def run(self, fn: ComponentValidateFn) -> DiagnosticResult:
        dsc = get_data_science_cluster(self.target.client)
        if dsc is None:
            return not_found_result(self.check, DATA_SCIENCE_CLUSTER.kind)

        state = get_management_state(dsc, self.component)
        if state is None or (self.states and state not in self.states):
            return not_configured_result(self.check, f"{self.label} component")

        dr = self.check.new_result()
        dr.annotations[ANNOTATION_MANAGEMENT_STATE] = state
        set_target_version(dr, self.target)

        fn(ComponentRequest(target=self.target, result=dr, dsc=dsc, management_state=state))
        return dr


def removal(message: str, impact: Impact = Impact.BLOCKING, remediation: str = "") -> ComponentValidateFn:
    """Callback flagging an enabled component that the target version removes.

    *message* receives the management state and the target "N.x" label.
    """

    def _fn(req: ComponentRequest) -> None:
        set_compatibility_failure(
            req.result,
            message,
            req.management_state,
            major_minor_label(req.target.target_version),
            impact=impact,
            remediation=remediation,
        )

    return _fn
