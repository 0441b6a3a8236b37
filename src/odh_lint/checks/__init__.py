"""Built-in checks."""

from __future__ import annotations

from odh_lint.checks.components.codeflare import CodeFlareRemovalCheck
from odh_lint.checks.components.modelmesh import ModelMeshRemovalCheck
from odh_lint.checks.components.trainingoperator import TrainingOperatorDeprecationCheck
from odh_lint.checks.services.servicemesh import ServiceMeshRemovalCheck
from odh_lint.checks.workloads.codeflare import CodeFlareImpactedWorkloadsCheck
from odh_lint.core.check import Check
from odh_lint.core.registry import CheckRegistry, get_global_registry


def default_checks() -> list[Check]:
    """Fresh instances of every built-in check, in registration order."""
    return [
        ServiceMeshRemovalCheck(),
        CodeFlareRemovalCheck(),
        ModelMeshRemovalCheck(),
        TrainingOperatorDeprecationCheck(),
        CodeFlareImpactedWorkloadsCheck(),
    ]


def register_default_checks(registry: CheckRegistry | None = None) -> CheckRegistry:
    """Register the built-in checks into *registry* (the process-wide one by default)."""
    if registry is None:
        registry = get_global_registry()
    for check in default_checks():
        registry.must_register(check)
    return registry
