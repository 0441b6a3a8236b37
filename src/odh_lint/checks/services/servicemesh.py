"""ServiceMesh removal check for 2.x -> 3.x upgrades."""

from __future__ import annotations

from odh_lint.checks.shared.components import (
    ENABLED_STATES,
    get_dsc_initialization,
    not_configured_result,
    not_found_result,
    set_compatibility_failure,
    set_compatibility_success,
    set_target_version,
)
from odh_lint.core.check import CHECK_TYPE_REMOVAL, BaseCheck
from odh_lint.core.context import RunContext
from odh_lint.core.target import Target
from odh_lint.models import CheckGroup
from odh_lint.models.condition import Impact
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.models.resources import DSC_INITIALIZATION
from odh_lint.utils.jsonpath import lookup_str
from odh_lint.utils.version_compare import is_upgrade_from_2x_to_3x


class ServiceMeshRemovalCheck(BaseCheck):
    def __init__(self) -> None:
        super().__init__(
            group=CheckGroup.SERVICE,
            kind="servicemesh",
            check_type=CHECK_TYPE_REMOVAL,
            check_id="services.servicemesh.removal",
            name="Services :: ServiceMesh :: Removal (3.x)",
            description=(
                "Validates that ServiceMesh is disabled before upgrading from 2.x to 3.x "
                "(service mesh will be removed)"
            ),
            remediation=(
                "Disable ServiceMesh by setting managementState to 'Removed' in "
                "DSCInitialization before upgrading"
            ),
        )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        return is_upgrade_from_2x_to_3x(target.current_version, target.target_version)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        dsci = get_dsc_initialization(target.client)
        if dsci is None:
            return not_found_result(self, DSC_INITIALIZATION.kind)

        state = lookup_str(dsci, "spec.serviceMesh.managementState")
        if state is None:
            return not_configured_result(self, "ServiceMesh", owner=DSC_INITIALIZATION.kind)

        dr = self.new_result()
        set_target_version(dr, target)
        if state in ENABLED_STATES:
            set_compatibility_failure(
                dr,
                "ServiceMesh is enabled (state: %s) but will be removed in 3.x",
                state,
                impact=Impact.BLOCKING,
                remediation=self.remediation,
            )
        else:
            set_compatibility_success(dr, "ServiceMesh is disabled (state: %s) - ready for 3.x upgrade", state)
        return dr
