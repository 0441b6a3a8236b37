"""ModelMesh Serving removal check for 2.x -> 3.x upgrades."""

from __future__ import annotations

from odh_lint.checks.shared.components import (
    ENABLED_STATES,
    ComponentRequest,
    ComponentValidation,
    set_compatibility_failure,
    set_compatibility_success,
)
from odh_lint.core.check import CHECK_TYPE_REMOVAL, BaseCheck
from odh_lint.core.context import RunContext
from odh_lint.core.target import Target
from odh_lint.models import CheckGroup
from odh_lint.models.condition import Impact
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.utils.version_compare import is_upgrade_from_2x_to_3x, major_minor_label

# Key under spec.components in the DataScienceCluster
COMPONENT = "modelmeshserving"


class ModelMeshRemovalCheck(BaseCheck):
    def __init__(self) -> None:
        super().__init__(
            group=CheckGroup.COMPONENT,
            kind="modelmesh",
            check_type=CHECK_TYPE_REMOVAL,
            check_id="components.modelmesh.removal",
            name="Components :: ModelMesh :: Removal (3.x)",
            description=(
                "Validates that ModelMesh Serving is disabled before upgrading from 2.x to 3.x "
                "(component will be removed)"
            ),
            remediation=(
                "Migrate ModelMesh InferenceServices to KServe and set the modelmeshserving "
                "managementState to 'Removed' before upgrading"
            ),
        )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        return is_upgrade_from_2x_to_3x(target.current_version, target.target_version)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        return ComponentValidation(self, target, component=COMPONENT, label="ModelMesh Serving").run(
            self._check_state
        )

    def _check_state(self, req: ComponentRequest) -> None:
        label = major_minor_label(req.target.target_version)
        if req.management_state in ENABLED_STATES:
            set_compatibility_failure(
                req.result,
                "ModelMesh Serving is still enabled (state: %s) but will be removed in %s",
                req.management_state,
                label,
                impact=Impact.BLOCKING,
                remediation=self.remediation,
            )
            return
        set_compatibility_success(
            req.result,
            "ModelMesh Serving is disabled (state: %s) - ready for %s upgrade",
            req.management_state,
            label,
        )
