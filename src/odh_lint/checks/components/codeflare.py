"""CodeFlare removal check for 2.x -> 3.x upgrades."""

from __future__ import annotations

from odh_lint.checks.shared.components import (
    MANAGED,
    ComponentValidation,
    get_data_science_cluster,
    has_management_state,
    removal,
)
from odh_lint.core.check import CHECK_TYPE_REMOVAL, BaseCheck
from odh_lint.core.context import RunContext
from odh_lint.core.target import Target
from odh_lint.models import CheckGroup
from odh_lint.models.condition import Impact
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.utils.version_compare import is_upgrade_from_2x_to_3x

KIND = "codeflare"


class CodeFlareRemovalCheck(BaseCheck):
    def __init__(self) -> None:
        super().__init__(
            group=CheckGroup.COMPONENT,
            kind=KIND,
            check_type=CHECK_TYPE_REMOVAL,
            check_id="components.codeflare.removal",
            name="Components :: CodeFlare :: Removal (3.x)",
            description=(
                "Validates that CodeFlare is disabled before upgrading from 2.x to 3.x "
                "(component will be removed)"
            ),
            remediation=(
                "Disable CodeFlare by setting managementState to 'Removed' in "
                "DataScienceCluster before upgrading"
            ),
        )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        """Only for 2.x -> 3.x upgrades with CodeFlare Managed."""
        if not is_upgrade_from_2x_to_3x(target.current_version, target.target_version):
            return False
        dsc = get_data_science_cluster(target.client)
        return has_management_state(dsc, KIND, MANAGED)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        return ComponentValidation(self, target, label="CodeFlare").run(removal(
            "CodeFlare is enabled (state: %s) but will be removed in %s",
            impact=Impact.BLOCKING,
            remediation=self.remediation,
        ))
