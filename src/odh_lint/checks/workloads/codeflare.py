"""AppWrapper workloads impacted by the CodeFlare removal."""

from __future__ import annotations

from odh_lint.checks.shared.components import MANAGED, get_data_science_cluster, has_management_state
from odh_lint.checks.shared.workloads import WorkloadRequest, WorkloadValidation
from odh_lint.core.check import CHECK_TYPE_IMPACTED_WORKLOADS, BaseCheck
from odh_lint.core.context import RunContext
from odh_lint.core.target import Target
from odh_lint.models import CheckGroup
from odh_lint.models.condition import (
    REASON_VERSION_COMPATIBLE,
    REASON_WORKLOADS_IMPACTED,
    Condition,
    ConditionStatus,
    Impact,
    new_condition,
)
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.models.resources import APP_WRAPPER
from odh_lint.utils.version_compare import is_upgrade_from_2x_to_3x

KIND = "codeflare"

TYPE_APPWRAPPER_COMPATIBLE = "AppWrapperCompatible"


class CodeFlareImpactedWorkloadsCheck(BaseCheck):
    def __init__(self) -> None:
        super().__init__(
            group=CheckGroup.WORKLOAD,
            kind=KIND,
            check_type=CHECK_TYPE_IMPACTED_WORKLOADS,
            check_id="workloads.codeflare.impacted-workloads",
            name="Workloads :: CodeFlare :: Impacted Workloads (3.x)",
            description="Lists AppWrappers that will be impacted in 3.x (CodeFlare not available)",
            remediation=(
                "Remove redundant AppWrapper CRs or install the AppWrapper controller "
                "separately before upgrading"
            ),
        )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        if not is_upgrade_from_2x_to_3x(target.current_version, target.target_version):
            return False
        dsc = get_data_science_cluster(target.client)
        return has_management_state(dsc, KIND, MANAGED)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        return WorkloadValidation(self, target, APP_WRAPPER).complete(self._conditions)

    def _conditions(self, req: WorkloadRequest) -> list[Condition]:
        count = len(req.items)
        if count:
            return [new_condition(
                TYPE_APPWRAPPER_COMPATIBLE,
                ConditionStatus.FALSE,
                count,
                reason=REASON_WORKLOADS_IMPACTED,
                message=(
                    "Found %d AppWrapper workload CR(s). The AppWrapper controller is removed "
                    "together with CodeFlare; remove redundant CRs or install AppWrapper separately"
                ),
                impact=Impact.ADVISORY,
                remediation=self.remediation,
            )]
        return [new_condition(
            TYPE_APPWRAPPER_COMPATIBLE,
            ConditionStatus.TRUE,
            reason=REASON_VERSION_COMPATIBLE,
            message="No AppWrapper(s) found - ready for 3.x upgrade",
        )]
