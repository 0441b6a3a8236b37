"""TrainingOperator deprecation notice for 3.3+ targets."""

from __future__ import annotations

from odh_lint.checks.shared.components import (
    ENABLED_STATES,
    ComponentRequest,
    ComponentValidation,
    set_compatibility_success,
)
from odh_lint.core.check import CHECK_TYPE_DEPRECATION, BaseCheck
from odh_lint.core.context import RunContext
from odh_lint.core.target import Target
from odh_lint.models import CheckGroup
from odh_lint.models.condition import (
    REASON_DEPRECATED,
    TYPE_COMPATIBLE,
    ConditionStatus,
    Impact,
    new_condition,
)
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.utils.version_compare import is_version_at_least


class TrainingOperatorDeprecationCheck(BaseCheck):
    def __init__(self) -> None:
        super().__init__(
            group=CheckGroup.COMPONENT,
            kind="trainingoperator",
            check_type=CHECK_TYPE_DEPRECATION,
            check_id="components.trainingoperator.deprecation",
            name="Components :: TrainingOperator :: Deprecation (3.3+)",
            description=(
                "Validates that TrainingOperator (Kubeflow Training Operator v1) deprecation is "
                "acknowledged - will be replaced by Trainer v2 in a future release"
            ),
            remediation="Plan the migration of training jobs to Trainer v2",
        )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        return is_version_at_least(target.target_version, 3, 3)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        return ComponentValidation(self, target, label="TrainingOperator").run(self._check_state)

    def _check_state(self, req: ComponentRequest) -> None:
        if req.management_state in ENABLED_STATES:
            # Deprecation never blocks an upgrade.
            req.result.set_condition(new_condition(
                TYPE_COMPATIBLE,
                ConditionStatus.FALSE,
                req.management_state,
                reason=REASON_DEPRECATED,
                message=(
                    "TrainingOperator (Kubeflow Training Operator v1) is enabled (state: %s) but is "
                    "deprecated in 3.3 and will be replaced by Trainer v2 in a future release"
                ),
                impact=Impact.ADVISORY,
                remediation=self.remediation,
            ))
            return
        set_compatibility_success(
            req.result,
            "TrainingOperator is disabled (state: %s) - no action required for deprecation in 3.3+",
            req.management_state,
        )
