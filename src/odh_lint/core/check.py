"""Check contract and shared check metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from odh_lint.core.context import RunContext
from odh_lint.core.target import Target
from odh_lint.models import CheckGroup
from odh_lint.models.diagnostic import DiagnosticResult, new_result

CHECK_TYPE_REMOVAL = "removal"
CHECK_TYPE_DEPRECATION = "deprecation"
CHECK_TYPE_INSTALLED = "installed"
CHECK_TYPE_IMPACTED_WORKLOADS = "impacted-workloads"
CHECK_TYPE_CONFIG_MIGRATION = "config-migration"


@runtime_checkable
class Check(Protocol):
    """Diagnostic check contract.

    Checks are expected to be:
    - read-only (they receive a ResourceReader, never a writer)
    - independent of each other (no ordering between checks is guaranteed)
    - explicit about failure: raise from ``can_apply``/``validate`` rather than
      returning partial results; the executor turns exceptions into results.
    """

    check_id: str
    name: str
    description: str
    group: CheckGroup

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        """Return True if the check is meaningful for this target."""

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        """Run the check and return a result with at least one condition."""


@dataclass(eq=False)
class BaseCheck:
    """Identity shared by concrete checks.

    Holds metadata only: subclasses supply ``can_apply`` and ``validate``.
    """

    group: CheckGroup
    kind: str
    check_type: str
    check_id: str
    name: str
    description: str
    remediation: str = ""

    def new_result(self) -> DiagnosticResult:
        """Create an empty result carrying this check's group/kind/type identity."""
        return new_result(self.group.value, self.kind, self.check_type, self.description)
