"""Run selected checks concurrently and normalize their outcomes."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass

from odh_lint.config.settings import settings
from odh_lint.core.check import Check
from odh_lint.core.context import RunContext
from odh_lint.core.errors import (
    InvalidPatternError,
    InvalidResultError,
    SelectionError,
    classify_error,
)
from odh_lint.core.registry import CheckRegistry
from odh_lint.core.target import Target
from odh_lint.models import CheckGroup
from odh_lint.models.condition import (
    REASON_CHECK_EXECUTION_FAILED,
    TYPE_VALIDATED,
    ConditionStatus,
    new_condition,
)
from odh_lint.models.diagnostic import DiagnosticResult, new_result

logger = logging.getLogger(__name__)

_INTERNAL_ERROR_REMEDIATION = (
    "This is an internal error in the check. "
    "Please report this issue with the error details."
)


@dataclass
class CheckExecution:
    """A check together with its (always valid) result and any underlying error."""

    check: Check
    result: DiagnosticResult
    error: BaseException | None = None

    @property
    def failed_to_execute(self) -> bool:
        return self.error is not None


def _identity(check: Check) -> tuple[str, str, str]:
    """Return a non-empty (group, kind, name) triple for a synthesized result."""
    parts = [p for p in check.check_id.split(".") if p]
    group = getattr(check.group, "value", "")
    kind = getattr(check, "kind", "") or (parts[1] if len(parts) > 1 else check.check_id)
    name = getattr(check, "check_type", "") or (parts[-1] if parts else "")
    return group or "unknown", kind or "unknown", name or check.check_id or "unknown"


def error_result(check: Check, message: str, reason: str, remediation: str) -> DiagnosticResult:
    """Build a result with a single Unknown condition for a failed check."""
    group, kind, name = _identity(check)
    dr = new_result(group, kind, name, check.description)
    dr.set_condition(new_condition(
        TYPE_VALIDATED,
        ConditionStatus.UNKNOWN,
        reason=reason,
        message=message,
        remediation=remediation,
    ))
    return dr


class Executor:
    """Orchestrates check execution against a target.

    Each check runs as one task on a shared thread pool. A failing check never
    aborts the run: exceptions and malformed results are turned into Unknown
    results, so the output holds one entry per applicable check.
    """

    def __init__(self, registry: CheckRegistry, max_workers: int | None = None):
        self.registry = registry
        self.max_workers = max_workers or settings.max_workers

    def execute_all(self, ctx: RunContext, target: Target) -> list[CheckExecution]:
        return self.execute_checks(ctx, target, self.registry.list_all())

    def execute_selective(
        self,
        ctx: RunContext,
        target: Target,
        pattern: str,
        group: CheckGroup | None = None,
    ) -> list[CheckExecution]:
        """Run the checks matching *pattern* (and *group*, if given).

        Raises SelectionError if the pattern cannot be resolved.
        """
        return self.execute_patterns(ctx, target, [pattern], group)

    def execute_patterns(
        self,
        ctx: RunContext,
        target: Target,
        patterns: Iterable[str],
        group: CheckGroup | None = None,
    ) -> list[CheckExecution]:
        try:
            checks = self.registry.list_by_patterns(patterns, group)
        except InvalidPatternError as e:
            raise SelectionError(f"selecting checks: {e}") from e
        return self.execute_checks(ctx, target, checks)

    def execute_checks(
        self,
        ctx: RunContext,
        target: Target,
        checks: list[Check],
    ) -> list[CheckExecution]:
        """Run *checks* concurrently; completion order is not preserved."""
        target = target.with_defaults()
        results: list[CheckExecution] = []
        lock = threading.Lock()

        if not checks:
            return results
        if ctx.is_cancelled():
            logger.debug("Not dispatching %d check(s): %s", len(checks), ctx.reason)
            return results

        def _task(c: Check) -> None:
            execution = self._run_check(ctx, target, c)
            if execution is None:
                return
            with lock:
                results.append(execution)

        workers = max(1, min(self.max_workers, len(checks)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="odh-lint-check") as pool:
            futures = []
            for check in checks:
                if ctx.is_cancelled():
                    logger.debug("Stopping dispatch before %s: %s", check.check_id, ctx.reason)
                    break
                futures.append(pool.submit(_task, check))
            wait(futures)

        for future in futures:
            exc = future.exception()
            if exc is not None:
                # Only BaseException (KeyboardInterrupt, SystemExit) gets past _run_check.
                raise exc

        return results

    def _run_check(self, ctx: RunContext, target: Target, check: Check) -> CheckExecution | None:
        """Run one check; None means it was skipped (not applicable or cancelled)."""
        # Queued tasks may start after cancellation; they must not run.
        if ctx.is_cancelled():
            logger.debug("Skipping %s: %s", check.check_id, ctx.reason)
            return None

        try:
            applies = check.can_apply(ctx, target)
        except Exception as e:
            logger.warning("Check %s: applicability could not be determined: %s", check.check_id, e)
            logger.debug("Applicability error for %s", check.check_id, exc_info=True)
            return self._error_execution(check, e, "Check applicability could not be determined")

        if not applies:
            logger.debug("Check %s does not apply to this target", check.check_id)
            return None

        logger.debug("Running check %s", check.check_id)
        try:
            result = check.validate(ctx, target)
        except Exception as e:
            logger.warning("Check %s failed: %s", check.check_id, e)
            logger.debug("Validation error for %s", check.check_id, exc_info=True)
            return self._error_execution(check, e, "Check execution failed")

        try:
            if not isinstance(result, DiagnosticResult):
                raise InvalidResultError(f"expected DiagnosticResult, got {type(result).__name__}")
            result.validate()
        except Exception as e:
            err = InvalidResultError(f"invalid result from check {check.check_id}: {e}")
            err.__cause__ = e
            logger.warning("%s", err)
            return CheckExecution(
                check=check,
                result=error_result(
                    check,
                    message=f"Invalid check result: {e}",
                    reason=REASON_CHECK_EXECUTION_FAILED,
                    remediation=_INTERNAL_ERROR_REMEDIATION,
                ),
                error=err,
            )

        return CheckExecution(check=check, result=result)

    @staticmethod
    def _error_execution(check: Check, exc: Exception, prefix: str) -> CheckExecution:
        classification = classify_error(exc)
        return CheckExecution(
            check=check,
            result=error_result(
                check,
                message=f"{prefix}: {exc}",
                reason=classification.reason,
                remediation=classification.remediation,
            ),
            error=exc,
        )
