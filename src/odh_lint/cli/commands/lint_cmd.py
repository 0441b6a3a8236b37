"""odh-lint lint - Run checks against the connected cluster."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from kubernetes.client import ApiException
from kubernetes.config import ConfigException
from rich.console import Console
from rich.markup import escape
from urllib3.exceptions import HTTPError

from odh_lint.checks import register_default_checks
from odh_lint.cli.options import (
    ChecksOption,
    ContextOption,
    DebugOption,
    OutputOption,
    VerboseOption,
    check_output_format,
    configure_logging,
)
from odh_lint.config.settings import settings
from odh_lint.core.context import RunContext
from odh_lint.core.errors import SelectionError, VersionDetectionError, classify_error
from odh_lint.core.executor import Executor
from odh_lint.core.k8s_client import K8sClient
from odh_lint.core.registry import CheckRegistry
from odh_lint.core.target import Target
from odh_lint.core.version_detector import detect_cluster_version
from odh_lint.models.condition import Impact
from odh_lint.models.diagnostic import DiagnosticResult, DiagnosticResultList
from odh_lint.output.formatters import flatten_results, output_results
from odh_lint.utils.version_compare import parse_version

logger = logging.getLogger(__name__)

app = typer.Typer()
console = Console(stderr=True)

EXIT_FINDINGS = 1
EXIT_USAGE = 2


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code=EXIT_USAGE)


def exit_code_for(results: list[DiagnosticResult], fail_on_critical: bool, fail_on_warning: bool) -> int:
    """Exit status for a finished run: 1 when a finding crosses the chosen threshold."""
    impacts = {r.impact for r in results if r.is_failing}
    if fail_on_critical and Impact.BLOCKING in impacts:
        return EXIT_FINDINGS
    if fail_on_warning and Impact.ADVISORY in impacts:
        return EXIT_FINDINGS
    return 0


@app.callback(invoke_without_command=True)
def lint(
    target_version: Optional[str] = typer.Option(
        None, "--target-version", help="Version to assess an upgrade to (default: lint the current version)"
    ),
    checks: Optional[list[str]] = ChecksOption,
    output: str = OutputOption,
    fail_on_critical: bool = typer.Option(
        True, "--fail-on-critical/--no-fail-on-critical", help="Exit 1 when a blocking finding is reported"
    ),
    fail_on_warning: bool = typer.Option(False, "--fail-on-warning", help="Exit 1 when an advisory finding is reported"),
    verbose: bool = VerboseOption,
    debug: bool = DebugOption,
    timeout: int = typer.Option(settings.timeout_seconds, "--timeout", help="Overall run timeout in seconds"),
    context: Optional[str] = ContextOption,
) -> None:
    """Validate the cluster, or its readiness for an upgrade to --target-version."""
    configure_logging(verbose=verbose, debug=debug)
    output = check_output_format(output)

    k8s = K8sClient(context=context)
    try:
        current = detect_cluster_version(k8s)
    except VersionDetectionError as e:
        raise _fail(str(e)) from e
    except ApiException as e:
        raise _fail(f"reading cluster version: {e.status} {e.reason}") from e
    except ConfigException as e:
        raise _fail(f"loading cluster configuration: {e}") from e
    except (HTTPError, OSError) as e:
        classification = classify_error(e)
        raise _fail(f"reading cluster version ({classification.reason}): {e}") from e

    if target_version:
        target = parse_version(target_version)
        if target is None:
            raise _fail(f"invalid --target-version {target_version!r}")
        if target < current:
            raise _fail(f"target version {target} is older than the current version {current}")
    else:
        target = current

    run_target = Target(
        client=k8s,
        current_version=current,
        target_version=target,
        debug=debug,
    )
    logger.info(
        "Running checks in %s mode (current %s, target %s)",
        "lint" if run_target.is_lint_mode else "upgrade",
        current,
        target,
    )

    registry = register_default_checks(CheckRegistry())
    ctx = RunContext.background().with_timeout(timeout)
    try:
        executions = Executor(registry).execute_patterns(ctx, run_target, checks or [settings.default_selector])
    except SelectionError as e:
        raise _fail(str(e)) from e

    if ctx.is_cancelled():
        logger.warning("Run stopped early (%s); results are partial", ctx.reason)
    for execution in executions:
        if execution.failed_to_execute:
            logger.info("Check %s did not complete: %s", execution.check.check_id, execution.error)

    results = flatten_results(executions)
    output_results(
        DiagnosticResultList(cluster_version=str(current), target_version=str(target), results=results),
        output,
        verbose=verbose,
    )

    code = exit_code_for(results, fail_on_critical, fail_on_warning)
    if code:
        raise typer.Exit(code=code)
