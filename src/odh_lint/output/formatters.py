"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import yaml
from rich.console import Console

from odh_lint.core.check import Check
from odh_lint.core.executor import CheckExecution
from odh_lint.models import CANONICAL_GROUP_ORDER
from odh_lint.models.condition import Impact
from odh_lint.models.diagnostic import STATUS_ERROR, DiagnosticResult, DiagnosticResultList

console = Console()

_GROUP_RANK = {g.value: i for i, g in enumerate(CANONICAL_GROUP_ORDER)}


def _sort_key(result: DiagnosticResult) -> tuple[int, str, str]:
    return (_GROUP_RANK.get(result.group, len(_GROUP_RANK)), result.kind, result.name)


def flatten_results(executions: Iterable[CheckExecution]) -> list[DiagnosticResult]:
    """Results ordered by canonical group, then kind, then name."""
    return sorted((e.result for e in executions), key=_sort_key)


def summarize(results: list[DiagnosticResult]) -> dict[str, int]:
    summary = {"total": len(results), "passed": 0, "blocking": 0, "advisory": 0, "errors": 0}
    for r in results:
        if not r.is_failing:
            summary["passed"] += 1
            continue
        if r.status_string == STATUS_ERROR:
            summary["errors"] += 1
        if r.impact == Impact.BLOCKING:
            summary["blocking"] += 1
        elif r.impact == Impact.ADVISORY:
            summary["advisory"] += 1
    return summary


def _check_to_dict(c: Check) -> dict[str, Any]:
    return {
        "id": c.check_id,
        "group": c.group.value,
        "name": c.name,
        "description": c.description,
    }


def output_results(result_list: DiagnosticResultList, fmt: str, verbose: bool = False) -> None:
    if fmt == "json":
        console.print_json(json.dumps(result_list.to_dict(), indent=2))
    elif fmt == "yaml":
        console.print(yaml.dump(result_list.to_dict(), default_flow_style=False, sort_keys=False))
    else:
        from odh_lint.output.tables import impacted_objects_table, results_table

        console.print(results_table(result_list.results, verbose=verbose))
        if verbose:
            for r in result_list.results:
                if r.impacted_objects:
                    console.print(impacted_objects_table(r))
        _print_summary(result_list)


def _print_summary(result_list: DiagnosticResultList) -> None:
    summary = summarize(result_list.results)
    parts = []
    if summary["blocking"]:
        parts.append(f"[red]{summary['blocking']} blocking[/red]")
    if summary["advisory"]:
        parts.append(f"[yellow]{summary['advisory']} advisory[/yellow]")
    if summary["errors"]:
        parts.append(f"[yellow]{summary['errors']} could not run[/yellow]")
    if summary["passed"]:
        parts.append(f"[green]{summary['passed']} passed[/green]")

    versions = result_list.cluster_version or "unknown"
    if result_list.target_version and result_list.target_version != result_list.cluster_version:
        versions = f"{versions} -> {result_list.target_version}"
    status = ", ".join(parts) if parts else "[dim]no applicable checks[/dim]"
    console.print(f"\nLint complete ({versions}): {status}")


def output_checks(checks: list[Check], fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps([_check_to_dict(c) for c in checks], indent=2))
    elif fmt == "yaml":
        console.print(yaml.dump([_check_to_dict(c) for c in checks], default_flow_style=False, sort_keys=False))
    else:
        from odh_lint.output.tables import checks_table

        console.print(checks_table(checks))
