"""Rich table builders for lint output."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from odh_lint.core.check import Check
from odh_lint.models.diagnostic import DiagnosticResult
from odh_lint.output.themes import styled_impact, styled_severity, styled_status


def results_table(results: list[DiagnosticResult], verbose: bool = False, title: str = "Lint Results") -> Table:
    table = Table(title=title, expand=True, show_lines=verbose)
    table.add_column("Group", style="cyan", no_wrap=True)
    table.add_column("Kind", style="blue", no_wrap=True)
    table.add_column("Check", style="bold white", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Impact", no_wrap=True)
    table.add_column("Message", max_width=60)
    if verbose:
        table.add_column("Remediation", style="dim", max_width=50)

    for r in results:
        row = [
            r.group,
            r.kind,
            r.name,
            styled_status(r.status_string),
            styled_severity(r.severity),
            styled_impact(r.impact),
            escape(r.message),
        ]
        if verbose:
            row.append(escape(r.remediation))
        table.add_row(*row)
    return table


def impacted_objects_table(result: DiagnosticResult) -> Table:
    table = Table(title=f"Impacted by {result.group}/{result.kind}/{result.name}", expand=False)
    table.add_column("Namespace", style="blue", no_wrap=True)
    table.add_column("Name", style="bold white", no_wrap=True)
    table.add_column("Kind", style="cyan")
    table.add_column("API Version", style="dim")
    for obj in result.impacted_objects:
        table.add_row(obj.namespace or "-", obj.name, obj.kind, obj.api_version)
    return table


def checks_table(checks: list[Check]) -> Table:
    table = Table(title="Registered Checks", expand=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Group", style="blue", no_wrap=True)
    table.add_column("Name", style="bold white")
    table.add_column("Description", style="dim", max_width=60)
    for c in checks:
        table.add_row(escape(c.check_id), c.group.value, c.name, c.description)
    return table
