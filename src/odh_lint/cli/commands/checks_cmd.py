"""odh-lint checks - List the registered checks."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from odh_lint.checks import register_default_checks
from odh_lint.cli.options import ChecksOption, OutputOption, check_output_format
from odh_lint.config.settings import settings
from odh_lint.core.errors import InvalidPatternError
from odh_lint.core.registry import CheckRegistry
from odh_lint.output.formatters import output_checks

app = typer.Typer()
console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def list_checks(
    checks: Optional[list[str]] = ChecksOption,
    output: str = OutputOption,
) -> None:
    """List checks matching the given selectors (all by default)."""
    output = check_output_format(output)
    registry = register_default_checks(CheckRegistry())
    try:
        selected = registry.list_by_patterns(checks or [settings.default_selector])
    except InvalidPatternError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2) from e
    output_checks(selected, output)
