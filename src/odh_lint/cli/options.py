"""Shared CLI options."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from odh_lint.config.settings import settings

OutputOption = typer.Option(settings.default_output, "--output", "-o", help="Output format: table, json, yaml")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
ChecksOption = typer.Option(
    None,
    "--checks",
    "-c",
    help="Check selector: '*', a category (components, services, ...), a check ID or a glob. Repeatable.",
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Show remediation and impacted objects; log progress")
DebugOption = typer.Option(False, "--debug", help="Enable debug logging")


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Send log records to stderr through rich."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=debug, rich_tracebacks=debug)],
        force=True,
    )


def check_output_format(output: str) -> str:
    if output not in settings.output_formats:
        raise typer.BadParameter(
            f"unsupported output format {output!r} (choose from {', '.join(settings.output_formats)})",
            param_hint="--output",
        )
    return output
