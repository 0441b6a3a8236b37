"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="odh-lint",
    help="odh-lint - Validate a cluster and its readiness for platform upgrades.",
    no_args_is_help=True,
)


def _register_commands() -> None:
    from odh_lint.cli.commands.lint_cmd import app as lint_app
    from odh_lint.cli.commands.checks_cmd import app as checks_app

    app.add_typer(lint_app, name="lint", help="Run checks against the cluster")
    app.add_typer(checks_app, name="checks", help="List available checks")


_register_commands()


def main() -> None:
    app()
