"""
Root Typer application for the coassembly CLI.
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from coassembly import __version__
from coassembly.cli.autolink import app as autolink_app
from coassembly.cli.changelog import app as changelog_app
from coassembly.cli.i18n import app as i18n_app
from coassembly.core.logging import configure_logging

app = Typer(
    name="coassembly",
    help="coassembly: tooling for the CoAssembly bylaws documentation site.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"coassembly {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    project_root: Path | None = typer.Option(
        None,
        "--root",
        "-r",
        help="Site repository root (default: auto-detected).",
        envvar="COASSEMBLY_PROJECT_ROOT",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
    log_level: str | None = typer.Option(  # noqa: UP007
        None, "--log-level", help="Log level when not verbose (default: settings, WARNING)."
    ),
    json_logs: bool | None = typer.Option(  # noqa: UP007
        None,
        "--json-logs/--console-logs",
        help="Log format (default: settings, else JSON unless stderr is a terminal).",
    ),
) -> None:
    """coassembly CLI: translation sync checks, autolink preview, changelog."""
    if verbose:
        log_level = "DEBUG"
    configure_logging(level=log_level or "WARNING", json_format=json_logs)
    ctx.obj = {"project_root": project_root, "log_level": log_level, "json_logs": json_logs}


# ── Sub-command registration ─────────────────────────────────────────────

app.add_typer(i18n_app, name="i18n", help="Translation staleness and manifest.")
app.add_typer(autolink_app, name="autolink", help="Glossary and article-code links.")
app.add_typer(changelog_app, name="changelog", help="Changelog pages from git history.")
