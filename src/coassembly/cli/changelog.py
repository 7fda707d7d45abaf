"""
CLI: ``coassembly changelog`` -- regenerate the changelog pages from git.
"""

from __future__ import annotations

from pathlib import Path

import typer

from coassembly.cli.utils import console, fail_with, load_settings
from coassembly.core.errors import CoAssemblyError
from coassembly.tools.changelog import generate_changelog

app = typer.Typer(no_args_is_help=True)


@app.command("generate")
def generate(
    ctx: typer.Context,
    fixture: Path | None = typer.Option(
        None, "--fixture", help="Read commits from a JSON fixture instead of git"
    ),
) -> None:
    """Write meta/changelog.mdx for every site locale."""
    settings = load_settings(ctx)
    try:
        outputs = generate_changelog(
            settings.project_root,
            docs_root=settings.docs_root,
            fixture=fixture,
        )
    except CoAssemblyError as exc:
        fail_with(exc)
    for locale, path in outputs.items():
        console.print(f"  [green]✓[/green] {path} ({locale})")
