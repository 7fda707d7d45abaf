"""
CLI: ``coassembly autolink`` -- preview the autolink passes on one document.
"""

from __future__ import annotations

from pathlib import Path

import typer

from coassembly.autolink.pipeline import AutolinkPipeline
from coassembly.cli.utils import console, err_console, fail, fail_with, load_settings
from coassembly.core.errors import CoAssemblyError

app = typer.Typer(no_args_is_help=True)


@app.command("render")
def render(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Markdown/MDX document to render"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write HTML here instead of stdout"),
) -> None:
    """Parse a document, insert article and glossary links, print HTML."""
    settings = load_settings(ctx)
    if not file.is_file():
        fail(f"File not found: {file}")

    try:
        pipeline = AutolinkPipeline.from_settings(settings)
        html, result = pipeline.render_file(file.resolve())
    except CoAssemblyError as exc:
        fail_with(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
        console.print(f"[green]✓[/green] Wrote {output}")
    else:
        typer.echo(html, nl=False)

    err_console.print(
        f"[dim]{result.article_links} article link(s), "
        f"{result.glossary_links} glossary link(s)[/dim]"
    )
