"""
CLI: ``coassembly i18n`` -- translation staleness check and manifest upkeep.

Exit codes for ``check``: 0 when every tracked pair is synced, 1 when any
pair is stale or missing, 2 when the manifest or settings cannot be loaded.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from coassembly.cli.utils import console, err_console, fail_with, load_settings
from coassembly.core.errors import CoAssemblyError
from coassembly.core.logging import get_logger
from coassembly.core.settings import CoAssemblySettings
from coassembly.glossary.terms import TermIndex
from coassembly.i18n.manifest import ManifestStore, MarkSyncedResult
from coassembly.i18n.pairs import DEFAULT_TRACKED_PAIRS, source_paths
from coassembly.i18n.request import TranslationRequest, build_translation_request
from coassembly.i18n.staleness import StalenessReport, SyncStatus, check_translations

logger = get_logger(__name__)

app = typer.Typer(no_args_is_help=True)

_STATUS_STYLE = {
    SyncStatus.SYNCED: "green",
    SyncStatus.STALE: "yellow",
    SyncStatus.MISSING: "red",
}


def _store(settings: CoAssemblySettings) -> ManifestStore:
    return ManifestStore(
        settings.manifest_file,
        root=settings.project_root,
        algorithm=settings.hash_algorithm,
    )


def _load_terms(settings: CoAssemblySettings) -> TermIndex | None:
    """Term dictionary for the prompt; the prompt is still useful without it."""
    try:
        return TermIndex.load(settings.glossary_file)
    except CoAssemblyError as exc:
        logger.warning("glossary_unavailable", **exc.to_dict())
        err_console.print(f"[yellow]Warning:[/yellow] glossary table omitted: {exc.message}")
        return None


def _print_marked(result: MarkSyncedResult) -> None:
    for path in result.updated:
        console.print(f"  [green]✓[/green] {path}")
    for path in result.skipped:
        console.print(f"  [yellow]skipped[/yellow] {path} [dim](not found)[/dim]")
    console.print(
        f"\n[bold]{len(result.updated)}[/bold] file(s) marked as synced at {result.timestamp}."
    )


def _print_report(report: StalenessReport) -> None:
    table = Table(title="Translation Sync Report", show_lines=False, pad_edge=False)
    table.add_column("Status")
    table.add_column("Translation", overflow="fold")
    table.add_column("Source", overflow="fold")
    table.add_column("Note", overflow="fold")
    for result in report.results:
        style = _STATUS_STYLE[result.status]
        table.add_row(
            f"[{style}]{result.status.value}[/{style}]",
            result.pair.target if result.pair.has_translation else "[dim]-[/dim]",
            result.pair.source,
            result.note or "",
        )
    console.print(table)

    if report.missing:
        console.print(f"\n[red]Missing translations ({len(report.missing)}), need to be created.[/red]")
    if report.content_stale:
        console.print(
            f"[yellow]Stale translations ({len(report.content_stale)}), "
            "source changed since last translation.[/yellow]"
        )
    if report.data_stale:
        console.print("[yellow]Data/params changed: review all files that use them.[/yellow]")

    if report.exit_code == 0:
        console.print("\n[bold green]All translations are in sync.[/bold green]")
    else:
        console.print(f"\n[bold]{report.attention_count} file(s) need attention.[/bold]")
        console.print("Generate a translation prompt:  [cyan]coassembly i18n check --prompt[/cyan]")
        console.print("After translating, mark synced: [cyan]coassembly i18n mark-synced[/cyan]")


@app.command("check")
def check(
    ctx: typer.Context,
    prompt: bool = typer.Option(False, "--prompt", "-p", help="Also print a translation request"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON instead of a table"),
    fix: bool = typer.Option(False, "--fix", help="Mark every tracked source as synced"),
) -> None:
    """Report which translations are synced, stale or missing."""
    settings = load_settings(ctx)
    store = _store(settings)

    if fix:
        try:
            result = store.mark_synced(source_paths(DEFAULT_TRACKED_PAIRS))
        except CoAssemblyError as exc:
            fail_with(exc)
        _print_marked(result)
        return

    try:
        manifest = store.load()
    except CoAssemblyError as exc:
        fail_with(exc)

    report = check_translations(
        settings.project_root,
        manifest,
        DEFAULT_TRACKED_PAIRS,
        algorithm=settings.hash_algorithm,
    )

    request: TranslationRequest | None = None
    if prompt and report.needs_translation:
        request = build_translation_request(
            report,
            settings.project_root,
            manifest,
            _load_terms(settings),
            source_locale=settings.source_locale,
            target_locale=settings.target_locales[0] if settings.target_locales else "en",
        )

    if as_json:
        payload = report.to_dict()
        if request is not None:
            payload["request"] = request.model_dump(mode="json")
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _print_report(report)
        if request is not None:
            typer.echo("")
            typer.echo(request.render_markdown())

    raise typer.Exit(code=report.exit_code)


@app.command("mark-synced")
def mark_synced(
    ctx: typer.Context,
    paths: list[Path] | None = typer.Argument(
        None, help="Source files to mark (default: every tracked source)"
    ),
) -> None:
    """Record the current hash of source files as translated."""
    settings = load_settings(ctx)
    targets = [str(p) for p in paths] if paths else source_paths(DEFAULT_TRACKED_PAIRS)
    try:
        result = _store(settings).mark_synced(targets)
    except CoAssemblyError as exc:
        fail_with(exc)
    _print_marked(result)
