"""
CLI utility helpers: consoles, settings lookup and error output.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console

from coassembly.core.errors import CoAssemblyError
from coassembly.core.logging import configure_logging
from coassembly.core.settings import CoAssemblySettings, get_settings

console = Console()
err_console = Console(stderr=True)

# Exit code for usage and load errors (1 is reserved for "needs attention").
ERROR_EXIT_CODE = 2


def fail(message: str, *, code: int = ERROR_EXIT_CODE) -> NoReturn:
    """Print ``message`` to stderr and exit."""
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=code)


def fail_with(error: CoAssemblyError) -> NoReturn:
    """Report a typed error (with its context) and exit."""
    detail = error.to_dict()
    context = detail.get("context") or {}
    where = f" [dim]({context['path']})[/dim]" if "path" in context else ""
    fail(f"{error.message}{where}")


def load_settings(ctx: typer.Context) -> CoAssemblySettings:
    """Settings for the project root chosen on the root command.

    Log level and format given on the command line win over the settings.
    """
    obj = ctx.obj or {}
    project_root: Path | None = obj.get("project_root")
    try:
        settings = get_settings(project_root=project_root)
    except CoAssemblyError as exc:
        fail_with(exc)
    except ValidationError as exc:
        fail(f"Invalid configuration: {exc}")

    json_logs = obj.get("json_logs")
    configure_logging(
        level=obj.get("log_level") or settings.log_level,
        json_format=json_logs if json_logs is not None else settings.json_logs,
    )
    return settings
