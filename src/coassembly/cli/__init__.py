"""
CLI layer for coassembly.

Provides a Typer application whose sub-commands delegate to the
``coassembly.i18n``, ``coassembly.autolink`` and ``coassembly.tools``
packages. This package handles only terminal transport: argument parsing,
coloured output, and table formatting.

Entry point::

    coassembly --help
"""

from coassembly.cli.app import app

__all__ = ["app"]
