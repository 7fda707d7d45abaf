"""
Test support utilities for coassembly tests.

Helpers that don't fit as pytest fixtures but are useful across multiple
test files: writing site files and building manifest JSON.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

MEMBERSHIP_SOURCE = "src/content/docs/bylaws/02-membership.mdx"
MEMBERSHIP_TARGET = "src/content/docs/en/bylaws/02-membership.mdx"


def write_file(root: Path, relative: str, content: str | bytes) -> Path:
    """Create ``root/relative`` with ``content`` (parents included)."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def manifest_json(
    entries: dict[str, str],
    timestamp: str = "2025-01-31T09:30:00.000Z",
) -> dict[str, Any]:
    """Manifest file content for ``{path: hash}``."""
    return {path: {"hash": digest, "markedSyncedAt": timestamp} for path, digest in entries.items()}
