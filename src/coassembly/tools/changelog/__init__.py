"""Changelog pages for the bylaws site, generated from git history.

Stability: stable
Tags: changelog, documentation, generator, tooling

Usage::

    from coassembly.tools.changelog import generate_changelog

    # Live git repository
    generate_changelog(project_root=Path("."))

    # From fixture data (for testing)
    generate_changelog(
        project_root=tmp_path,
        fixture=Path("tests/fixtures/changelog/commits.json"),
    )
"""

from __future__ import annotations

from pathlib import Path

from .generator import ChangelogGenerator, group_commits, render_page
from .git_scan import CommitSource, FixtureCommitSource, GitCommitSource
from .model import Commit, VersionGroup

DEFAULT_DOCS_DIR = "src/content/docs"


def generate_changelog(
    project_root: Path,
    *,
    docs_root: Path | None = None,
    fixture: Path | None = None,
) -> dict[str, Path]:
    """Write both changelog pages.

    Args:
        project_root: Repository root (git work tree).
        docs_root: Content root (default: ``project_root/src/content/docs``).
        fixture: If set, read commits from this JSON file instead of git.

    Returns:
        Dict mapping locale to the written page.
    """
    source: CommitSource = (
        FixtureCommitSource(fixture) if fixture else GitCommitSource(project_root)
    )
    if docs_root is None:
        docs_root = project_root / DEFAULT_DOCS_DIR
    return ChangelogGenerator(docs_root, source).generate()


__all__ = [
    "ChangelogGenerator",
    "Commit",
    "CommitSource",
    "FixtureCommitSource",
    "GitCommitSource",
    "VersionGroup",
    "generate_changelog",
    "group_commits",
    "render_page",
]
