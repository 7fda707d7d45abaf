"""Commit sources for changelog generation.

Stability: stable
Tags: changelog, git, scanner

Extracts commit history from a git repository via ``subprocess`` calls,
or from a fixture file for deterministic testing. Both sources hand out a
fresh, finite iterator on every ``commits()`` call, newest commit first.

Architecture::

    ┌─────────────────────────────────────────────────┐
    │                  git_scan.py                     │
    ├─────────────────────┬───────────────────────────┤
    │  GitCommitSource    │  FixtureCommitSource      │
    │  (subprocess calls) │  (reads commits.json)     │
    └─────────────────────┴───────────────────────────┘
                │                     │
                ▼                     ▼
            Commit[]              Commit[]

A repository without git (or outside a work tree) yields no commits; the
generator then renders the "no commits yet" pages.
"""

from __future__ import annotations

import json
import re
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from coassembly.core.errors import ParseError
from coassembly.core.logging import get_logger

from .model import Commit

logger = get_logger(__name__)

_FIELD_SEP = "|||"
_GIT_LOG_FORMAT = _FIELD_SEP.join(("%H", "%as", "%D", "%s"))
_TAG_RE = re.compile(r"tag: ([^\s,)]+)")

# Paths whose history makes up the changelog.
DEFAULT_TRACKED_PATHS: tuple[str, ...] = (
    "src/content/docs/bylaws/",
    "src/content/docs/meta/",
    "src/content/docs/index.mdx",
    "src/content/docs/guide.mdx",
    "src/params.json",
    "src/data/",
)


@runtime_checkable
class CommitSource(Protocol):
    """Read-only view of version-control history."""

    def commits(self) -> Iterator[Commit]:
        """Commits newest first; a new iterator on every call."""
        ...


def parse_log_line(line: str) -> Commit | None:
    """Parse one ``%H|||%as|||%D|||%s`` line; ``None`` if malformed."""
    parts = line.split(_FIELD_SEP, 3)
    if len(parts) < 4:
        return None
    sha, date, refs, subject = parts
    return Commit(
        sha=sha.strip(),
        date=date.strip(),
        subject=subject.strip(),
        tags=tuple(_TAG_RE.findall(refs)),
    )


class GitCommitSource:
    """Commits of a live repository, restricted to the tracked paths.

    Args:
        repo_dir: Work tree to run git in
        paths: Pathspecs passed to ``git log``
        timeout: Seconds allowed per git call
    """

    def __init__(
        self,
        repo_dir: Path,
        paths: Sequence[str] = DEFAULT_TRACKED_PATHS,
        *,
        timeout: float = 30,
    ) -> None:
        self.repo_dir = repo_dir
        self.paths = tuple(paths)
        self.timeout = timeout

    def _git(self, *args: str) -> str | None:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True, cwd=str(self.repo_dir),
                check=True, timeout=self.timeout,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as exc:
            logger.warning("git_command_failed", args=list(args[:2]), error=str(exc))
            return None
        return result.stdout.decode("utf-8", errors="replace")

    def files_changed(self, sha: str) -> tuple[str, ...]:
        output = self._git("diff-tree", "--no-commit-id", "-r", "--name-only", sha)
        if not output:
            return ()
        return tuple(line.strip() for line in output.splitlines() if line.strip())

    def commits(self) -> Iterator[Commit]:
        output = self._git("log", f"--pretty=format:{_GIT_LOG_FORMAT}", "--", *self.paths)
        if not output:
            return iter(())
        return self._iter_commits(output)

    def _iter_commits(self, output: str) -> Iterator[Commit]:
        for line in output.strip().splitlines():
            commit = parse_log_line(line)
            if commit is None:
                logger.debug("git_log_line_skipped", line=line)
                continue
            yield Commit(
                sha=commit.sha,
                date=commit.date,
                subject=commit.subject,
                tags=commit.tags,
                files=self.files_changed(commit.sha),
            )


class FixtureCommitSource:
    """Commits loaded from a JSON fixture, for tests and dry runs.

    Expected ``commits.json``::

        [
            {
                "sha": "abc1234...",
                "date": "2025-02-01",
                "subject": "Clarify MEM-02 probation period",
                "tags": ["v0.2.0"],
                "files": ["src/content/docs/bylaws/02-membership.mdx"]
            }
        ]
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def commits(self) -> Iterator[Commit]:
        """Commits in fixture order; none when the fixture does not exist.

        Raises:
            ParseError: If the fixture is not a JSON list of commit objects.
        """
        if not self.path.is_file():
            logger.warning("commit_fixture_missing", path=str(self.path))
            return iter(())
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ParseError(
                f"Invalid commit fixture: {exc}", cause=exc
            ).with_context(path=str(self.path), operation="load_commits") from exc
        if not isinstance(raw, list) or not all(isinstance(entry, dict) for entry in raw):
            raise ParseError(
                "Commit fixture must be a JSON list of commit objects"
            ).with_context(path=str(self.path), operation="load_commits")
        return iter([
            Commit(
                sha=entry.get("sha", ""),
                date=entry.get("date", ""),
                subject=entry.get("subject", "").strip(),
                tags=tuple(entry.get("tags", [])),
                files=tuple(entry.get("files", [])),
            )
            for entry in raw
        ])


__all__ = [
    "CommitSource",
    "DEFAULT_TRACKED_PATHS",
    "FixtureCommitSource",
    "GitCommitSource",
    "parse_log_line",
]
