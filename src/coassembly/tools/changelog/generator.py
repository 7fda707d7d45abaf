"""Render the bylaws changelog pages from version-control history.

Stability: stable
Tags: changelog, generator, renderer, mdx

Architecture::

    ┌──────────────┐
    │ CommitSource │  git log (or fixture), newest first
    └──────┬───────┘
           ▼
    ┌──────────────────────────────────────────┐
    │           ChangelogGenerator             │
    │  commits() → group() → render() → write()│
    └──────┬─────────────────────────┬─────────┘
           ▼                         ▼
    meta/changelog.mdx       en/meta/changelog.mdx

Commits are grouped by version tag: a commit carrying a ``v*`` tag opens a
new group, and so does the first commit. Groups without a tag get a draft
version. The pages are regenerated in full on every run.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from coassembly.core.logging import get_logger

from .git_scan import CommitSource
from .model import Commit, VersionGroup

logger = get_logger(__name__)

CHANGELOG_ROUTE = "meta/changelog.mdx"

# Locale -> fixed page text.
PAGE_TEXT: dict[str, dict[str, str | list[str]]] = {
    "zh": {
        "title": "變更紀錄",
        "description": "CoAssembly 章程的修訂歷史（由 git log 自動產生）",
        "notice": [
            "{/* ⚠️  此頁面由 coassembly changelog generate 自動產生，請勿手動編輯。 */}",
            "{/* 修訂紀錄來自 git log。每次 commit 後重新執行以更新。 */}",
        ],
        "intro": "本頁面記錄所有章程的修訂歷史，自動從 git 提交紀錄產生。",
        "rules": [
            ":::tip[版本編號規則]",
            "- **0.x.x-draft** 草稿階段，尚未正式通過",
            "- **1.0.0** 首次正式發布（需經 2/3 勞工老闆同意）",
            "- **1.x.0** 次要更新（新增章節或重大修訂）",
            "- **1.0.x** 修正更新（文字修正、澄清說明）",
            ":::",
        ],
        "empty": "_尚無 git 提交紀錄。_",
        "version": "版本",
        "affected": "**影響範圍：**",
        "separator": "、",
        "changes": "### 修改內容",
    },
    "en": {
        "title": "Changelog",
        "description": "Revision history for CoAssembly Bylaws (auto-generated from git log)",
        "notice": [
            "{/* ⚠️  This page is generated by coassembly changelog generate. Do not edit manually. */}",
            "{/* Revision history comes from git log. Regenerate after each commit. */}",
        ],
        "intro": "This page records all bylaw revisions, auto-generated from git commit history.",
        "rules": [
            ":::tip[Version numbering]",
            "- **0.x.x-draft** Draft stage, not yet formally adopted",
            "- **1.0.0** First official release (requires 2/3 worker-owner approval)",
            "- **1.x.0** Minor update (new sections or major revisions)",
            "- **1.0.x** Patch update (text corrections, clarifications)",
            ":::",
        ],
        "empty": "_No git commits yet._",
        "version": "Version",
        "affected": "**Affected:**",
        "separator": ", ",
        "changes": "### Changes",
    },
}


def derive_version(index: int) -> str:
    """Draft version for the ``index``-th untagged group."""
    if index == 0:
        return "0.1.0-draft"
    return f"0.0.{index}-draft"


def group_commits(commits: Iterable[Commit]) -> list[VersionGroup]:
    """Split commits (log order) into version groups."""
    groups: list[VersionGroup] = []
    current: VersionGroup | None = None

    for commit in commits:
        tag = commit.version_tag
        if tag or current is None:
            current = VersionGroup(
                version=tag or derive_version(len(groups)),
                date=commit.date,
            )
            groups.append(current)
        current.commits.append(commit)

    return groups


def render_page(groups: list[VersionGroup], locale: str) -> str:
    """MDX changelog page for ``locale``.

    Raises:
        KeyError: If ``locale`` has no page text.
    """
    text = PAGE_TEXT[locale]
    lines: list[str] = [
        "---",
        f"title: {text['title']}",
        f"description: {text['description']}",
        "---",
        "",
        *text["notice"],
        "",
        str(text["intro"]),
        "",
        *text["rules"],
        "",
    ]

    if not groups:
        lines += [str(text["empty"]), ""]
        return "\n".join(lines)

    for group in groups:
        lines += [
            "---",
            "",
            f"## {text['version']} {group.version} ({group.date}) {{#{group.anchor}}}",
            "",
        ]
        affected = group.affected_chapters(locale)
        if affected:
            lines += [f"{text['affected']} {str(text['separator']).join(affected)}", ""]

        lines += [str(text["changes"]), ""]
        for commit in group.visible_commits:
            lines.append(f"- {commit.subject} *({commit.date})*")
        lines.append("")

    return "\n".join(lines)


class ChangelogGenerator:
    """Writes one changelog page per site locale.

    Args:
        docs_root: Content root (``src/content/docs``)
        source: Where commits come from
        default_locale: Locale served from the docs root
        locales: Locales to write; the default locale must be one of them

    Examples:
        >>> gen = ChangelogGenerator(Path("src/content/docs"), GitCommitSource(Path(".")))
        >>> outputs = gen.generate()
    """

    def __init__(
        self,
        docs_root: Path,
        source: CommitSource,
        *,
        default_locale: str = "zh",
        locales: Iterable[str] = ("zh", "en"),
    ) -> None:
        self.docs_root = docs_root
        self.source = source
        self.default_locale = default_locale
        self.locales = tuple(locales)

    def output_path(self, locale: str) -> Path:
        if locale == self.default_locale:
            return self.docs_root / CHANGELOG_ROUTE
        return self.docs_root / locale / CHANGELOG_ROUTE

    def generate(self) -> dict[str, Path]:
        """Render and write every page; returns locale -> written path."""
        commits = list(self.source.commits())
        groups = group_commits(commits)

        outputs: dict[str, Path] = {}
        for locale in self.locales:
            path = self.output_path(locale)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(render_page(groups, locale), encoding="utf-8")
            outputs[locale] = path

        logger.info(
            "changelog_generated",
            commits=len(commits),
            groups=len(groups),
            pages=[str(p) for p in outputs.values()],
        )
        return outputs


__all__ = [
    "CHANGELOG_ROUTE",
    "ChangelogGenerator",
    "derive_version",
    "group_commits",
    "render_page",
]
