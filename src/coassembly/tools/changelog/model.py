"""Data models for the bylaws changelog.

Stability: stable
Tags: changelog, model, dataclass

Plain frozen dataclasses for commits read from version control and the
version groups they are rendered in, plus the table mapping changed files
to chapter names in each site locale.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Chapter names
# ---------------------------------------------------------------------------

# Path fragment -> display name per locale. First matching fragment wins.
CHAPTER_NAMES: dict[str, dict[str, str]] = {
    "bylaws/01-general": {"zh": "第一章：總則", "en": "Chapter 1: General Provisions"},
    "bylaws/02-membership": {"zh": "第二章：成員資格", "en": "Chapter 2: Membership"},
    "bylaws/03-governance": {"zh": "第三章：治理與會議", "en": "Chapter 3: Governance & Meetings"},
    "bylaws/04-finance": {"zh": "第四章：財務與透明", "en": "Chapter 4: Finance & Transparency"},
    "bylaws/05-projects-conflicts": {
        "zh": "第五章：專案承接與利益衝突",
        "en": "Chapter 5: Projects & Conflicts",
    },
    "bylaws/06-pay-distribution": {"zh": "第六章：薪資與分配", "en": "Chapter 6: Pay & Distribution"},
    "bylaws/07-pool": {"zh": "第七章：公司池", "en": "Chapter 7: Common Pool"},
    "bylaws/08-ip-commons": {"zh": "第八章：知識共享與智慧財產", "en": "Chapter 8: IP & Commons"},
    "bylaws/09-discipline-disputes": {
        "zh": "第九章：爭議處理與紀律",
        "en": "Chapter 9: Discipline & Disputes",
    },
    "bylaws/10-amendments": {"zh": "第十章：修章與附則", "en": "Chapter 10: Amendments"},
    "meta/glossary": {"zh": "詞彙表", "en": "Glossary"},
    "meta/contributing": {"zh": "貢獻指南", "en": "Contributing Guide"},
    "params.json": {"zh": "章程參數", "en": "Bylaw Parameters"},
    "data/glossary.json": {"zh": "詞彙資料", "en": "Glossary Data"},
    "index.mdx": {"zh": "首頁", "en": "Home Page"},
    "guide.mdx": {"zh": "使用指南", "en": "User Guide"},
}

# Subjects of housekeeping commits left out of the rendered history.
SKIPPED_SUBJECT_RE = re.compile(r"^(gen:|auto:|chore:|build:|ci:)", re.IGNORECASE)

VERSION_TAG_RE = re.compile(r"^v\d")


def chapter_names(path: str) -> dict[str, str] | None:
    """Display names of the chapter ``path`` belongs to, if any."""
    for fragment, names in CHAPTER_NAMES.items():
        if fragment in path:
            return names
    return None


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Commit:
    """One commit touching the documentation.

    Attributes:
        sha: Full commit SHA.
        date: Author date, ``YYYY-MM-DD``.
        subject: First line of the message.
        tags: Tags pointing at this commit.
        files: Paths changed by the commit.
    """

    sha: str
    date: str
    subject: str
    tags: tuple[str, ...] = ()
    files: tuple[str, ...] = ()

    @property
    def version_tag(self) -> str | None:
        """First tag that looks like a version (``v1.0.0``)."""
        for tag in self.tags:
            if VERSION_TAG_RE.match(tag):
                return tag
        return None

    @property
    def is_housekeeping(self) -> bool:
        return bool(SKIPPED_SUBJECT_RE.match(self.subject))


@dataclass
class VersionGroup:
    """Commits released under one version heading.

    Attributes:
        version: Version tag or derived draft version.
        date: Date of the commit that opened the group.
        commits: Commits in log order.
    """

    version: str
    date: str
    commits: list[Commit] = field(default_factory=list)

    @property
    def anchor(self) -> str:
        return "v" + self.version.replace(".", "-")

    def affected_chapters(self, locale: str) -> list[str]:
        """Chapter names touched by the group, first-seen order."""
        seen: dict[str, None] = {}
        for commit in self.commits:
            for path in commit.files:
                names = chapter_names(path)
                if names and locale in names:
                    seen.setdefault(names[locale], None)
        return list(seen)

    @property
    def visible_commits(self) -> list[Commit]:
        return [c for c in self.commits if not c.is_housekeeping]
