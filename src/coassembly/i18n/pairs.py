"""Tracked source/translation file pairs.

Stability: stable
Tags: i18n, translation, manifest

The set of files under translation tracking is fixed and listed here, not
discovered. Paths are relative to the project root and double as manifest
keys, so they must not change spelling between releases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PairKind(str, Enum):
    """How a tracked pair is checked."""

    CONTENT = "content"            # Source document with a separate translation
    PARAMETER_ONLY = "parameter"   # Shared parameters; no translation file
    DATA_ONLY = "data"             # Shared data (glossary); no translation file


@dataclass(frozen=True)
class TrackedPair:
    """A source file and the translated file that must follow it.

    For ``PARAMETER_ONLY`` and ``DATA_ONLY`` pairs ``source`` and ``target``
    are the same file: a change there means every translation that uses it
    needs review.
    """

    source: str
    target: str
    kind: PairKind = PairKind.CONTENT

    @property
    def has_translation(self) -> bool:
        return self.kind is PairKind.CONTENT

    @classmethod
    def shared(cls, path: str, kind: PairKind) -> TrackedPair:
        return cls(source=path, target=path, kind=kind)


_DOCS = "src/content/docs"
_EN = f"{_DOCS}/en"

_CONTENT_DOCUMENTS = (
    "bylaws/01-general.mdx",
    "bylaws/02-membership.mdx",
    "bylaws/03-governance.mdx",
    "bylaws/04-finance.mdx",
    "bylaws/05-projects-conflicts.mdx",
    "bylaws/06-pay-distribution.mdx",
    "bylaws/07-pool.mdx",
    "bylaws/08-ip-commons.mdx",
    "bylaws/09-discipline-disputes.mdx",
    "bylaws/10-amendments.mdx",
    "index.mdx",
    "guide.mdx",
    # glossary page is generated from glossary.json; contributing is hand-translated
    "meta/contributing.mdx",
)

DEFAULT_TRACKED_PAIRS: tuple[TrackedPair, ...] = (
    *(TrackedPair(f"{_DOCS}/{doc}", f"{_EN}/{doc}") for doc in _CONTENT_DOCUMENTS),
    TrackedPair.shared("src/params.json", PairKind.PARAMETER_ONLY),
    TrackedPair.shared("src/data/glossary.json", PairKind.DATA_ONLY),
)


def source_paths(pairs: tuple[TrackedPair, ...] = DEFAULT_TRACKED_PAIRS) -> list[str]:
    """Distinct source paths in declaration order."""
    return list(dict.fromkeys(pair.source for pair in pairs))


__all__ = ["DEFAULT_TRACKED_PAIRS", "PairKind", "TrackedPair", "source_paths"]
