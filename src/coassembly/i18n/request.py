"""Translation request payload for stale and missing documents.

Stability: stable
Tags: i18n, translation, prompt, report

Built from a ``StalenessReport``: one item per content pair that is stale
or missing, carrying the current source text, the last recorded hash and
the current translation (if any), plus the glossary table the translator
must follow. Parameter and data files are not included; they only produce
a review warning.

Building a request never touches the manifest.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from coassembly.core.logging import get_logger
from coassembly.glossary.terms import TermIndex

from .manifest import ManifestEntry
from .staleness import StalenessReport, SyncStatus

logger = get_logger(__name__)

NEW_FILE_HASH_LABEL = "none (new file)"
NO_TARGET_LABEL = "(does not exist yet; create it)"
NO_SOURCE_LABEL = "(file not found)"


class GlossaryPair(BaseModel):
    """One row of the fixed-translation table."""

    source: str
    target: str


class TranslationItem(BaseModel):
    """A document whose translation has to be created or updated."""

    source_path: str
    target_path: str
    status: SyncStatus
    previous_hash: str | None = Field(
        default=None, description="Last confirmed source hash; None for a new file"
    )
    source_content: str | None = None
    target_content: str | None = Field(
        default=None, description="Current translation; None when it does not exist yet"
    )

    @property
    def is_new(self) -> bool:
        return self.previous_hash is None


class TranslationRequest(BaseModel):
    """Everything a translator (human or model) needs for one sync round."""

    source_locale: str
    target_locale: str
    glossary: list[GlossaryPair] = Field(default_factory=list)
    items: list[TranslationItem] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def render_markdown(self) -> str:
        """Copy-paste prompt listing glossary and documents."""
        src, dst = self.source_locale.upper(), self.target_locale.upper()
        lines = [
            "# Translation Update Request",
            "",
            f"The following {dst} files need to be updated to match their {src} source files.",
            "Please translate ONLY the changed/new sections, keeping the existing structure.",
            "",
            "## Glossary: always use these exact translations",
            "",
            f"| {src} | {dst} |",
            "|----|----|",
        ]
        lines.extend(f"| {row.source} | {row.target} |" for row in self.glossary)
        lines += ["", "---", ""]

        for item in self.items:
            lines += [
                f"## File: {item.target_path}",
                f"Source: {item.source_path}",
                f"Previous hash: {item.previous_hash or NEW_FILE_HASH_LABEL}",
                "",
                f"### Current {src} source content:",
                "```mdx",
                item.source_content.strip() if item.source_content is not None else NO_SOURCE_LABEL,
                "```",
                "",
                f"### Current {dst} file (update this):",
                "```mdx",
                item.target_content.strip() if item.target_content is not None else NO_TARGET_LABEL,
                "```",
                "",
                "---",
                "",
            ]
        return "\n".join(lines)


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("request_read_failed", path=str(path), error=str(exc))
        return None


def build_translation_request(
    report: StalenessReport,
    root: Path,
    manifest: Mapping[str, ManifestEntry],
    terms: TermIndex | None = None,
    *,
    source_locale: str = "zh",
    target_locale: str = "en",
) -> TranslationRequest:
    """Bundle every stale or missing content pair of ``report``.

    Args:
        report: Result of a staleness check
        root: Directory the pair paths are relative to
        manifest: The manifest the report was computed from
        terms: Term dictionary for the glossary table (omitted when None)
        source_locale: Locale of the source documents
        target_locale: Locale of the translations
    """
    glossary: list[GlossaryPair] = []
    if terms is not None:
        glossary = [
            GlossaryPair(source=source, target=target)
            for source, target in terms.translation_table(source_locale, target_locale)
            if source and target
        ]

    items: list[TranslationItem] = []
    for result in report.needs_translation:
        pair = result.pair
        entry = manifest.get(pair.source)
        target_content = None
        if result.status is not SyncStatus.MISSING:
            target_content = _read_text(root / pair.target)
        items.append(
            TranslationItem(
                source_path=pair.source,
                target_path=pair.target,
                status=result.status,
                previous_hash=entry.digest if entry is not None else None,
                source_content=_read_text(root / pair.source),
                target_content=target_content,
            )
        )

    logger.info("translation_request_built", items=len(items), glossary_rows=len(glossary))
    return TranslationRequest(
        source_locale=source_locale,
        target_locale=target_locale,
        glossary=glossary,
        items=items,
    )


__all__ = [
    "GlossaryPair",
    "NEW_FILE_HASH_LABEL",
    "NO_TARGET_LABEL",
    "TranslationItem",
    "TranslationRequest",
    "build_translation_request",
]
