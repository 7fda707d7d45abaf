"""
Term dictionary index with longest-first, locale-aware lookup.

Manifesto:
    The glossary is a small JSON file mapping a stable term id to its
    display text in every locale. The linker needs those texts per locale,
    longest first, so "common pool" is claimed before "pool" can be linked
    on its own. Parsing happens once: ``TermIndex.load()`` returns an
    immutable value that the caller hands to every consumer.

Architecture:
    ::

        src/data/glossary.json
        {
          "common-pool": {"zh": "公司池", "en": "common pool"},
          "worker-owner": {"zh": "勞工老闆", "en": "worker-owner"}
        }
              │  TermIndex.load()
              ▼
        TermIndex (frozen)
          ├── get("common-pool")          -> TermEntry
          ├── terms_for_locale("en")      -> (TermEntry, ...) longest first
          └── translation_table("zh", "en") -> (("公司池", "common pool"), ...)

Guardrails:
    - Display texts of length <= 1 are never returned for matching
      (single characters produce false matches in CJK prose)
    - A malformed dictionary fails the whole load; no partial index

Tags:
    glossary, terminology, lookup, i18n
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from coassembly.core.errors import DictionaryParseError, SourceNotFoundError
from coassembly.core.logging import get_logger

logger = get_logger(__name__)

# Shortest display text eligible for autolinking.
MIN_TERM_LENGTH = 2


@dataclass(frozen=True)
class TermEntry:
    """A glossary term and its display text per locale.

    Attributes:
        id: Stable identifier, also used as the glossary page anchor
        display: Locale code -> display text
    """

    id: str
    display: Mapping[str, str] = field(default_factory=dict)

    def display_for(self, locale: str) -> str:
        """Display text for ``locale`` or ``""`` when the term has none."""
        return self.display.get(locale, "")

    def is_linkable(self, locale: str) -> bool:
        return len(self.display_for(locale)) >= MIN_TERM_LENGTH


class TermIndex:
    """Immutable, parsed term dictionary.

    Construct with :meth:`load` (from a file) or :meth:`from_mapping` (from
    already-decoded JSON). The per-locale orderings are computed lazily and
    memoized; the index is otherwise read-only and safe to share between
    documents.
    """

    def __init__(self, entries: tuple[TermEntry, ...]) -> None:
        self._entries = entries
        self._by_id = MappingProxyType({entry.id: entry for entry in entries})
        self._by_locale: dict[str, tuple[TermEntry, ...]] = {}

    # ── Construction ─────────────────────────────────────────────

    @classmethod
    def load(cls, path: Path) -> TermIndex:
        """Parse the dictionary at ``path``.

        Raises:
            SourceNotFoundError: If the file does not exist.
            DictionaryParseError: If the JSON or its shape is invalid.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceNotFoundError(
                f"Term dictionary not found: {path}", cause=exc
            ).with_context(path=str(path), operation="load_terms") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryParseError(
                f"Cannot read term dictionary: {exc}", cause=exc
            ).with_context(path=str(path), operation="load_terms") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DictionaryParseError(
                f"Invalid JSON in term dictionary: {exc}", cause=exc
            ).with_context(path=str(path), operation="load_terms") from exc

        try:
            index = cls.from_mapping(data)
        except DictionaryParseError as exc:
            raise exc.with_context(path=str(path), operation="load_terms")

        logger.debug("terms_loaded", path=str(path), count=len(index))
        return index

    @classmethod
    def from_mapping(cls, data: Any) -> TermIndex:
        """Build an index from decoded dictionary JSON."""
        if not isinstance(data, dict):
            raise DictionaryParseError(
                f"Term dictionary root must be an object, got {type(data).__name__}"
            )

        entries: list[TermEntry] = []
        for term_id, display in data.items():
            if not isinstance(display, dict):
                raise DictionaryParseError(
                    f"Term {term_id!r} must map locales to display text"
                ).with_context(term=term_id)
            for locale, text in display.items():
                if not isinstance(text, str):
                    raise DictionaryParseError(
                        f"Display text for {term_id!r} ({locale}) must be a string"
                    ).with_context(term=term_id, locale=locale)
            entries.append(TermEntry(id=term_id, display=MappingProxyType(dict(display))))
        return cls(tuple(entries))

    # ── Lookup ───────────────────────────────────────────────────

    def get(self, term_id: str) -> TermEntry | None:
        return self._by_id.get(term_id)

    def terms_for_locale(self, locale: str) -> tuple[TermEntry, ...]:
        """Linkable entries for ``locale``, longest display text first.

        Entries whose display text is missing, empty or a single character
        are left out. Ties keep dictionary order.
        """
        cached = self._by_locale.get(locale)
        if cached is None:
            eligible = [entry for entry in self._entries if entry.is_linkable(locale)]
            eligible.sort(key=lambda entry: len(entry.display_for(locale)), reverse=True)
            cached = tuple(eligible)
            self._by_locale[locale] = cached
        return cached

    def translation_table(self, source: str, target: str) -> tuple[tuple[str, str], ...]:
        """``(source text, target text)`` pairs in dictionary order."""
        return tuple(
            (entry.display_for(source), entry.display_for(target))
            for entry in self._entries
        )

    @property
    def locales(self) -> frozenset[str]:
        return frozenset(locale for entry in self._entries for locale in entry.display)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TermEntry]:
        return iter(self._entries)

    def __contains__(self, term_id: object) -> bool:
        return term_id in self._by_id


__all__ = ["MIN_TERM_LENGTH", "TermEntry", "TermIndex"]
