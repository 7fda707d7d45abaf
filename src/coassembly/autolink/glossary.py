"""
Glossary autolinker: first occurrence of each term becomes a glossary link.

Manifesto:
    Readers of the bylaws meet defined terms ("worker-owner", "common pool")
    on every page. Linking the first occurrence on a page to its glossary
    entry helps without turning the page into a sea of links:

    - **First occurrence only:** One link per term id per document
    - **Longest match first:** Rules are ordered by display length, so a
      multi-word term claims its text before any shorter term inside it
    - **No self-links:** The glossary page itself is skipped
    - **Script-aware matching:** Case-insensitive with word guards for
      space-delimited locales, exact substrings for Chinese/Japanese

Architecture:
    ::

        GlossaryLinker(index, routing)
            │  rules_for(locale)  (built once per locale, reused)
            ▼
        Rule(pattern, replacer) per term, longest first
            │
        link(tree, path)
            ├── locale = routing.locale_for(path)
            ├── skip the glossary page itself (glossary.mdx, glossary/index.mdx)
            └── find_and_replace(tree, rules, state=ScanState())
                  replacer: term.id in state.linked ? None : link + record id

    Link target: ``{locale prefix}/meta/glossary/#{term id}``, display class
    ``glossary-autolink``.

Tags:
    autolink, glossary, remark, i18n
"""

from __future__ import annotations

import re
from pathlib import PurePath

from coassembly.core.logging import get_logger
from coassembly.glossary.terms import TermEntry, TermIndex
from coassembly.i18n.locales import LocaleRouting, uses_word_boundaries

from .engine import Rule, ScanState, find_and_replace
from .nodes import Node, link

logger = get_logger(__name__)

GLOSSARY_ROUTE = "meta/glossary"
GLOSSARY_CLASS = "glossary-autolink"


def term_pattern(term: str, locale: str) -> re.Pattern[str]:
    """Compiled pattern matching ``term`` in documents of ``locale``."""
    escaped = re.escape(term)
    if uses_word_boundaries(locale):
        return re.compile(rf"(?<![\w-]){escaped}(?![\w-])", re.IGNORECASE)
    return re.compile(escaped)


class GlossaryLinker:
    """Links the first occurrence of every glossary term in a document."""

    def __init__(
        self,
        index: TermIndex,
        routing: LocaleRouting | None = None,
        *,
        route: str = GLOSSARY_ROUTE,
        css_class: str = GLOSSARY_CLASS,
    ) -> None:
        self.index = index
        self.routing = routing or LocaleRouting()
        self.route = route
        self.css_class = css_class
        self._rules: dict[str, tuple[Rule, ...]] = {}

    def rules_for(self, locale: str) -> tuple[Rule, ...]:
        """Replacement rules for ``locale``, one per term, longest first."""
        rules = self._rules.get(locale)
        if rules is None:
            base = self.routing.route(locale, self.route)
            rules = tuple(
                self._make_rule(entry, locale, base)
                for entry in self.index.terms_for_locale(locale)
            )
            self._rules[locale] = rules
        return rules

    def _make_rule(self, entry: TermEntry, locale: str, base: str) -> Rule:
        href = f"{base}#{entry.id}"
        term_id = entry.id
        css_class = self.css_class

        def replace(match: re.Match[str], state: ScanState) -> Node | None:
            if term_id in state.linked:
                return None
            state.linked.add(term_id)
            return link(href, match.group(0), css_class=css_class)

        return Rule(term_pattern(entry.display_for(locale), locale), replace)

    def is_glossary_page(self, path: str | PurePath | None) -> bool:
        """Whether ``path`` is the glossary page (``glossary.mdx`` or ``glossary/index.mdx``)."""
        if not path:
            return False
        page = PurePath(str(path).replace("\\", "/"))
        if page.stem == "index":
            return "glossary" in page.parent.name
        return "glossary" in page.stem

    def link(self, tree: Node, path: str | PurePath | None = None) -> int:
        """Link glossary terms in ``tree`` in place.

        Args:
            tree: Parsed document
            path: Source file of the document; selects the locale

        Returns:
            Number of links inserted.
        """
        if self.is_glossary_page(path):
            logger.debug("glossary_page_skipped", path=str(path))
            return 0

        locale = self.routing.locale_for(path)
        count = find_and_replace(tree, self.rules_for(locale))
        logger.debug("glossary_linked", path=str(path) if path else None, locale=locale, links=count)
        return count


__all__ = ["GLOSSARY_CLASS", "GLOSSARY_ROUTE", "GlossaryLinker", "term_pattern"]
