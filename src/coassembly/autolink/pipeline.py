"""Run both autolink passes over one document.

Stability: stable
Tags: autolink, pipeline, build

``AutolinkPipeline`` is what the build hook (or the CLI) holds for the
lifetime of a build: it owns the loaded ``TermIndex`` and both linkers, and
``process()`` rewrites one tree. Article codes are linked first so the
glossary pass never sees the text of a code.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath

from coassembly.core.logging import LogContext, get_logger
from coassembly.core.settings import CoAssemblySettings
from coassembly.glossary.terms import TermIndex
from coassembly.i18n.locales import LocaleRouting

from .articles import ArticleLinker
from .glossary import GlossaryLinker
from .markdown import parse_document, render_html
from .nodes import Node

logger = get_logger(__name__)


@dataclass(frozen=True)
class AutolinkResult:
    """Links inserted in one document."""

    path: str | None
    article_links: int
    glossary_links: int

    @property
    def total(self) -> int:
        return self.article_links + self.glossary_links


class AutolinkPipeline:
    """Article-code pass followed by glossary pass."""

    def __init__(self, terms: TermIndex, routing: LocaleRouting | None = None) -> None:
        self.routing = routing or LocaleRouting()
        self.terms = terms
        self.articles = ArticleLinker(self.routing)
        self.glossary = GlossaryLinker(terms, self.routing)

    @classmethod
    def from_settings(cls, settings: CoAssemblySettings) -> AutolinkPipeline:
        """Load the term dictionary named by ``settings`` and build a pipeline.

        Raises:
            SourceNotFoundError / DictionaryParseError: If the dictionary
                cannot be loaded; no pass runs without it.
        """
        routing = LocaleRouting(
            default_locale=settings.source_locale,
            prefixed_locales=tuple(settings.target_locales),
        )
        return cls(TermIndex.load(settings.glossary_file), routing)

    def process(self, tree: Node, path: str | PurePath | None = None) -> AutolinkResult:
        """Rewrite ``tree`` in place."""
        with LogContext(document=str(path) if path else None):
            articles = self.articles.link(tree, path)
            glossary = self.glossary.link(tree, path)
        result = AutolinkResult(
            path=str(path) if path else None,
            article_links=articles,
            glossary_links=glossary,
        )
        logger.info(
            "document_autolinked",
            path=result.path,
            article_links=articles,
            glossary_links=glossary,
        )
        return result

    def render_file(self, path: Path) -> tuple[str, AutolinkResult]:
        """Parse ``path``, run both passes and return the body as HTML."""
        _, tree = parse_document(path.read_text(encoding="utf-8"))
        result = self.process(tree, path)
        return render_html(tree), result


__all__ = ["AutolinkPipeline", "AutolinkResult"]
