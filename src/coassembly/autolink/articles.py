"""Article-code autolinker: ``MEM-01``, ``POOL-03A`` become section links.

Stability: stable
Tags: autolink, articles, bylaws, remark

Every bylaw article carries a code made of a section-category prefix and a
number with an optional uppercase letter. Wherever such a code appears in
prose it is linked to the article's anchor, on every occurrence:

    MEM-01   ->  [MEM-01](/bylaws/02-membership/#mem-01)
    POOL-03A ->  [POOL-03A](/en/bylaws/07-pool/#pool-03a)   (English pages)

Codes whose prefix has no slug in the table are left untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from coassembly.core.logging import get_logger
from coassembly.i18n.locales import LocaleRouting

from .engine import Rule, ScanState, find_and_replace
from .nodes import Node, link

logger = get_logger(__name__)

BYLAWS_ROUTE = "bylaws"
ARTICLE_CLASS = "article-ref"


class SectionPrefix(str, Enum):
    """Section categories an article code may start with."""

    GEN = "GEN"
    MEM = "MEM"
    GOV = "GOV"
    FIN = "FIN"
    PROJ = "PROJ"
    PAY = "PAY"
    POOL = "POOL"
    IP = "IP"
    DISC = "DISC"
    AMD = "AMD"


DEFAULT_SECTION_SLUGS: Mapping[str, str] = {
    SectionPrefix.GEN.value: "01-general",
    SectionPrefix.MEM.value: "02-membership",
    SectionPrefix.GOV.value: "03-governance",
    SectionPrefix.FIN.value: "04-finance",
    SectionPrefix.PROJ.value: "05-projects-conflicts",
    SectionPrefix.PAY.value: "06-pay-distribution",
    SectionPrefix.POOL.value: "07-pool",
    SectionPrefix.IP.value: "08-ip-commons",
    SectionPrefix.DISC.value: "09-discipline-disputes",
    SectionPrefix.AMD.value: "10-amendments",
}

# ASCII word boundaries: "見MEM-01條" must still match inside CJK prose.
ARTICLE_CODE_RE = re.compile(
    r"\b(" + "|".join(prefix.value for prefix in SectionPrefix) + r")-(\d+[A-Z]?)\b",
    re.ASCII,
)


@dataclass(frozen=True)
class ArticleCode:
    """A parsed article reference such as ``POOL-03A``."""

    prefix: str
    number: str

    @classmethod
    def from_match(cls, match: re.Match[str]) -> ArticleCode:
        return cls(prefix=match.group(1), number=match.group(2))

    @property
    def anchor(self) -> str:
        return f"{self.prefix.lower()}-{self.number.lower()}"

    def __str__(self) -> str:
        return f"{self.prefix}-{self.number}"


class ArticleLinker:
    """Links every article code in a document to its bylaw section."""

    def __init__(
        self,
        routing: LocaleRouting | None = None,
        *,
        slugs: Mapping[str, str] | None = None,
        route: str = BYLAWS_ROUTE,
        css_class: str = ARTICLE_CLASS,
    ) -> None:
        self.routing = routing or LocaleRouting()
        self.slugs = dict(DEFAULT_SECTION_SLUGS if slugs is None else slugs)
        self.route = route
        self.css_class = css_class

    def href(self, code: ArticleCode, locale: str) -> str | None:
        """Section URL for ``code`` or ``None`` for an unknown prefix."""
        slug = self.slugs.get(code.prefix)
        if slug is None:
            return None
        return f"{self.routing.route(locale, self.route)}{slug}/#{code.anchor}"

    def rule_for(self, locale: str) -> Rule:
        def replace(match: re.Match[str], state: ScanState) -> Node | None:
            code = ArticleCode.from_match(match)
            href = self.href(code, locale)
            if href is None:
                state.metadata.setdefault("unknown_codes", []).append(str(code))
                return None
            return link(href, match.group(0), css_class=self.css_class)

        return Rule(ARTICLE_CODE_RE, replace)

    def link(self, tree: Node, path: str | PurePath | None = None) -> int:
        """Link article codes in ``tree`` in place; returns links inserted."""
        locale = self.routing.locale_for(path)
        state = ScanState()
        count = find_and_replace(tree, [self.rule_for(locale)], state=state)
        unknown = state.metadata.get("unknown_codes")
        if unknown:
            logger.debug("article_codes_unresolved", path=str(path) if path else None, codes=unknown)
        logger.debug("articles_linked", path=str(path) if path else None, locale=locale, links=count)
        return count


__all__ = [
    "ARTICLE_CLASS",
    "ARTICLE_CODE_RE",
    "ArticleCode",
    "ArticleLinker",
    "BYLAWS_ROUTE",
    "DEFAULT_SECTION_SLUGS",
    "SectionPrefix",
]
