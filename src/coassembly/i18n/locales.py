"""Locale detection and locale-prefixed site routes.

Stability: stable
Tags: i18n, locale, routing

The source locale is served from the site root; every translated locale
lives under ``/<locale>/`` both on disk (``src/content/docs/<locale>/``) and
in URLs. A document's locale is therefore a function of its path.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

# Languages written without spaces between words.
CONTINUOUS_SCRIPT_LANGUAGES = frozenset({"zh", "ja", "th", "lo", "km", "my"})


def uses_word_boundaries(locale: str) -> bool:
    """Whether terms in ``locale`` are delimited by spaces.

    ``zh``, ``zh-TW`` and ``ja`` are not; ``en`` and ``fr`` are.
    """
    language = locale.replace("_", "-").split("-")[0].lower()
    return language not in CONTINUOUS_SCRIPT_LANGUAGES


@dataclass(frozen=True)
class LocaleRouting:
    """Maps documents to locales and locales to URL prefixes.

    Attributes:
        default_locale: Locale served at the site root
        prefixed_locales: Locales served under ``/<locale>/``
        content_marker: Directory name under which locale folders live
    """

    default_locale: str = "zh"
    prefixed_locales: tuple[str, ...] = ("en",)
    content_marker: str = "docs"

    def locale_for(self, path: str | PurePath | None) -> str:
        """Locale of the document at ``path``.

        ``src/content/docs/en/guide.mdx`` -> ``en``; anything not under a
        prefixed locale folder (or no path at all) is the default locale.
        """
        if not path:
            return self.default_locale
        posix = "/" + str(path).replace("\\", "/").lstrip("/")
        for locale in self.prefixed_locales:
            if f"/{self.content_marker}/{locale}/" in posix:
                return locale
        return self.default_locale

    def prefix(self, locale: str) -> str:
        """URL prefix for ``locale``: ``""`` for the default, ``/en`` otherwise."""
        return "" if locale == self.default_locale else f"/{locale}"

    def route(self, locale: str, route: str) -> str:
        """Locale-prefixed absolute route with a trailing slash.

        >>> LocaleRouting().route("en", "meta/glossary")
        '/en/meta/glossary/'
        """
        return f"{self.prefix(locale)}/{route.strip('/')}/"


__all__ = ["CONTINUOUS_SCRIPT_LANGUAGES", "LocaleRouting", "uses_word_boundaries"]
