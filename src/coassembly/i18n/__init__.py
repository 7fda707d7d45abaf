"""
Translation tracking between the source locale and its translations.

Architecture::

    locales.py     Locale from path, locale-prefixed routes
    pairs.py       Fixed set of tracked source/translation pairs
    manifest.py    ManifestStore: last confirmed source hash per file
    staleness.py   StalenessDetector: synced / stale / missing
    request.py     Translation request payload (JSON + Markdown prompt)
"""

from .locales import LocaleRouting, uses_word_boundaries
from .manifest import ManifestEntry, ManifestStore, MarkSyncedResult
from .pairs import DEFAULT_TRACKED_PAIRS, PairKind, TrackedPair, source_paths
from .request import TranslationItem, TranslationRequest, build_translation_request
from .staleness import (
    PairStatus,
    StalenessDetector,
    StalenessReport,
    SyncStatus,
    check_translations,
)

__all__ = [
    "DEFAULT_TRACKED_PAIRS",
    "LocaleRouting",
    "ManifestEntry",
    "ManifestStore",
    "MarkSyncedResult",
    "PairKind",
    "PairStatus",
    "StalenessDetector",
    "StalenessReport",
    "SyncStatus",
    "TrackedPair",
    "TranslationItem",
    "TranslationRequest",
    "build_translation_request",
    "check_translations",
    "source_paths",
    "uses_word_boundaries",
]
