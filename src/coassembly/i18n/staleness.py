"""
Translation staleness check.

Manifesto:
    A translation is current when the source bytes it was made from are the
    source bytes on disk today. The check hashes every tracked source,
    compares the digest with the manifest and sorts each pair into
    ``synced``, ``stale`` or ``missing``. It reads files and the manifest
    and writes nothing.

Architecture:
    ::

        DEFAULT_TRACKED_PAIRS ──┐
        file bytes ─────────────┼──► StalenessDetector.check() ──► StalenessReport
        manifest mapping ───────┘                                   ├── synced
                                                                    ├── stale  (content / data)
                                                                    └── missing

    Content pairs:
        target absent                        -> missing
        no entry / no hash / hash mismatch   -> stale
        otherwise                            -> synced

    Parameter and data pairs have no translation of their own. A change
    there is reported as stale with a note that every translation using
    the file may need review.

Tags:
    i18n, translation, staleness, hashing, report
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from coassembly.core.hashing import DEFAULT_ALGORITHM, NO_HASH, hash_file
from coassembly.core.logging import get_logger

from .manifest import ManifestEntry
from .pairs import DEFAULT_TRACKED_PAIRS, TrackedPair

logger = get_logger(__name__)

SHARED_FILE_NOTE = "params/data changed; all files using it may need review"


class SyncStatus(str, Enum):
    """Classification of one tracked pair."""

    SYNCED = "synced"
    STALE = "stale"
    MISSING = "missing"


@dataclass(frozen=True)
class PairStatus:
    """Result of checking one tracked pair."""

    pair: TrackedPair
    status: SyncStatus
    current_hash: str | None = NO_HASH
    recorded_hash: str | None = None
    note: str | None = None

    @property
    def needs_attention(self) -> bool:
        return self.status is not SyncStatus.SYNCED

    def to_dict(self) -> dict[str, str | None]:
        return {
            "source": self.pair.source,
            "target": self.pair.target,
            "kind": self.pair.kind.value,
            "status": self.status.value,
            "current_hash": self.current_hash,
            "recorded_hash": self.recorded_hash,
            "note": self.note,
        }


@dataclass
class StalenessReport:
    """All pair results of one check, in tracking order."""

    results: list[PairStatus] = field(default_factory=list)

    def _with_status(self, status: SyncStatus) -> list[PairStatus]:
        return [r for r in self.results if r.status is status]

    @property
    def synced(self) -> list[PairStatus]:
        return self._with_status(SyncStatus.SYNCED)

    @property
    def stale(self) -> list[PairStatus]:
        return self._with_status(SyncStatus.STALE)

    @property
    def missing(self) -> list[PairStatus]:
        return self._with_status(SyncStatus.MISSING)

    @property
    def content_stale(self) -> list[PairStatus]:
        """Stale pairs whose translation has to be updated."""
        return [r for r in self.stale if r.pair.has_translation]

    @property
    def data_stale(self) -> list[PairStatus]:
        """Stale parameter/data pairs (review warning only)."""
        return [r for r in self.stale if not r.pair.has_translation]

    @property
    def needs_translation(self) -> list[PairStatus]:
        """Content pairs to hand to a translator: stale first, then missing."""
        return self.content_stale + self.missing

    @property
    def attention_count(self) -> int:
        return len(self.stale) + len(self.missing)

    @property
    def exit_code(self) -> int:
        return 1 if self.attention_count else 0

    def status_of(self, source: str) -> SyncStatus | None:
        for result in self.results:
            if result.pair.source == source:
                return result.status
        return None

    def to_dict(self) -> dict:
        return {
            "summary": {
                "synced": len(self.synced),
                "stale": len(self.stale),
                "missing": len(self.missing),
                "needs_attention": self.attention_count,
            },
            "pairs": [r.to_dict() for r in self.results],
        }


class StalenessDetector:
    """Classifies tracked pairs against a manifest snapshot.

    Args:
        root: Directory the pair paths are relative to
        manifest: Mapping loaded from ``ManifestStore.load()``
        pairs: Pairs to check
        algorithm: ``hashlib`` algorithm the manifest was written with
    """

    def __init__(
        self,
        root: Path,
        manifest: Mapping[str, ManifestEntry],
        pairs: Sequence[TrackedPair] = DEFAULT_TRACKED_PAIRS,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> None:
        self.root = root
        self.manifest = manifest
        self.pairs = tuple(pairs)
        self.algorithm = algorithm

    def check(self) -> StalenessReport:
        """Check every pair; a failure on one pair only affects that pair."""
        report = StalenessReport(results=[self._check_pair(pair) for pair in self.pairs])
        logger.info(
            "staleness_checked",
            pairs=len(report.results),
            synced=len(report.synced),
            stale=len(report.stale),
            missing=len(report.missing),
        )
        return report

    def _check_pair(self, pair: TrackedPair) -> PairStatus:
        current = hash_file(self.root / pair.source, self.algorithm)
        entry = self.manifest.get(pair.source)
        recorded = entry.digest if entry is not None else None

        if not pair.has_translation:
            if current is not NO_HASH and current == recorded:
                return PairStatus(pair, SyncStatus.SYNCED, current, recorded)
            return PairStatus(pair, SyncStatus.STALE, current, recorded, note=SHARED_FILE_NOTE)

        try:
            target_exists = (self.root / pair.target).exists()
        except OSError as exc:
            logger.warning("target_check_failed", target=pair.target, error=str(exc))
            target_exists = False

        if not target_exists:
            return PairStatus(pair, SyncStatus.MISSING, current, recorded)
        if current is NO_HASH:
            return PairStatus(
                pair, SyncStatus.STALE, current, recorded, note="source file not readable"
            )
        if current != recorded:
            return PairStatus(pair, SyncStatus.STALE, current, recorded)
        return PairStatus(pair, SyncStatus.SYNCED, current, recorded)


def check_translations(
    root: Path,
    manifest: Mapping[str, ManifestEntry],
    pairs: Iterable[TrackedPair] = DEFAULT_TRACKED_PAIRS,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
) -> StalenessReport:
    """Functional shortcut for ``StalenessDetector(...).check()``."""
    return StalenessDetector(root, manifest, tuple(pairs), algorithm=algorithm).check()


__all__ = [
    "PairStatus",
    "SHARED_FILE_NOTE",
    "StalenessDetector",
    "StalenessReport",
    "SyncStatus",
    "check_translations",
]
