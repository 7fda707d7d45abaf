"""
Translation manifest: the last source hash confirmed as translated.

Manifesto:
    "Is the English page up to date?" is answered by one fact per source
    file: the digest of the source bytes at the moment someone confirmed the
    translation. The manifest stores exactly that, keyed by repo-relative
    source path, and nothing else.

    - **Explicit writes only:** Entries change through ``mark_synced()``,
      never as a side effect of a check
    - **First run is fine:** No manifest file means an empty manifest
    - **Whole-file atomic save:** Written to a temp file, then ``os.replace``

Architecture:
    ::

        .i18n-manifest.json
        {
          "src/content/docs/bylaws/02-membership.mdx": {
            "hash": "5d41402abc4b2a76b9719d911017c592",
            "markedSyncedAt": "2025-01-31T09:30:00.000Z"
          }
        }

        ManifestStore.load()  -> dict[str, ManifestEntry]   (read-only users)
        ManifestStore.mark_synced(paths) -> MarkSyncedResult (maintenance)
        ManifestStore.save(mapping)                          (full overwrite)

Tags:
    manifest, i18n, translation, persistence, atomic-write
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from coassembly.core.errors import ManifestParseError, StorageError
from coassembly.core.hashing import DEFAULT_ALGORITHM, hash_file
from coassembly.core.logging import get_logger
from coassembly.core.timestamps import to_iso8601, utc_now

logger = get_logger(__name__)


class ManifestEntry(BaseModel):
    """Recorded digest of one source file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    digest: str = Field(alias="hash")
    marked_synced_at: str = Field(alias="markedSyncedAt")

    def to_json(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


Manifest = dict[str, ManifestEntry]

_MANIFEST_ADAPTER = TypeAdapter(dict[str, ManifestEntry])


@dataclass
class MarkSyncedResult:
    """Outcome of ``ManifestStore.mark_synced``."""

    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    timestamp: str = ""


class ManifestStore:
    """Reads and writes the translation manifest file.

    Args:
        path: Manifest file location
        root: Directory source paths are relative to (default: manifest's parent)
        algorithm: ``hashlib`` algorithm for new entries
    """

    def __init__(
        self,
        path: Path,
        *,
        root: Path | None = None,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> None:
        self.path = path
        self.root = root if root is not None else path.parent
        self.algorithm = algorithm

    def exists(self) -> bool:
        return self.path.exists()

    def key_for(self, path: str | Path) -> str:
        """Manifest key (repo-relative POSIX path) for ``path``."""
        candidate = Path(path)
        if candidate.is_absolute():
            try:
                return candidate.relative_to(self.root).as_posix()
            except ValueError:
                # Outside the root only if it really exists there; otherwise
                # "/src/params.json" names the repo file.
                if candidate.exists():
                    return candidate.as_posix()
        return str(path).replace("\\", "/").lstrip("/")

    # ── Read ─────────────────────────────────────────────────────

    def load(self) -> Manifest:
        """Persisted mapping, or ``{}`` when no manifest exists yet.

        Raises:
            ManifestParseError: If the file is unreadable or malformed.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("manifest_missing", path=str(self.path))
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestParseError(
                f"Cannot read manifest: {exc}", cause=exc
            ).with_context(path=str(self.path), operation="load_manifest") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ManifestParseError(
                f"Invalid JSON in manifest: {exc}", cause=exc
            ).with_context(path=str(self.path), operation="load_manifest") from exc

        try:
            return _MANIFEST_ADAPTER.validate_python(data)
        except PydanticValidationError as exc:
            raise ManifestParseError(
                f"Manifest does not match the expected shape: {exc.error_count()} error(s)",
                cause=exc,
            ).with_context(path=str(self.path), operation="load_manifest") from exc

    # ── Write ────────────────────────────────────────────────────

    def save(self, manifest: Mapping[str, ManifestEntry]) -> None:
        """Overwrite the manifest with ``manifest``.

        Raises:
            StorageError: If the file cannot be written. The previous file
                is left untouched in that case.
        """
        payload = {key: entry.to_json() for key, entry in manifest.items()}
        content = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(
                f"Cannot write manifest: {exc}", cause=exc
            ).with_context(path=str(self.path), operation="save_manifest") from exc

        logger.info("manifest_saved", path=str(self.path), entries=len(payload))

    def mark_synced(
        self,
        paths: Iterable[str | Path],
        timestamp: datetime | None = None,
    ) -> MarkSyncedResult:
        """Record the current digest of every path in ``paths``.

        Paths that do not exist (or cannot be read) are skipped with a
        warning; the rest are upserted and the manifest is saved once.
        """
        manifest = self.load()
        result = MarkSyncedResult(timestamp=to_iso8601(timestamp or utc_now()))

        for path in paths:
            key = self.key_for(path)
            digest = hash_file(self.root / key, self.algorithm)
            if digest is None:
                logger.warning("mark_synced_skipped", path=key, reason="not found or unreadable")
                result.skipped.append(key)
                continue
            manifest[key] = ManifestEntry(digest=digest, marked_synced_at=result.timestamp)
            result.updated.append(key)

        self.save(manifest)
        return result


__all__ = ["Manifest", "ManifestEntry", "ManifestStore", "MarkSyncedResult"]
