"""
Deterministic content hashing for translation change detection.

Manifesto:
    A translation is "in sync" when the source bytes it was made from are
    the bytes on disk today. Comparing digests of raw file bytes answers
    that without keeping copies of old sources:

    - **Raw bytes:** No decoding, no newline normalization
    - **Deterministic:** Same bytes always give the same hex digest
    - **Sentinel for absence:** A file that cannot be read has ``NO_HASH``,
      which never equals a recorded digest

    The default algorithm is MD5 so digests stay comparable with manifests
    written by the existing site scripts. Any ``hashlib`` algorithm can be
    configured; collision resistance only has to hold against accidental
    edits, not adversaries.

Examples:
    >>> hash_bytes(b"abc")
    '900150983cd24fb0d6963f7d28e17f72'
    >>> hash_bytes(b"abc", algorithm="sha256")[:8]
    'ba7816bf'
    >>> hash_file(Path("does/not/exist")) is NO_HASH
    True

Tags:
    hashing, change-detection, manifest, coassembly-core
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from .errors import InvalidConfigError
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_ALGORITHM = "md5"

# Digest of a file that does not exist or cannot be read.
NO_HASH: None = None

_CHUNK_SIZE = 64 * 1024


def validate_algorithm(algorithm: str) -> str:
    """Return ``algorithm`` if ``hashlib`` supports it with a fixed digest size.

    Raises:
        InvalidConfigError: For names ``hashlib`` cannot use, including the
            variable-length SHAKE digests.
    """
    if algorithm not in hashlib.algorithms_available or algorithm.startswith("shake_"):
        raise InvalidConfigError("hash_algorithm", algorithm)
    try:
        digest_size = hashlib.new(algorithm).digest_size
    except ValueError as exc:
        raise InvalidConfigError("hash_algorithm", algorithm) from exc
    if digest_size == 0:
        raise InvalidConfigError(
            "hash_algorithm", algorithm, f"Hash algorithm {algorithm!r} has no fixed digest size"
        )
    return algorithm


def hash_bytes(content: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hex digest of ``content``."""
    return hashlib.new(validate_algorithm(algorithm), content).hexdigest()


def hash_file(path: Path, algorithm: str = DEFAULT_ALGORITHM) -> str | None:
    """Hex digest of the raw bytes of ``path``.

    Returns ``NO_HASH`` when the file is missing or unreadable; the failure is
    logged, never raised, so one bad file cannot abort a batch.
    """
    digest = hashlib.new(validate_algorithm(algorithm))
    try:
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except FileNotFoundError:
        return NO_HASH
    except OSError as exc:
        logger.warning("hash_failed", path=str(path), error=str(exc))
        return NO_HASH
    return digest.hexdigest()


__all__ = [
    "DEFAULT_ALGORITHM",
    "NO_HASH",
    "hash_bytes",
    "hash_file",
    "validate_algorithm",
]
