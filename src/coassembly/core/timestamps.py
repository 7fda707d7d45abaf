"""
UTC timestamp helpers (stdlib-only).

Manifest timestamps are written in the same shape JavaScript's
``Date.toISOString()`` produces (``2025-01-31T09:30:00.000Z``) so manifests
stay byte-stable when the file is shared with the site's Node tooling.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso8601(dt: datetime) -> str:
    """Format ``dt`` as UTC ISO 8601 with millisecond precision and ``Z`` suffix.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    text = dt.astimezone(UTC).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def from_iso8601(s: str) -> datetime:
    """Parse an ISO 8601 string, accepting the ``Z`` suffix."""
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)
