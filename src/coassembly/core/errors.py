"""
Structured error types for the CoAssembly documentation tooling.

Every failure the tooling raises on purpose is a ``CoAssemblyError``. Each
error carries a category (what kind of failure), a structured context (which
file, which locale, which term) and an optional chained cause, so the CLI can
log one consistent record per failure.

Manifesto:
    - **Typed hierarchy:** Load failures, missing sources, bad configuration
      and storage failures are distinct types
    - **Rich context:** Errors carry the path and locale that failed
    - **Error chaining:** The underlying ``json``/``OSError`` is kept as cause
    - **Not everything is an error:** Unknown article prefixes and missing
      translation targets are outcomes, not exceptions

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    CoAssemblyError                        │
        │          (category, context, cause)                       │
        ├──────────────────────────────────────────────────────────┤
        │  SourceError          ConfigError        StorageError     │
        │  (SOURCE)             (CONFIG)           (STORAGE)        │
        │     │                     │                               │
        │  SourceNotFoundError  InvalidConfigError                  │
        │  ParseError (PARSE)                                       │
        │     │                                                     │
        │  DictionaryParseError                                     │
        │  ManifestParseError                                       │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = DictionaryParseError("glossary root must be an object")
    >>> error.with_context(path="src/data/glossary.json").context.path
    'src/data/glossary.json'
    >>> error.category
    <ErrorCategory.PARSE: 'PARSE'>

Tags:
    errors, exceptions, error-context, coassembly-core

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for log routing and CLI summaries."""

    SOURCE = "SOURCE"        # Input file missing or unreadable
    PARSE = "PARSE"          # Dictionary / manifest malformed
    CONFIG = "CONFIG"        # Invalid settings
    STORAGE = "STORAGE"      # Manifest could not be written
    INTERNAL = "INTERNAL"    # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        path: File the operation was working on
        locale: Locale being processed, if any
        operation: Logical operation name (``load_terms``, ``save_manifest``)
        metadata: Additional key-value pairs
    """

    path: str | None = None
    locale: str | None = None
    operation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ("path", "locale", "operation"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CoAssemblyError(Exception):
    """
    Base exception for all CoAssembly tooling errors.

    Subclasses set ``default_category``; callers may still override it.

    Examples:
        >>> error = CoAssemblyError("boom")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'CoAssemblyError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CoAssemblyError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ManifestParseError("bad entry").with_context(
                path=".i18n-manifest.json",
                entry="src/params.json",
            )
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SourceError(CoAssemblyError):
    """Error reading an input file."""

    default_category = ErrorCategory.SOURCE


class SourceNotFoundError(SourceError):
    """Required input file does not exist."""


class ParseError(SourceError):
    """Input file exists but its content is malformed."""

    default_category = ErrorCategory.PARSE


class DictionaryParseError(ParseError):
    """The term dictionary could not be parsed."""


class ManifestParseError(ParseError):
    """The translation manifest could not be parsed."""


# =============================================================================
# CONFIGURATION / STORAGE ERRORS
# =============================================================================


class ConfigError(CoAssemblyError):
    """Configuration error. Must be fixed by the operator."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid value for {key}: {value!r}")


class StorageError(CoAssemblyError):
    """Persisted state could not be written."""

    default_category = ErrorCategory.STORAGE


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "CoAssemblyError",
    "SourceError",
    "SourceNotFoundError",
    "ParseError",
    "DictionaryParseError",
    "ManifestParseError",
    "ConfigError",
    "InvalidConfigError",
    "StorageError",
]
