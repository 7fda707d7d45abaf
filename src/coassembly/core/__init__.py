"""CoAssembly Core -- shared primitives for the documentation tooling.

Architecture::

    errors.py       Structured error hierarchy (CoAssemblyError, ParseError)
    logging.py      structlog configuration + get_logger()
    hashing.py      Raw-byte content digests with a NO_HASH sentinel
    timestamps.py   UTC helpers, JS-compatible ISO 8601 formatting
    settings.py     pydantic-settings configuration + project root discovery
"""

from .errors import (
    CoAssemblyError,
    ConfigError,
    DictionaryParseError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    ManifestParseError,
    ParseError,
    SourceError,
    SourceNotFoundError,
    StorageError,
)
from .hashing import NO_HASH, hash_bytes, hash_file
from .logging import configure_logging, get_logger

__all__ = [
    "CoAssemblyError",
    "ConfigError",
    "DictionaryParseError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "ManifestParseError",
    "NO_HASH",
    "ParseError",
    "SourceError",
    "SourceNotFoundError",
    "StorageError",
    "configure_logging",
    "get_logger",
    "hash_bytes",
    "hash_file",
]
