"""
Settings for the CoAssembly documentation tooling.

Manifesto:
    Every path the tools touch (docs tree, glossary data, manifest) is
    relative to one project root, and every value can be overridden from the
    environment. ``CoAssemblySettings`` validates those values once at
    startup instead of letting each command re-derive them.

    - **Pydantic validation:** Type-checked when the CLI starts
    - **Environment-driven:** ``COASSEMBLY_*`` variables and ``.env`` files
    - **Sensible defaults:** Matches the layout of the bylaws site repository

Features:
    - **find_project_root():** Walks upward for ``package.json``/``.git``/``pyproject.toml``
    - **get_settings():** Cached per project root, ``_force_reload`` for tests
    - **resolve():** Turns a repo-relative path into an absolute one

Examples:
    >>> settings = get_settings(project_root=Path("/srv/co-assembly"))
    >>> settings.manifest_file
    PosixPath('/srv/co-assembly/.i18n-manifest.json')

Tags:
    settings, configuration, pydantic, environment, coassembly-core
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .hashing import DEFAULT_ALGORITHM, validate_algorithm

_ROOT_MARKERS = ("package.json", ".git", "pyproject.toml")


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from *start* to find the project root.

    Recognised root markers (checked in order): ``package.json`` (the site),
    ``.git`` and ``pyproject.toml``. Falls back to *start* (or cwd) when no
    marker is found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for marker in _ROOT_MARKERS:
            if (directory / marker).exists():
                return directory
    return current


class CoAssemblySettings(BaseSettings):
    """Configuration shared by all commands.

    Fields
    ──────
    project_root     : Site repository root; other paths are relative to it
    docs_dir         : Content collection root (source locale lives here)
    glossary_path    : Term dictionary JSON
    manifest_path    : Translation manifest JSON
    source_locale    : Locale of the source documents (served without prefix)
    target_locales   : Translated locales (served under ``/<locale>/``)
    hash_algorithm   : ``hashlib`` algorithm used for manifest digests
    log_level        : Structlog log level
    json_logs        : Force JSON (True) or console (False) logs; None = auto
    """

    model_config = SettingsConfigDict(
        env_prefix="COASSEMBLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Layout ───────────────────────────────────────────────────
    project_root: Path = Field(default_factory=find_project_root)
    docs_dir: Path = Path("src/content/docs")
    glossary_path: Path = Path("src/data/glossary.json")
    manifest_path: Path = Path(".i18n-manifest.json")

    # ── Locales ──────────────────────────────────────────────────
    source_locale: str = "zh"
    target_locales: list[str] = Field(default_factory=lambda: ["en"])

    # ── Manifest ─────────────────────────────────────────────────
    hash_algorithm: str = DEFAULT_ALGORITHM

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool | None = None

    @field_validator("hash_algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        return validate_algorithm(value)

    def resolve(self, path: Path | str) -> Path:
        """Absolute path for a repo-relative ``path``."""
        path = Path(path)
        return path if path.is_absolute() else self.project_root / path

    @property
    def glossary_file(self) -> Path:
        return self.resolve(self.glossary_path)

    @property
    def manifest_file(self) -> Path:
        return self.resolve(self.manifest_path)

    @property
    def docs_root(self) -> Path:
        return self.resolve(self.docs_dir)


_settings_cache: dict[str, CoAssemblySettings] = {}


def get_settings(
    *,
    project_root: Path | None = None,
    _force_reload: bool = False,
) -> CoAssemblySettings:
    """Load, validate, and cache a :class:`CoAssemblySettings` instance.

    Args:
        project_root: Override the auto-detected project root.
        _force_reload: Bypass cache and reload from the environment.
    """
    root = (project_root or find_project_root()).resolve()
    cache_key = str(root)

    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    if project_root is not None:
        settings = CoAssemblySettings(project_root=root)
    else:
        settings = CoAssemblySettings()
    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop cached settings (test helper)."""
    _settings_cache.clear()


__all__ = [
    "CoAssemblySettings",
    "clear_settings_cache",
    "find_project_root",
    "get_settings",
]
