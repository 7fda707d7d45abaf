"""Tests for coassembly.core.settings."""

from pathlib import Path

import pytest

from coassembly.core.errors import InvalidConfigError
from coassembly.core.settings import (
    CoAssemblySettings,
    clear_settings_cache,
    find_project_root,
    get_settings,
)


class TestFindProjectRoot:

    def test_finds_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text("{}")
        nested = tmp_path / "src" / "content" / "docs"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == tmp_path.resolve()

    def test_finds_git_dir(self, tmp_path):
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "scripts"
        nested.mkdir()
        assert find_project_root(nested) == tmp_path.resolve()

    def test_closest_marker_wins(self, tmp_path):
        (tmp_path / ".git").mkdir()
        site = tmp_path / "site"
        site.mkdir()
        (site / "package.json").write_text("{}")
        assert find_project_root(site) == site.resolve()


class TestCoAssemblySettings:

    def test_defaults(self, tmp_path):
        settings = CoAssemblySettings(project_root=tmp_path)
        assert settings.source_locale == "zh"
        assert settings.target_locales == ["en"]
        assert settings.hash_algorithm == "md5"
        assert settings.docs_dir == Path("src/content/docs")

    def test_resolved_paths(self, tmp_path):
        settings = CoAssemblySettings(project_root=tmp_path)
        assert settings.manifest_file == tmp_path / ".i18n-manifest.json"
        assert settings.glossary_file == tmp_path / "src/data/glossary.json"
        assert settings.docs_root == tmp_path / "src/content/docs"

    def test_absolute_path_kept(self, tmp_path):
        elsewhere = tmp_path / "elsewhere.json"
        settings = CoAssemblySettings(project_root=tmp_path, manifest_path=elsewhere)
        assert settings.manifest_file == elsewhere

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COASSEMBLY_HASH_ALGORITHM", "sha256")
        monkeypatch.setenv("COASSEMBLY_SOURCE_LOCALE", "zh-TW")
        settings = CoAssemblySettings(project_root=tmp_path)
        assert settings.hash_algorithm == "sha256"
        assert settings.source_locale == "zh-TW"

    @pytest.mark.parametrize("name", ["md6", "shake_256"])
    def test_unusable_algorithm_rejected(self, tmp_path, name):
        with pytest.raises(InvalidConfigError):
            CoAssemblySettings(project_root=tmp_path, hash_algorithm=name)


class TestGetSettings:

    def test_cached_per_root(self, tmp_path):
        first = get_settings(project_root=tmp_path)
        assert get_settings(project_root=tmp_path) is first

    def test_force_reload(self, tmp_path):
        first = get_settings(project_root=tmp_path)
        assert get_settings(project_root=tmp_path, _force_reload=True) is not first

    def test_clear_cache(self, tmp_path):
        first = get_settings(project_root=tmp_path)
        clear_settings_cache()
        assert get_settings(project_root=tmp_path) is not first

    def test_project_root_is_resolved(self, tmp_path):
        settings = get_settings(project_root=tmp_path)
        assert settings.project_root == tmp_path.resolve()
