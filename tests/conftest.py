"""
Shared pytest fixtures and configuration for coassembly tests.

This module provides:
- A small glossary dictionary and its TermIndex
- A throwaway site tree (sources, translations, params, glossary data)
- Settings-cache and structlog cleanup between tests

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_something(site_root, term_index):
        ...
"""

import json
import sys
from pathlib import Path

import pytest
import structlog

# Ensure coassembly package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from _support import MEMBERSHIP_SOURCE, MEMBERSHIP_TARGET, write_file
from coassembly.core.settings import clear_settings_cache
from coassembly.glossary.terms import TermIndex

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Drop cached settings and structlog configuration after every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
    structlog.reset_defaults()


# =============================================================================
# Glossary
# =============================================================================


@pytest.fixture
def glossary_data() -> dict[str, dict[str, str]]:
    """Term dictionary as decoded from glossary.json."""
    return {
        "worker-owner": {"zh": "勞工老闆", "en": "worker-owner"},
        "common-pool": {"zh": "公司池", "en": "common pool"},
        "pool": {"zh": "池", "en": "pool"},
        "general-assembly": {"zh": "成員大會", "en": "general assembly"},
    }


@pytest.fixture
def term_index(glossary_data) -> TermIndex:
    return TermIndex.from_mapping(glossary_data)


# =============================================================================
# Site tree
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def site_root(tmp_path, glossary_data) -> Path:
    """Minimal bylaws site with one translated chapter."""
    write_file(tmp_path, "package.json", json.dumps({"name": "coassembly-bylaws"}))
    write_file(
        tmp_path,
        MEMBERSHIP_SOURCE,
        "---\ntitle: 成員資格\n---\n\n## MEM-01 入會\n\n勞工老闆依 GOV-02 投票。\n",
    )
    write_file(
        tmp_path,
        MEMBERSHIP_TARGET,
        "---\ntitle: Membership\n---\n\n## MEM-01 Joining\n\nA worker-owner votes under GOV-02.\n",
    )
    write_file(tmp_path, "src/params.json", json.dumps({"quorum": 0.5}))
    write_file(
        tmp_path,
        "src/data/glossary.json",
        json.dumps(glossary_data, ensure_ascii=False, indent=2),
    )
    return tmp_path
