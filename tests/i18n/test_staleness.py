"""
Tests for coassembly.i18n.staleness.

Tests cover:
- synced / stale / missing classification of content pairs
- Parameter and data pairs reported as review warnings
- Report aggregation and exit codes
- Checks never modify the manifest
"""

import json

import pytest

from _support import MEMBERSHIP_SOURCE, MEMBERSHIP_TARGET, manifest_json, write_file
from coassembly.core.hashing import hash_file
from coassembly.i18n.manifest import ManifestEntry, ManifestStore
from coassembly.i18n.pairs import DEFAULT_TRACKED_PAIRS, PairKind, TrackedPair
from coassembly.i18n.staleness import (
    SHARED_FILE_NOTE,
    StalenessDetector,
    StalenessReport,
    SyncStatus,
    check_translations,
)

MEMBERSHIP = TrackedPair(MEMBERSHIP_SOURCE, MEMBERSHIP_TARGET)
PARAMS = TrackedPair.shared("src/params.json", PairKind.PARAMETER_ONLY)
GLOSSARY = TrackedPair.shared("src/data/glossary.json", PairKind.DATA_ONLY)


def _entry(digest: str) -> ManifestEntry:
    return ManifestEntry(digest=digest, marked_synced_at="2025-01-31T09:30:00.000Z")


def _check(root, manifest, *pairs):
    return StalenessDetector(root, manifest, pairs or (MEMBERSHIP,)).check()


class TestContentPairs:

    def test_synced_when_hash_matches(self, site_root):
        manifest = {MEMBERSHIP_SOURCE: _entry(hash_file(site_root / MEMBERSHIP_SOURCE))}
        (result,) = _check(site_root, manifest).results
        assert result.status is SyncStatus.SYNCED
        assert result.current_hash == result.recorded_hash
        assert not result.needs_attention

    def test_stale_after_source_edit(self, site_root):
        manifest = {MEMBERSHIP_SOURCE: _entry(hash_file(site_root / MEMBERSHIP_SOURCE))}
        write_file(site_root, MEMBERSHIP_SOURCE, "## MEM-01 入會\n\n新增條文。\n")
        (result,) = _check(site_root, manifest).results
        assert result.status is SyncStatus.STALE
        assert result.note is None

    def test_stale_without_manifest_entry(self, site_root):
        (result,) = _check(site_root, {}).results
        assert result.status is SyncStatus.STALE
        assert result.recorded_hash is None

    def test_missing_when_translation_absent(self, site_root):
        (site_root / MEMBERSHIP_TARGET).unlink()
        manifest = {MEMBERSHIP_SOURCE: _entry(hash_file(site_root / MEMBERSHIP_SOURCE))}
        (result,) = _check(site_root, manifest).results
        assert result.status is SyncStatus.MISSING

    def test_missing_takes_precedence_over_no_entry(self, site_root):
        (site_root / MEMBERSHIP_TARGET).unlink()
        (result,) = _check(site_root, {}).results
        assert result.status is SyncStatus.MISSING

    def test_unreadable_source_never_synced(self, site_root):
        (site_root / MEMBERSHIP_SOURCE).unlink()
        (result,) = _check(site_root, {MEMBERSHIP_SOURCE: _entry("abc")}).results
        assert result.status is SyncStatus.STALE
        assert result.current_hash is None
        assert result.note == "source file not readable"

    def test_translation_edits_do_not_matter(self, site_root):
        manifest = {MEMBERSHIP_SOURCE: _entry(hash_file(site_root / MEMBERSHIP_SOURCE))}
        write_file(site_root, MEMBERSHIP_TARGET, "reworded translation")
        assert _check(site_root, manifest).status_of(MEMBERSHIP_SOURCE) is SyncStatus.SYNCED

    def test_line_endings_change_hash(self, site_root):
        manifest = {MEMBERSHIP_SOURCE: _entry(hash_file(site_root / MEMBERSHIP_SOURCE))}
        content = (site_root / MEMBERSHIP_SOURCE).read_bytes()
        (site_root / MEMBERSHIP_SOURCE).write_bytes(content.replace(b"\n", b"\r\n"))
        assert _check(site_root, manifest).status_of(MEMBERSHIP_SOURCE) is SyncStatus.STALE


class TestSharedFiles:

    @pytest.mark.parametrize("pair", [PARAMS, GLOSSARY])
    def test_changed_shared_file(self, site_root, pair):
        (result,) = _check(site_root, {pair.source: _entry("old")}, pair).results
        assert result.status is SyncStatus.STALE
        assert result.note == SHARED_FILE_NOTE

    @pytest.mark.parametrize("pair", [PARAMS, GLOSSARY])
    def test_unchanged_shared_file(self, site_root, pair):
        manifest = {pair.source: _entry(hash_file(site_root / pair.source))}
        (result,) = _check(site_root, manifest, pair).results
        assert result.status is SyncStatus.SYNCED
        assert result.note is None

    def test_shared_file_never_missing(self, site_root):
        (site_root / "src/params.json").unlink()
        (result,) = _check(site_root, {}, PARAMS).results
        assert result.status is SyncStatus.STALE
        assert result.current_hash is None

    def test_shared_files_not_in_needs_translation(self, site_root):
        report = _check(site_root, {}, MEMBERSHIP, PARAMS)
        assert [r.pair for r in report.data_stale] == [PARAMS]
        assert [r.pair for r in report.content_stale] == [MEMBERSHIP]
        assert [r.pair for r in report.needs_translation] == [MEMBERSHIP]


class TestReport:

    def test_empty_report(self):
        report = StalenessReport()
        assert report.attention_count == 0
        assert report.exit_code == 0
        assert report.status_of(MEMBERSHIP_SOURCE) is None

    def test_needs_translation_orders_stale_before_missing(self, site_root):
        write_file(site_root, "src/content/docs/bylaws/07-pool.mdx", "池")
        pool = TrackedPair(
            "src/content/docs/bylaws/07-pool.mdx", "src/content/docs/en/bylaws/07-pool.mdx"
        )
        report = _check(site_root, {}, pool, MEMBERSHIP)
        assert [r.status for r in report.needs_translation] == [SyncStatus.STALE, SyncStatus.MISSING]
        assert report.exit_code == 1

    def test_default_pairs(self, site_root):
        report = StalenessDetector(site_root, {}).check()
        assert len(report.results) == len(DEFAULT_TRACKED_PAIRS)
        assert report.status_of(MEMBERSHIP_SOURCE) is SyncStatus.STALE
        assert report.status_of("src/content/docs/bylaws/01-general.mdx") is SyncStatus.MISSING
        assert report.status_of("src/params.json") is SyncStatus.STALE

    def test_to_dict(self, site_root):
        data = _check(site_root, {}, MEMBERSHIP, PARAMS).to_dict()
        assert data["summary"] == {"synced": 0, "stale": 2, "missing": 0, "needs_attention": 2}
        assert data["pairs"][1] == {
            "source": "src/params.json",
            "target": "src/params.json",
            "kind": "parameter",
            "status": "stale",
            "current_hash": hash_file(site_root / "src/params.json"),
            "recorded_hash": None,
            "note": SHARED_FILE_NOTE,
        }
        json.dumps(data)


class TestWithStore:

    def test_mark_synced_then_all_synced(self, site_root):
        pairs = (MEMBERSHIP, PARAMS, GLOSSARY)
        store = ManifestStore(site_root / ".i18n-manifest.json", root=site_root)
        assert check_translations(site_root, store.load(), pairs).exit_code == 1

        store.mark_synced(pair.source for pair in pairs)

        report = check_translations(site_root, store.load(), pairs)
        assert len(report.synced) == 3
        assert report.exit_code == 0

    def test_check_is_read_only(self, site_root):
        manifest_path = site_root / ".i18n-manifest.json"
        manifest_path.write_text(json.dumps(manifest_json({MEMBERSHIP_SOURCE: "abc"})), encoding="utf-8")
        before = manifest_path.read_bytes()
        store = ManifestStore(manifest_path, root=site_root)

        first = check_translations(site_root, store.load())
        second = check_translations(site_root, store.load())

        assert manifest_path.read_bytes() == before
        assert first.to_dict() == second.to_dict()
        assert first.exit_code == second.exit_code == 1

    def test_no_manifest_file_created(self, site_root):
        store = ManifestStore(site_root / ".i18n-manifest.json", root=site_root)
        check_translations(site_root, store.load())
        assert not store.exists()

    def test_algorithm_must_match_manifest(self, site_root):
        store = ManifestStore(site_root / ".i18n-manifest.json", root=site_root, algorithm="sha256")
        store.mark_synced([MEMBERSHIP_SOURCE])
        manifest = store.load()
        assert _check(site_root, manifest).exit_code == 1
        report = StalenessDetector(site_root, manifest, (MEMBERSHIP,), algorithm="sha256").check()
        assert report.exit_code == 0
