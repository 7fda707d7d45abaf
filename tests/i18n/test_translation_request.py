"""Tests for coassembly.i18n.request."""

import json

from _support import MEMBERSHIP_SOURCE, MEMBERSHIP_TARGET, manifest_json, write_file
from coassembly.core.hashing import hash_file
from coassembly.glossary.terms import TermIndex
from coassembly.i18n.manifest import ManifestEntry, ManifestStore
from coassembly.i18n.pairs import PairKind, TrackedPair
from coassembly.i18n.request import (
    NEW_FILE_HASH_LABEL,
    NO_TARGET_LABEL,
    TranslationItem,
    build_translation_request,
)
from coassembly.i18n.staleness import StalenessDetector, SyncStatus

MEMBERSHIP = TrackedPair(MEMBERSHIP_SOURCE, MEMBERSHIP_TARGET)
POOL = TrackedPair("src/content/docs/bylaws/07-pool.mdx", "src/content/docs/en/bylaws/07-pool.mdx")
PARAMS = TrackedPair.shared("src/params.json", PairKind.PARAMETER_ONLY)


def _build(root, manifest, *pairs, terms=None):
    report = StalenessDetector(root, manifest, pairs).check()
    return build_translation_request(report, root, manifest, terms)


class TestItems:

    def test_new_file_has_no_previous_hash(self, site_root):
        request = _build(site_root, {}, MEMBERSHIP)
        (item,) = request.items
        assert item.status is SyncStatus.STALE
        assert item.previous_hash is None
        assert item.is_new
        assert "勞工老闆依 GOV-02 投票。" in item.source_content
        assert "A worker-owner votes under GOV-02." in item.target_content

    def test_stale_file_carries_recorded_hash(self, site_root):
        manifest = {MEMBERSHIP_SOURCE: ManifestEntry(digest="abc", marked_synced_at="t")}
        (item,) = _build(site_root, manifest, MEMBERSHIP).items
        assert item.previous_hash == "abc"
        assert not item.is_new

    def test_missing_translation(self, site_root):
        write_file(site_root, POOL.source, "## POOL-01 公司池\n")
        (item,) = _build(site_root, {}, POOL).items
        assert item.status is SyncStatus.MISSING
        assert item.target_content is None

    def test_synced_and_shared_files_excluded(self, site_root):
        manifest = {MEMBERSHIP_SOURCE: ManifestEntry(
            digest=hash_file(site_root / MEMBERSHIP_SOURCE), marked_synced_at="t"
        )}
        request = _build(site_root, manifest, MEMBERSHIP, PARAMS)
        assert request.is_empty

    def test_stale_before_missing(self, site_root):
        write_file(site_root, POOL.source, "池")
        request = _build(site_root, {}, POOL, MEMBERSHIP)
        assert [i.source_path for i in request.items] == [MEMBERSHIP_SOURCE, POOL.source]


class TestGlossary:

    def test_table_rows(self, site_root, term_index):
        request = _build(site_root, {}, MEMBERSHIP, terms=term_index)
        assert [(row.source, row.target) for row in request.glossary] == [
            ("勞工老闆", "worker-owner"),
            ("公司池", "common pool"),
            ("池", "pool"),
            ("成員大會", "general assembly"),
        ]

    def test_incomplete_terms_left_out(self, site_root):
        index = TermIndex.from_mapping({"a": {"zh": "甲方"}, "b": {"zh": "乙方", "en": "party B"}})
        request = _build(site_root, {}, MEMBERSHIP, terms=index)
        assert [row.target for row in request.glossary] == ["party B"]

    def test_no_terms(self, site_root):
        assert _build(site_root, {}, MEMBERSHIP).glossary == []


class TestRendering:

    def test_markdown(self, site_root, term_index):
        write_file(site_root, POOL.source, "池\n")
        request = _build(site_root, {}, MEMBERSHIP, POOL, terms=term_index)
        text = request.render_markdown()

        assert text.startswith("# Translation Update Request\n")
        assert "| ZH | EN |" in text
        assert "| 勞工老闆 | worker-owner |" in text
        assert f"## File: {MEMBERSHIP_TARGET}" in text
        assert f"Source: {MEMBERSHIP_SOURCE}" in text
        assert f"Previous hash: {NEW_FILE_HASH_LABEL}" in text
        assert "```mdx\n---\ntitle: 成員資格" in text
        assert f"```mdx\n{NO_TARGET_LABEL}\n```" in text

    def test_json_dump(self, site_root):
        request = _build(site_root, {}, MEMBERSHIP)
        data = json.loads(request.model_dump_json())
        assert data["source_locale"] == "zh"
        assert data["items"][0]["status"] == "stale"
        assert data["items"][0]["previous_hash"] is None

    def test_item_model(self):
        item = TranslationItem(source_path="a", target_path="b", status=SyncStatus.MISSING)
        assert item.is_new
        assert item.target_content is None


def test_manifest_untouched(site_root, term_index):
    manifest_path = site_root / ".i18n-manifest.json"
    manifest_path.write_text(json.dumps(manifest_json({MEMBERSHIP_SOURCE: "abc"})), encoding="utf-8")
    before = manifest_path.read_bytes()
    store = ManifestStore(manifest_path, root=site_root)

    manifest = store.load()
    _build(site_root, manifest, MEMBERSHIP, terms=term_index).render_markdown()

    assert manifest_path.read_bytes() == before
