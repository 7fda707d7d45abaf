"""
Tests for coassembly.autolink.glossary.

Tests cover:
- First occurrence per term id per document
- Locale-prefixed hrefs and display class
- Word guards and case folding for English, exact substrings for Chinese
- Skipping the glossary page and excluded subtrees
"""

from coassembly.autolink.glossary import GLOSSARY_CLASS, GlossaryLinker, term_pattern
from coassembly.autolink.nodes import NodeKind, find_links, heading, link, paragraph, root
from coassembly.glossary.terms import TermIndex
from coassembly.i18n.locales import LocaleRouting

ZH_DOC = "src/content/docs/bylaws/02-membership.mdx"
EN_DOC = "src/content/docs/en/bylaws/02-membership.mdx"


def _links(tree):
    return [(n.url, n.plain_text()) for n in find_links(tree, GLOSSARY_CLASS)]


class TestTermPattern:

    def test_english_is_case_insensitive_with_guards(self):
        pattern = term_pattern("pool", "en")
        assert pattern.search("The Pool grows")
        assert not pattern.search("whirlpool")
        assert not pattern.search("pool-side")
        assert not pattern.search("pools")

    def test_chinese_is_exact_substring(self):
        pattern = term_pattern("公司池", "zh")
        assert pattern.search("提撥至公司池。")

    def test_special_characters_escaped(self):
        assert term_pattern("c++", "en").search("use c++ here")


class TestFirstOccurrence:

    def test_only_first_occurrence_linked(self, term_index):
        tree = root(
            paragraph("勞工老闆與勞工老闆"),
            paragraph("每位勞工老闆"),
        )
        assert GlossaryLinker(term_index).link(tree, ZH_DOC) == 1
        assert _links(tree) == [("/meta/glossary/#worker-owner", "勞工老闆")]

    def test_each_term_linked_once(self, term_index):
        tree = root(paragraph("勞工老闆提撥至公司池，公司池由成員大會管理。"))
        GlossaryLinker(term_index).link(tree, ZH_DOC)
        assert _links(tree) == [
            ("/meta/glossary/#worker-owner", "勞工老闆"),
            ("/meta/glossary/#common-pool", "公司池"),
            ("/meta/glossary/#general-assembly", "成員大會"),
        ]

    def test_no_state_carried_between_documents(self, term_index):
        linker = GlossaryLinker(term_index)
        first = root(paragraph("勞工老闆"))
        second = root(paragraph("勞工老闆"))
        assert linker.link(first, ZH_DOC) == 1
        assert linker.link(second, ZH_DOC) == 1

    def test_single_character_term_never_linked(self, term_index):
        tree = root(paragraph("池"))
        assert GlossaryLinker(term_index).link(tree, ZH_DOC) == 0


class TestEnglish:

    def test_locale_prefix_and_original_casing(self, term_index):
        tree = root(paragraph("Every Worker-Owner may vote."))
        GlossaryLinker(term_index).link(tree, EN_DOC)
        assert _links(tree) == [("/en/meta/glossary/#worker-owner", "Worker-Owner")]

    def test_longest_term_claims_text(self, term_index):
        tree = root(paragraph("The common pool is not a pool party."))
        GlossaryLinker(term_index).link(tree, EN_DOC)
        assert _links(tree) == [
            ("/en/meta/glossary/#common-pool", "common pool"),
            ("/en/meta/glossary/#pool", "pool"),
        ]

    def test_word_guard(self, term_index):
        tree = root(paragraph("A whirlpool is not a carpool."))
        assert GlossaryLinker(term_index).link(tree, EN_DOC) == 0

    def test_link_carries_display_class(self, term_index):
        tree = root(paragraph("pool"))
        GlossaryLinker(term_index).link(tree, EN_DOC)
        (node,) = find_links(tree)
        assert node.kind is NodeKind.LINK
        assert node.css_class == "glossary-autolink"


class TestSkips:

    def test_glossary_page_skipped(self, term_index):
        tree = root(paragraph("勞工老闆"))
        assert GlossaryLinker(term_index).link(tree, "src/content/docs/meta/glossary.mdx") == 0
        assert find_links(tree) == []

    def test_glossary_page_detection(self, term_index):
        linker = GlossaryLinker(term_index)
        assert linker.is_glossary_page("src/content/docs/en/meta/glossary.mdx")
        assert linker.is_glossary_page(r"src\content\docs\meta\glossary\index.mdx")
        assert not linker.is_glossary_page("/tmp/glossary-work/docs/bylaws/07-pool.mdx")
        assert not linker.is_glossary_page(None)

    def test_headings_and_existing_links_skipped(self, term_index):
        tree = root(
            heading(2, "勞工老闆"),
            paragraph(link("/elsewhere", "勞工老闆")),
            paragraph("勞工老闆"),
        )
        assert GlossaryLinker(term_index).link(tree, ZH_DOC) == 1
        assert tree.children[2].children[0].kind is NodeKind.LINK

    def test_no_path_uses_default_locale(self, term_index):
        tree = root(paragraph("公司池"))
        assert GlossaryLinker(term_index).link(tree) == 1


class TestRouting:

    def test_custom_routing(self):
        index = TermIndex.from_mapping({"pool": {"ja": "プール", "en": "pool"}})
        routing = LocaleRouting(default_locale="en", prefixed_locales=("ja",))
        linker = GlossaryLinker(index, routing)
        tree = root(paragraph("共有プール"))
        linker.link(tree, "src/content/docs/ja/guide.mdx")
        assert _links(tree) == [("/ja/meta/glossary/#pool", "プール")]

    def test_rules_built_once_per_locale(self, term_index):
        linker = GlossaryLinker(term_index)
        assert linker.rules_for("en") is linker.rules_for("en")
        assert len(linker.rules_for("en")) == 4
        assert len(linker.rules_for("zh")) == 3
