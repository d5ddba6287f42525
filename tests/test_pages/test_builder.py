"""Tests for the SiteBuilder."""

from __future__ import annotations

import pytest

from sitepages.core.config import SiteConfig
from sitepages.pages.builder import SiteBuilder
from sitepages.pages.collections import UnknownPageTypeError
from sitepages.pages.page import PageType


def _titles(pages):
    return [p.title for p in pages]


class TestBuild:
    """Tests for build(), discover() and assemble()."""

    def test_raw_holds_everything(self, sample_site):
        collections = SiteBuilder().build()
        raw_files = {p.file_path for p in collections.raw_all_pages}

        assert "blog/wip.md" in raw_files
        assert "blog/second.fr.md" in raw_files
        assert "/tags/go/_index.en.md" in raw_files
        assert "/tags/go/_index.fr.md" in raw_files

    def test_pages_are_active_language_without_drafts(self, sample_site):
        collections = SiteBuilder().build()

        assert all(p.lang == "en" for p in collections.pages)
        assert all(not p.draft for p in collections.pages)
        assert "Wip" not in _titles(collections.pages)

    def test_all_pages_span_languages(self, sample_site):
        collections = SiteBuilder().build()
        langs = {p.lang for p in collections.all_pages}
        assert langs == {"en", "fr"}
        assert "Wip" not in _titles(collections.all_pages)

    def test_caches_partition_pages(self, sample_site):
        collections = SiteBuilder().build()

        assert _titles(collections.regular_pages) == ["First", "Second", "Intro"]
        assert len(collections.index_pages) + len(collections.regular_pages) == len(
            collections.pages
        )
        assert all(p.is_node for p in collections.index_pages)

    def test_lookups(self, sample_site):
        collections = SiteBuilder().build()

        assert collections.get_page(PageType.HOME).title == "Home"
        assert collections.get_page(PageType.SECTION, "docs").title == "Docs"
        assert collections.get_page(PageType.SECTION) is None
        assert collections.get_page(PageType.TAXONOMY, "tags", "hugo").title == "hugo"
        assert collections.get_page(PageType.TAXONOMY_TERM, "categories").title == "Categories"
        assert collections.get_page(PageType.TAXONOMY, "tags", "secret") is None

    def test_other_language(self, sample_site):
        collections = SiteBuilder().build("fr")

        assert collections.get_page(PageType.HOME).title == "Accueil"
        assert _titles(collections.regular_pages) == ["Deuxieme"]
        assert collections.get_page(PageType.TAXONOMY, "tags", "go").lang == "fr"

    def test_include_drafts(self, sample_site):
        collections = SiteBuilder(include_drafts=True).build()
        assert "Wip" in _titles(collections.regular_pages)

    def test_build_drafts_from_config(self, sample_site):
        config = SiteConfig(languages=("en", "fr"), build_drafts=True)
        collections = SiteBuilder(config=config).build()
        assert "Wip" in _titles(collections.pages)

    def test_reassemble_does_not_duplicate_taxonomy_pages(self, sample_site):
        builder = SiteBuilder()
        collections = builder.build()
        before = len(collections.raw_all_pages)

        builder.assemble()
        builder.assemble("fr")

        assert len(collections.raw_all_pages) == before
        assert builder.language == "fr"

    def test_content_section_shares_taxonomy_name(self, sample_site, create_content_file):
        create_content_file("tags/_index.en.md", title="All Tags")
        builder = SiteBuilder()
        collections = builder.build()
        builder.assemble()
        builder.reload("tags/_index.en.md")

        sections = [p for p in collections.raw_all_pages if p.file_path == "tags/_index.en.md"]
        assert _titles(sections) == ["All Tags"]
        assert sections[0].page_type is PageType.SECTION
        assert collections.get_page(PageType.SECTION, "tags").title == "All Tags"

        listings = collections.find_raw_all_pages_by_type(PageType.TAXONOMY_TERM)
        tag_listings = [p for p in listings if p.sections == ["tags"]]
        assert sorted(p.lang for p in tag_listings) == ["en", "fr"]

    def test_empty_site(self, mock_site_root):
        collections = SiteBuilder().build()
        assert collections.counts() == {
            "raw": 0,
            "all": 0,
            "all_languages": 0,
            "index": 0,
            "regular": 0,
        }


class TestReload:
    """Tests for reload()."""

    def test_changed_file_is_replaced_and_moves_last(self, sample_site, create_content_file):
        builder = SiteBuilder()
        collections = builder.build()
        create_content_file("blog/first.md", title="First Again", extra_fm={"tags": ["go"]})

        page = builder.reload("blog/first.md")

        assert page.title == "First Again"
        matching = [p for p in collections.raw_all_pages if p.file_path == "blog/first.md"]
        assert matching == [page]
        assert _titles(collections.regular_pages)[-1] == "First Again"
        # hugo tag no longer used
        assert collections.get_page(PageType.TAXONOMY, "tags", "hugo") is None

    def test_deleted_file_is_removed(self, sample_site):
        builder = SiteBuilder()
        collections = builder.build()
        target = sample_site / "content" / "blog" / "second.md"
        target.unlink()

        assert builder.reload(target) is None
        assert all(p.file_path != "blog/second.md" for p in collections.raw_all_pages)
        assert _titles(collections.regular_pages) == ["First", "Intro"]

    def test_new_file_is_added(self, sample_site, create_content_file):
        builder = SiteBuilder()
        collections = builder.build()
        create_content_file("docs/setup.md", title="Setup")

        builder.reload("docs/setup.md")

        assert collections.get_page(PageType.PAGE, "docs").title == "Intro"
        assert "Setup" in _titles(collections.regular_pages)

    def test_non_markdown_file_is_ignored(self, sample_site):
        notes = sample_site / "content" / "blog" / "notes.txt"
        notes.write_text("scratch\n", encoding="utf-8")
        builder = SiteBuilder()
        collections = builder.build()
        before = len(collections.raw_all_pages)

        assert builder.reload("blog/notes.txt") is None
        assert builder.reload(notes) is None
        assert len(collections.raw_all_pages) == before
        assert all(p.file_path != "blog/notes.txt" for p in collections.raw_all_pages)

    def test_deleted_file_through_symlinked_root(self, sample_site, tmp_path_factory):
        link_root = tmp_path_factory.mktemp("links") / "site"
        link_root.symlink_to(sample_site, target_is_directory=True)
        builder = SiteBuilder(site_root=link_root)
        collections = builder.build()
        target = sample_site / "content" / "blog" / "second.md"
        target.unlink()

        builder.reload(target)

        assert all(p.file_path != "blog/second.md" for p in collections.raw_all_pages)

    def test_reload_keeps_active_language(self, sample_site, create_content_file):
        builder = SiteBuilder()
        collections = builder.build("fr")
        create_content_file("blog/third.fr.md", title="Troisieme")

        builder.reload("blog/third.fr.md")

        assert _titles(collections.regular_pages) == ["Deuxieme", "Troisieme"]


def test_unknown_page_type_aborts_assemble(sample_site):
    builder = SiteBuilder()
    builder.discover()
    raw = builder.collections.raw_all_pages
    raw[raw.find_page_pos_by_file_path("blog/first.md")].page_type = PageType.UNKNOWN

    with pytest.raises(UnknownPageTypeError):
        builder.assemble()
