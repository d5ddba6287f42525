"""
Site builder.

Drives a PageCollections through a build: discover content into the raw
list, assemble the per-language working set, refresh the caches, and
reload single files when they change.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sitepages.content.scanner import ContentScanner
from sitepages.core.config import SiteConfig, get_paths, load_site_config
from sitepages.pages.collections import PageCollections
from sitepages.pages.page import Page, Pages, PageType
from sitepages.taxonomy.builder import build_taxonomy_pages

logger = logging.getLogger(__name__)


class SiteBuilder:
    """Builds the page index for a Hugo site."""

    def __init__(
        self,
        site_root: Path | None = None,
        config: SiteConfig | None = None,
        include_drafts: bool | None = None,
    ):
        if config is None:
            config = load_site_config(site_root)
        self.config = config
        self.paths = get_paths(site_root, config)
        self.scanner = ContentScanner(self.paths.root, config)
        self.include_drafts = config.build_drafts if include_drafts is None else include_drafts
        self.language = config.default_language
        self.collections = PageCollections()
        self._taxonomy_pages = Pages()

    def build(self, language: str | None = None) -> PageCollections:
        """Discover all content and assemble the given language."""
        self.discover()
        self.assemble(language)
        return self.collections

    def discover(self) -> None:
        """Add every content page to the raw list."""
        count = 0
        for page in self.scanner.scan():
            self.collections.add_page(page)
            count += 1
        logger.debug("Discovered %d pages under %s", count, self.paths.content)

    def assemble(self, language: str | None = None) -> None:
        """Rebuild the filtered page lists and refresh the caches.

        Args:
            language: Active language (defaults to the site default)
        """
        if language is None:
            language = self.config.default_language
        self.language = language

        self._sync_taxonomy_pages()

        raw = self.collections.raw_all_pages
        if self.include_drafts:
            all_pages = Pages(raw)
        else:
            all_pages = Pages(p for p in raw if not p.draft)

        self.collections.all_pages = all_pages
        self.collections.pages = Pages(p for p in all_pages if p.lang == language)
        self.collections.refresh_page_caches()

    def reload(self, path: str | Path) -> Page | None:
        """Pick up a changed, added or deleted content file.

        Args:
            path: File path, absolute or relative to the content directory

        Returns:
            The rescanned page, or None if the file is gone
        """
        page = self.scanner.scan_file(path)
        if page is not None:
            self.collections.replace_page(page)
        else:
            file_path = self._relative_file_path(path)
            if file_path is not None:
                self.collections.remove_page_by_path(file_path)
        self.assemble(self.language)
        return page

    def _relative_file_path(self, path: str | Path) -> str | None:
        """Content-relative posix path, or None for paths outside the content directory."""
        path = Path(path)
        if not path.is_absolute():
            return path.as_posix()
        try:
            return path.resolve().relative_to(self.paths.content.resolve()).as_posix()
        except ValueError:
            return None

    def _sync_taxonomy_pages(self) -> None:
        """Replace previously generated taxonomy pages with fresh ones."""
        # Identity only: a content file may share a generated page's path
        stale = self._taxonomy_pages
        raw = self.collections.raw_all_pages
        raw[:] = [p for p in raw if not any(p is g for g in stale)]

        content = self.collections.find_raw_all_pages_by_type(PageType.PAGE)
        generated = Pages()
        for lang in self.config.languages:
            generated.extend(build_taxonomy_pages(content, self.config.taxonomies, lang))

        for page in generated:
            self.collections.add_page(page)
        self._taxonomy_pages = generated
