"""
Page collections for a site.

PageCollections keeps the raw master list of pages together with the
filtered views a build works from. Mutations only touch the raw list;
the builder rebuilds ``pages``/``all_pages`` and then calls
``refresh_page_caches`` to bring the index and regular caches in line.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sitepages.pages.page import Page, Pages, PageType

logger = logging.getLogger(__name__)


class UnknownPageTypeError(BaseException):
    """A page of unknown type reached the working set.

    This is a defect in page classification, not bad input. It derives
    from BaseException so ordinary ``except Exception`` handlers let it
    through and the process stops.
    """

    def __init__(self, page: Page):
        self.page = page
        super().__init__(f"Got unknown type {page.title}")


class PageCollections:
    """The page collections for a site."""

    def __init__(self) -> None:
        # Pages of all types, current language only
        self.pages = Pages()
        # Pages of all types in all languages, including the current one
        self.all_pages = Pages()
        # Home, section, taxonomy etc. for the current language
        self.index_pages = Pages()
        # Regular pages for the current language
        self.regular_pages = Pages()
        # Absolutely all pages, drafts included
        self.raw_all_pages = Pages()

    @classmethod
    def from_pages(cls, pages: Iterable[Page]) -> PageCollections:
        """Create collections seeded with a raw page list."""
        collections = cls()
        collections.raw_all_pages = Pages(pages)
        return collections

    def __len__(self) -> int:
        return len(self.pages)

    def counts(self) -> dict[str, int]:
        return {
            "raw": len(self.raw_all_pages),
            "all": len(self.pages),
            "all_languages": len(self.all_pages),
            "index": len(self.index_pages),
            "regular": len(self.regular_pages),
        }

    def refresh_page_caches(self) -> None:
        """Rebuild the index and regular caches from ``pages``.

        Raises:
            UnknownPageTypeError: If any page in ``pages`` has no known type.
        """
        self.index_pages = self.find_pages_by_type_not_in(PageType.PAGE, self.pages)
        self.regular_pages = self.find_pages_by_type_in(PageType.PAGE, self.pages)
        logger.debug(
            "Refreshed page caches: %d index, %d regular",
            len(self.index_pages),
            len(self.regular_pages),
        )

        for page in self.pages:
            if page.page_type is PageType.UNKNOWN:
                logger.critical("Got unknown type %s (%s)", page.title, page.file_path)
                raise UnknownPageTypeError(page)

    # Finders

    @staticmethod
    def find_pages_by_type_in(page_type: PageType, in_pages: Iterable[Page]) -> Pages:
        return Pages(p for p in in_pages if p.page_type is page_type)

    @staticmethod
    def find_pages_by_type_not_in(page_type: PageType, in_pages: Iterable[Page]) -> Pages:
        return Pages(p for p in in_pages if p.page_type is not page_type)

    def find_pages_by_type(self, page_type: PageType) -> Pages:
        return self.find_pages_by_type_in(page_type, self.pages)

    def find_all_pages_by_type(self, page_type: PageType) -> Pages:
        return self.find_pages_by_type_in(page_type, self.pages)

    def find_index_nodes_by_type(self, page_type: PageType) -> Pages:
        return self.find_pages_by_type_in(page_type, self.index_pages)

    def find_raw_all_pages_by_type(self, page_type: PageType) -> Pages:
        return self.find_pages_by_type_in(page_type, self.raw_all_pages)

    def get_page(self, page_type: PageType, *path: str) -> Page | None:
        """Find a single page of the given type by its section path.

        With no path, the page is returned only when it is the sole page
        of that type. Otherwise the first page whose leading sections equal
        ``path`` wins.

        Args:
            page_type: Kind of page to look for
            *path: Leading section names, e.g. ``"blog", "2024"``

        Returns:
            The matching page, or None
        """
        pages = self.find_pages_by_type_in(page_type, self.pages)
        if not pages:
            return None

        if not path and len(pages) == 1:
            return pages[0]

        for page in pages:
            match = False
            for i, segment in enumerate(path):
                if len(page.sections) > i and segment == page.sections[i]:
                    match = True
                else:
                    match = False
                    break
            if match:
                return page

        return None

    # Mutations (raw list only)

    def add_page(self, page: Page) -> None:
        self.raw_all_pages.append(page)
        logger.debug("Added page %s", page.file_path)

    def remove_page_by_path(self, path: str) -> None:
        """Remove the first raw page with this file path, if any."""
        i = self.raw_all_pages.find_page_pos_by_file_path(path)
        if i >= 0:
            del self.raw_all_pages[i]
            logger.debug("Removed page %s", path)

    def remove_page(self, page: Page) -> None:
        """Remove page (or the first raw page sharing its file path), if present."""
        i = self.raw_all_pages.find_page_pos(page)
        if i >= 0:
            del self.raw_all_pages[i]
            logger.debug("Removed page %s", page.file_path)

    def replace_page(self, page: Page) -> None:
        """Swap in page for the existing page at its file path.

        The page is appended, so it ends up last in the raw list.
        """
        self.remove_page(page)
        self.add_page(page)
