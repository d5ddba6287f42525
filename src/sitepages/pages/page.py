"""
Page model for the site index.

A Page is the metadata of one content item: its kind, where it sits in
the section tree, and the content file it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PageType(Enum):
    """Kind of a page, using Hugo's kind names."""

    PAGE = "page"
    HOME = "home"
    SECTION = "section"
    TAXONOMY = "taxonomy"
    TAXONOMY_TERM = "taxonomyTerm"
    RSS = "RSS"
    SITEMAP = "sitemap"
    ROBOTS_TXT = "robotsTXT"
    NOT_FOUND = "404"
    UNKNOWN = ""

    @property
    def is_node(self) -> bool:
        """True for list-like kinds (everything except regular pages)."""
        return self is not PageType.PAGE

    @classmethod
    def parse(cls, name: str) -> PageType:
        """Resolve a kind from its value or member name, ignoring case.

        Raises:
            ValueError: If name matches no kind.
        """
        wanted = name.strip().lower()
        if wanted:
            for kind in cls:
                if wanted in (kind.value.lower(), kind.name.lower()):
                    return kind
        raise ValueError(f"Unknown page type: {name!r}")


@dataclass
class Page:
    """A single page known to the site index."""

    page_type: PageType = PageType.UNKNOWN
    sections: list[str] = field(default_factory=list)
    file_path: str = ""
    title: str = ""
    lang: str = "en"
    draft: bool = False
    slug: str = ""
    front_matter: dict[str, Any] = field(default_factory=dict)

    @property
    def section(self) -> str:
        return self.sections[0] if self.sections else ""

    @property
    def is_node(self) -> bool:
        return self.page_type.is_node

    @property
    def url_path(self) -> str:
        """Site-relative URL path, e.g. /post/my-post/ or /post/."""
        parts = list(self.sections)
        if self.page_type is PageType.PAGE and self.slug:
            parts.append(self.slug)
        if not parts:
            return "/"
        return "/" + "/".join(parts) + "/"

    def to_dict(self) -> dict[str, Any]:
        """Summary used for JSON output."""
        return {
            "type": self.page_type.value,
            "sections": list(self.sections),
            "file_path": self.file_path,
            "title": self.title,
            "lang": self.lang,
            "draft": self.draft,
            "url": self.url_path,
        }


class Pages(list):
    """Ordered sequence of pages."""

    def find_page_pos_by_file_path(self, path: str) -> int:
        """Return the position of the first page with this file path, or -1."""
        for i, page in enumerate(self):
            if page.file_path == path:
                return i
        return -1

    def find_page_pos(self, page: Page) -> int:
        """Return the position of the first page that is page, or shares its file path.

        Returns -1 when nothing matches.
        """
        for i, candidate in enumerate(self):
            if candidate is page or candidate.file_path == page.file_path:
                return i
        return -1
