"""
Page index for a Hugo site.

Provides:
- The page model (PageType, Page, Pages)
- PageCollections, the typed page index and its caches

SiteBuilder lives in sitepages.pages.builder, which depends on the
content scanner and is not imported here.
"""

from sitepages.pages.collections import PageCollections, UnknownPageTypeError
from sitepages.pages.page import Page, Pages, PageType

__all__ = [
    "Page",
    "Pages",
    "PageType",
    "PageCollections",
    "UnknownPageTypeError",
]
