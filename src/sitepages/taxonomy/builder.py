"""Taxonomy page generation.

Collects taxonomy terms from page front matter and creates the listing
and per-term pages Hugo renders for them.
"""

from __future__ import annotations

from collections.abc import Iterable

from sitepages.pages.page import Page, Pages, PageType


def _terms_of(page: Page, plural: str) -> list[str]:
    values = page.front_matter.get(plural, [])
    if isinstance(values, str):
        return [values]
    if not isinstance(values, list):
        return []
    return [str(v) for v in values if v is not None and str(v)]


def collect_terms(
    pages: Iterable[Page],
    plural: str,
    lang: str,
) -> list[str]:
    """Collect the terms used for one taxonomy, in first-seen order.

    Only published regular pages in ``lang`` contribute.
    """
    terms: list[str] = []
    seen: set[str] = set()
    for page in pages:
        if page.page_type is not PageType.PAGE or page.draft or page.lang != lang:
            continue
        for term in _terms_of(page, plural):
            if term not in seen:
                seen.add(term)
                terms.append(term)
    return terms


def taxonomy_file_path(plural: str, lang: str, term: str | None = None) -> str:
    """Virtual file path for a generated taxonomy page, e.g. /tags/go/_index.en.md.

    The leading slash keeps it apart from content-relative file paths,
    which never start with one.
    """
    if term is None:
        return f"/{plural}/_index.{lang}.md"
    return f"/{plural}/{term}/_index.{lang}.md"


def build_taxonomy_pages(
    pages: Iterable[Page],
    taxonomies: dict[str, str],
    lang: str,
) -> Pages:
    """Create taxonomy pages for one language.

    For each taxonomy with at least one term this yields the term listing
    page (``/tags/``) followed by one page per term (``/tags/go/``).

    Args:
        pages: Source pages to read terms from
        taxonomies: Singular to plural taxonomy names, e.g. {"tag": "tags"}
        lang: Language code of the pages to build

    Returns:
        Generated pages
    """
    pages = list(pages)
    generated = Pages()

    for plural in taxonomies.values():
        terms = collect_terms(pages, plural, lang)
        if not terms:
            continue

        generated.append(
            Page(
                page_type=PageType.TAXONOMY_TERM,
                sections=[plural],
                file_path=taxonomy_file_path(plural, lang),
                title=plural.capitalize(),
                lang=lang,
                slug=plural,
            )
        )
        for term in terms:
            generated.append(
                Page(
                    page_type=PageType.TAXONOMY,
                    sections=[plural, term],
                    file_path=taxonomy_file_path(plural, lang, term),
                    title=term,
                    lang=lang,
                    slug=term,
                )
            )

    return generated
