"""CLI commands for querying the page index."""

from __future__ import annotations

import json as json_module
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

from sitepages.pages.page import PageType

if TYPE_CHECKING:
    from sitepages.pages.collections import PageCollections
    from sitepages.pages.page import Page

console = Console()


class PageTypeParam(click.ParamType):
    """Page kind given by its Hugo name (page, home, section, ...)."""

    name = "kind"

    def convert(self, value, param, ctx):
        if isinstance(value, PageType):
            return value
        try:
            return PageType.parse(value)
        except ValueError:
            choices = ", ".join(k.value for k in PageType if k is not PageType.UNKNOWN)
            self.fail(f"{value!r} is not a page type (choose from {choices})", param, ctx)


PAGE_TYPE = PageTypeParam()


def _build(ctx, language: str | None, include_drafts: bool | None = None) -> PageCollections:
    """Build the index for the site in the command context."""
    from sitepages.pages.builder import SiteBuilder

    site_root = ctx.site_root if ctx else None
    try:
        builder = SiteBuilder(site_root=site_root, include_drafts=include_drafts)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e
    return builder.build(language)


def _page_table(title: str, pages: list[Page]) -> Table:
    table = Table(title=title)
    table.add_column("Kind", style="cyan")
    table.add_column("Path")
    table.add_column("Title", style="bold")
    table.add_column("Lang", style="dim")
    for page in pages:
        table.add_row(
            page.page_type.value,
            page.url_path,
            page.title,
            page.lang,
        )
    return table


@click.group(name="pages")
def pages() -> None:
    """Query the site's page collections."""
    pass


@pages.command(name="list")
@click.option("--type", "page_type", type=PAGE_TYPE, help="Only pages of this kind")
@click.option("--lang", help="Active language (default: site default)")
@click.option("--raw", is_flag=True, help="List the raw collection (all languages, drafts)")
@click.option("--include-drafts", is_flag=True, help="Include drafts")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_cmd(
    ctx,
    page_type: PageType | None,
    lang: str | None,
    raw: bool,
    include_drafts: bool,
    as_json: bool,
) -> None:
    """List pages in the index.

    \b
    Examples:
        sitepages pages list
        sitepages pages list --type section
        sitepages pages list --lang fr --include-drafts
    """
    collections = _build(ctx, lang, include_drafts=include_drafts or None)

    source = collections.raw_all_pages if raw else collections.pages
    if page_type is not None:
        result = collections.find_pages_by_type_in(page_type, source)
    else:
        result = source

    if as_json:
        click.echo(json_module.dumps([p.to_dict() for p in result], indent=2))
        return

    if not result:
        console.print("[yellow]No pages found.[/yellow]")
        return

    console.print(_page_table(f"Pages ({len(result)})", result))


@pages.command(name="get")
@click.argument("page_type", type=PAGE_TYPE)
@click.argument("segments", nargs=-1)
@click.option("--lang", help="Active language (default: site default)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def get_cmd(ctx, page_type: PageType, segments: tuple[str, ...], lang: str | None, as_json: bool) -> None:
    """Look up one page by kind and leading sections.

    \b
    Examples:
        sitepages pages get home
        sitepages pages get section blog
        sitepages pages get taxonomy tags go
    """
    collections = _build(ctx, lang)
    page = collections.get_page(page_type, *segments)

    if page is None:
        path = "/".join(segments) or "(no path)"
        console.print(f"[yellow]No {page_type.value} page found for {path}[/yellow]")
        raise SystemExit(1)

    if as_json:
        click.echo(json_module.dumps(page.to_dict(), indent=2))
        return

    console.print(f"[bold]{page.title}[/bold]")
    console.print(f"  Kind: {page.page_type.value}")
    console.print(f"  Path: {page.url_path}")
    console.print(f"  File: {page.file_path}")
    console.print(f"  Lang: {page.lang}")
    if page.draft:
        console.print("  [yellow]Draft[/yellow]")


@pages.command(name="stats")
@click.option("--lang", help="Active language (default: site default)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def stats_cmd(ctx, lang: str | None, as_json: bool) -> None:
    """Show collection sizes and page counts by kind."""
    collections = _build(ctx, lang)

    by_type: dict[str, int] = {}
    for page in collections.pages:
        by_type[page.page_type.value] = by_type.get(page.page_type.value, 0) + 1

    if as_json:
        click.echo(
            json_module.dumps({**collections.counts(), "by_type": by_type}, indent=2)
        )
        return

    table = Table(title="Collections")
    table.add_column("Collection", style="cyan")
    table.add_column("Pages", justify="right")
    for name, count in collections.counts().items():
        table.add_row(name, str(count))
    console.print(table)

    table = Table(title="Pages by Kind")
    table.add_column("Kind", style="cyan")
    table.add_column("Count", justify="right")
    for kind, count in sorted(by_type.items(), key=lambda x: x[1], reverse=True):
        table.add_row(kind, str(count))
    console.print(table)
