"""
Main CLI dispatcher for sitepages.

Usage:
    sitepages pages list [--type KIND] [--lang CODE] [--raw]
    sitepages pages get KIND [SEGMENT...]
    sitepages pages stats
"""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from sitepages import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, site_root: Path | None = None):
        self.verbose = verbose
        self.site_root = site_root
        self.console = console


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
    )


@click.group()
@click.version_option(version=__version__, prog_name="sitepages")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--site-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Hugo site root (default: auto-detect)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, site_root: Path | None) -> None:
    """Hugo site page index.

    Inspect the pages of a Hugo site by kind, section and language.
    """
    configure_logging(verbose)
    ctx.obj = Context(verbose=verbose, site_root=site_root)


# Import and register command groups (imports after main definition intentional)
from sitepages.pages.commands import pages  # noqa: E402

main.add_command(pages)


if __name__ == "__main__":
    main()
