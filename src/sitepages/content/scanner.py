"""
Hugo content scanner.

Walks the content directory and turns each markdown file into a
classified Page: home, section or regular page.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console

from sitepages.core.config import SiteConfig, get_paths, load_site_config
from sitepages.pages.page import Page, Pages, PageType

console = Console()
logger = logging.getLogger(__name__)

BRANCH_INDEX = "_index"
LEAF_INDEX = "index"


class ContentError(ValueError):
    """A content file could not be read as a page."""


class ContentScanner:
    """Scans a Hugo content directory into pages."""

    def __init__(self, site_root: Path | None = None, config: SiteConfig | None = None):
        """Initialize scanner.

        Args:
            site_root: Hugo site root directory (auto-detected if not provided)
            config: Site settings (read from the site root if not provided)
        """
        if config is None:
            config = load_site_config(site_root)
        paths = get_paths(site_root, config)
        self.site_root = paths.root
        self.content_dir = paths.content
        self.config = config

    def scan(self) -> Pages:
        """Scan every content file, drafts included.

        Returns:
            Pages in sorted file order
        """
        pages = Pages()
        if not self.content_dir.is_dir():
            logger.debug("No content directory at %s", self.content_dir)
            return pages

        for path in self._iter_content_files():
            try:
                pages.append(self._parse_file(path))
            except ContentError as e:
                console.print(f"[yellow]Skipping {path}: {e}[/yellow]")
                logger.debug("Skipped %s", path, exc_info=True)
        return pages

    def scan_file(self, path: str | Path) -> Page | None:
        """Scan a single content file.

        Applies the same file filters as scan(), so a file scan() would
        skip is never returned here.

        Args:
            path: File path, absolute or relative to the content directory

        Returns:
            Page, or None if the file is missing, outside the content
            directory, not a content file, or cannot be parsed
        """
        path = Path(path)
        if not path.is_absolute():
            path = self.content_dir / path
        if not self._is_content_file(path):
            return None
        try:
            rel_path = path.resolve().relative_to(self.content_dir.resolve())
        except ValueError:
            return None
        try:
            return self._parse_file(self.content_dir / rel_path)
        except ContentError:
            logger.debug("Could not parse %s", path, exc_info=True)
            return None

    @staticmethod
    def _is_content_file(path: Path) -> bool:
        """True for regular, non-hidden markdown files."""
        if path.suffix != ".md" or path.name.startswith("."):
            return False
        # Skip symlinks to prevent traversal outside content directory
        if path.is_symlink():
            return False
        return path.is_file()

    def _iter_content_files(self) -> Iterator[Path]:
        for path in sorted(self.content_dir.rglob("*.md")):
            if self._is_content_file(path):
                yield path

    def _parse_file(self, path: Path) -> Page:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContentError(str(e)) from e

        front_matter = self._split_front_matter(content)
        rel_path = path.relative_to(self.content_dir)
        base_name, lang = self._split_language(path.name)
        dir_parts = list(rel_path.parent.parts)

        if base_name == BRANCH_INDEX:
            page_type = PageType.HOME if not dir_parts else PageType.SECTION
            sections = dir_parts
            slug = dir_parts[-1] if dir_parts else ""
        elif base_name == LEAF_INDEX and dir_parts:
            page_type = PageType.PAGE
            sections = dir_parts[:-1]
            slug = dir_parts[-1]
        else:
            page_type = PageType.PAGE
            sections = dir_parts
            slug = base_name

        slug = str(front_matter.get("slug") or slug)
        title = front_matter.get("title")
        if not title:
            title = self.config.title if page_type is PageType.HOME else slug

        return Page(
            page_type=page_type,
            sections=sections,
            file_path=rel_path.as_posix(),
            title=str(title),
            lang=lang,
            draft=bool(front_matter.get("draft", False)),
            slug=slug,
            front_matter=front_matter,
        )

    def _split_language(self, filename: str) -> tuple[str, str]:
        """Split ``name.fr.md`` into ``("name", "fr")`` for configured languages."""
        stem = filename[: -len(".md")]
        name, dot, suffix = stem.rpartition(".")
        if dot and name and suffix in self.config.languages:
            return name, suffix
        return stem, self.config.default_language

    def _split_front_matter(self, content: str) -> dict[str, Any]:
        """Parse the YAML front matter block, if the file has one."""
        if not content.startswith("---"):
            return {}

        parts = content.split("---", 2)
        if len(parts) < 3:
            return {}

        try:
            loaded = yaml.safe_load(parts[1])
        except yaml.YAMLError as e:
            raise ContentError(f"YAML error: {e}") from e
        return loaded if isinstance(loaded, dict) else {}
