"""
Configuration and path management.

Provides site root detection and the site settings the page index needs.

Resolution order for site root:
  1. SITEPAGES_SITE_ROOT environment variable (highest priority)
  2. Walk up from cwd looking for a Hugo site config file
  3. Global config file (~/.config/sitepages/config.yaml) site_root key
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Site config files recognised as the marker of a Hugo site root
SITE_CONFIG_NAMES = ("hugo.yaml", "hugo.yml", "config.yaml", "config.yml")

DEFAULT_TAXONOMIES = {"tag": "tags", "category": "categories"}


@dataclass(frozen=True)
class SitePaths:
    """Standard paths for the Hugo site."""

    root: Path
    content: Path
    config_file: Path | None


@dataclass(frozen=True)
class SiteConfig:
    """Site settings read from the Hugo site config."""

    title: str = ""
    content_dir: str = "content"
    default_language: str = "en"
    languages: tuple[str, ...] = ("en",)
    build_drafts: bool = False
    taxonomies: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TAXONOMIES))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SiteConfig:
        """Build settings from a parsed site config mapping.

        Unknown keys are ignored and malformed values fall back to defaults.
        """
        default_language = str(data.get("defaultContentLanguage") or "en")

        languages = [default_language]
        raw_languages = data.get("languages")
        if isinstance(raw_languages, dict):
            for code in raw_languages:
                if str(code) not in languages:
                    languages.append(str(code))

        taxonomies = data.get("taxonomies")
        if not isinstance(taxonomies, dict):
            taxonomies = DEFAULT_TAXONOMIES

        return cls(
            title=str(data.get("title") or ""),
            content_dir=str(data.get("contentDir") or "content"),
            default_language=default_language,
            languages=tuple(languages),
            build_drafts=bool(data.get("buildDrafts", False)),
            taxonomies={str(k): str(v) for k, v in taxonomies.items()},
        )


def get_global_config_path() -> Path:
    """Return the path to the global sitepages config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/sitepages/config.yaml.

    Returns:
        Path to global config file (may not exist).
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "sitepages" / "config.yaml"


def _load_yaml_mapping(path: Path) -> dict:
    """Read a YAML file that should hold a mapping.

    Returns:
        Parsed dict, or empty dict if the file is missing or invalid.
    """
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        logger.debug("Could not read config file %s", path, exc_info=True)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def load_global_config() -> dict:
    """Load the global sitepages configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    return _load_yaml_mapping(get_global_config_path())


def find_site_config_file(directory: Path) -> Path | None:
    """Return the first site config file present in directory."""
    for name in SITE_CONFIG_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def _walk_up_for_site(start_path: Path) -> Path | None:
    """Walk up directory tree looking for a site config file.

    Args:
        start_path: Starting path for search.

    Returns:
        Directory containing the site config, or None if not found.
    """
    current = start_path.resolve()
    while True:
        if find_site_config_file(current) is not None:
            return current
        if current == current.parent:
            return None
        current = current.parent


def find_site_root(start_path: Path | None = None) -> Path:
    """Find the Hugo site root using 3-tier resolution.

    Resolution order:
      1. SITEPAGES_SITE_ROOT environment variable (highest priority)
      2. Walk up from start_path (or cwd) looking for a site config file
      3. Global config file site_root key

    Args:
        start_path: Starting path for the walk (defaults to cwd)

    Returns:
        Path to site root

    Raises:
        FileNotFoundError: If no site root is found by any method
    """
    env_root = os.environ.get("SITEPAGES_SITE_ROOT")
    if env_root:
        env_path = Path(env_root).resolve()
        if find_site_config_file(env_path) is not None:
            return env_path
        raise FileNotFoundError(
            f"SITEPAGES_SITE_ROOT={env_root} does not contain a site config file."
        )

    if start_path is None:
        start_path = Path.cwd()
    result = _walk_up_for_site(Path(start_path))
    if result is not None:
        return result

    site_root_str = load_global_config().get("site_root")
    if site_root_str:
        global_path = Path(site_root_str).expanduser().resolve()
        if find_site_config_file(global_path) is not None:
            return global_path
        raise FileNotFoundError(
            f"Global config site_root={site_root_str} does not contain a site config file."
        )

    raise FileNotFoundError(
        f"Could not find a Hugo site config ({', '.join(SITE_CONFIG_NAMES)}) "
        f"starting from {start_path}. Set SITEPAGES_SITE_ROOT, pass --site-root, "
        f"or configure site_root in {get_global_config_path()}."
    )


@lru_cache(maxsize=1)
def get_site_root() -> Path:
    """Get the cached site root path."""
    return find_site_root()


def get_paths(site_root: Path | None = None, config: SiteConfig | None = None) -> SitePaths:
    """Get the standard paths for the site.

    Args:
        site_root: Site root path (uses cached default if not provided)
        config: Site settings (loaded from the site root if not provided)

    Returns:
        SitePaths dataclass
    """
    if site_root is None:
        site_root = get_site_root()
    site_root = Path(site_root)
    if config is None:
        config = load_site_config(site_root)

    return SitePaths(
        root=site_root,
        content=site_root / config.content_dir,
        config_file=find_site_config_file(site_root),
    )


def load_site_config(site_root: Path | None = None) -> SiteConfig:
    """Load site settings from the site config file.

    Args:
        site_root: Site root path (uses cached default if not provided)

    Returns:
        SiteConfig, with defaults when the file is missing or invalid.
    """
    if site_root is None:
        site_root = get_site_root()
    config_file = find_site_config_file(Path(site_root))
    if config_file is None:
        return SiteConfig()
    return SiteConfig.from_dict(_load_yaml_mapping(config_file))
