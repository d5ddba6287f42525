"""Shared test fixtures for sitepages."""

import pytest
import yaml

from sitepages.pages.page import Page, PageType


@pytest.fixture
def site_config_data():
    """Site config written by mock_site_root."""
    return {
        "title": "Test Site",
        "defaultContentLanguage": "en",
        "languages": {"en": {"weight": 1}, "fr": {"weight": 2}},
        "taxonomies": {"tag": "tags", "category": "categories"},
    }


@pytest.fixture
def mock_site_root(tmp_path, monkeypatch, site_config_data):
    """Create a mock Hugo site with a hugo.yaml and content directory."""
    (tmp_path / "hugo.yaml").write_text(yaml.dump(site_config_data), encoding="utf-8")
    (tmp_path / "content").mkdir()

    # Mock get_site_root to return our tmp_path
    from sitepages.core import config
    # Clear the lru_cache first
    config.get_site_root.cache_clear()
    monkeypatch.delenv("SITEPAGES_SITE_ROOT", raising=False)
    monkeypatch.setattr(config, "get_site_root", lambda: tmp_path)

    return tmp_path


@pytest.fixture
def create_content_file(mock_site_root):
    """Factory fixture for creating markdown content files with front matter."""
    def _create(
        rel_path: str = "post/test-post.md",
        title: str | None = "Test Post",
        body: str = "Test content.",
        extra_fm: dict | None = None,
        draft: bool = False,
    ):
        path = mock_site_root / "content" / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)

        fm = {"date": "2024-01-01", "draft": draft}
        if title is not None:
            fm["title"] = title
        if extra_fm:
            fm.update(extra_fm)

        fm_str = yaml.dump(fm, default_flow_style=False)
        path.write_text(f"---\n{fm_str}---\n\n{body}\n", encoding="utf-8")
        return path

    return _create


@pytest.fixture
def sample_site(mock_site_root, create_content_file):
    """A small bilingual blog."""
    create_content_file("_index.md", title="Home")
    create_content_file("_index.fr.md", title="Accueil")
    create_content_file("blog/_index.md", title="Blog")
    create_content_file("blog/first.md", title="First", extra_fm={"tags": ["go", "hugo"]})
    create_content_file("blog/second.md", title="Second", extra_fm={"tags": ["go"]})
    create_content_file("blog/second.fr.md", title="Deuxieme", extra_fm={"tags": ["go"]})
    create_content_file("blog/wip.md", title="Wip", draft=True, extra_fm={"tags": ["secret"]})
    create_content_file("docs/_index.md", title="Docs")
    create_content_file("docs/intro/index.md", title="Intro", extra_fm={"categories": "guides"})
    return mock_site_root


@pytest.fixture
def make_page():
    """Factory for Page objects."""
    def _make(
        page_type: PageType = PageType.PAGE,
        sections: list[str] | None = None,
        file_path: str = "",
        title: str = "",
        **kwargs,
    ) -> Page:
        return Page(
            page_type=page_type,
            sections=list(sections or []),
            file_path=file_path,
            title=title or file_path,
            **kwargs,
        )

    return _make
