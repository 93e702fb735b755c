# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Shared fixtures: a post factory, a small mixed dataset, and a settings
# reset so each test sees a clean environment.
# =============================================================================

import pytest

from app.blog.schemas import Category, ContentSnapshot, Post, SiteSettings, Tag
from app.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from the developer's environment and the settings cache."""
    for name in (
        "WORDPRESS_GRAPHQL_URL",
        "BLOG_PAGE_SIZE",
        "BLOG_MAX_POSTS",
        "HTTP_TIMEOUT_SECONDS",
        "BLOG_RESET_PAGE_ON_FILTER",
        "BLOG_ESCAPE_MARKUP",
        "SAMPLE_DATA_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_post():
    """Build a post with sensible defaults."""

    def _make(n, title=None, excerpt="", categories=(), tags=(), image=None):
        return Post(
            id=f"post-{n}",
            title=title if title is not None else f"Post {n}",
            excerpt=excerpt,
            slug=f"post-{n}",
            category_slugs=frozenset(categories),
            tag_slugs=frozenset(tags),
            featured_image_url=image,
        )

    return _make


@pytest.fixture
def fifteen_posts(make_post):
    return [make_post(i) for i in range(1, 16)]


@pytest.fixture
def mixed_posts(make_post):
    return [
        make_post(1, title="Breaking News", categories=["news"], tags=["featured"]),
        make_post(2, title="Old news", categories=["news"]),
        make_post(3, title="How to bake", excerpt="<p>Flour, water</p>", categories=["recipes"], tags=["featured"]),
        make_post(4, title="Weekly roundup", excerpt="All the NEWS you missed", tags=["featured"]),
        make_post(5, title="Opinion piece", categories=["news", "opinion"], tags=["featured", "long-read"]),
    ]


@pytest.fixture
def snapshot(mixed_posts):
    return ContentSnapshot(
        site=SiteSettings(title="Test Blog", description="Just testing"),
        posts=mixed_posts,
        categories=[
            Category(id="c1", name="News", slug="news"),
            Category(id="c2", name="Recipes", slug="recipes"),
        ],
        tags=[Tag(id="t1", name="Featured", slug="featured")],
    )
