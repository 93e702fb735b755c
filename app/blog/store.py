"""
Content store for the blog index.

``load_content()`` produces the ``ContentSnapshot`` for one page view.
When a WPGraphQL endpoint is configured it is queried once; if it is
not configured, or the request fails, the bundled sample dataset is
used instead so the index still renders.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from ..config import get_settings
from .schemas import Category, ContentSnapshot, Post, SiteSettings, Tag
from .wordpress_service import ContentSourceError, fetch_index_content


logger = logging.getLogger(__name__)


def _as_slug_set(raw) -> frozenset:
    if not isinstance(raw, list):
        return frozenset()
    return frozenset(str(s) for s in raw if s)


def load_sample_content(path: Optional[Path] = None) -> ContentSnapshot:
    """Load the local sample dataset.

    Parameters
    ----------
    path : Optional[Path]
        JSON file to read. Defaults to ``SAMPLE_DATA_FILE`` from settings.

    Returns
    -------
    ContentSnapshot
        The parsed dataset. A missing or malformed file yields an empty
        snapshot; individual malformed entries are skipped.
    """
    path = Path(path) if path is not None else get_settings().SAMPLE_DATA_FILE
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Sample data %s unavailable: %s", path, exc)
        return ContentSnapshot()
    if not isinstance(raw, dict):
        logger.warning("Sample data %s is not a JSON object", path)
        return ContentSnapshot()

    site = raw.get("site") if isinstance(raw.get("site"), dict) else {}
    posts: List[Post] = []
    for entry in raw.get("posts") or []:
        if not isinstance(entry, dict) or not entry.get("slug"):
            continue
        posts.append(
            Post(
                id=str(entry.get("id") or entry["slug"]),
                title=str(entry.get("title") or ""),
                excerpt=str(entry.get("excerpt") or ""),
                slug=str(entry["slug"]),
                category_slugs=_as_slug_set(entry.get("categories")),
                tag_slugs=_as_slug_set(entry.get("tags")),
                featured_image_url=entry.get("featured_image_url") or None,
            )
        )
    categories = [
        Category(id=str(c.get("id") or c["slug"]), name=str(c.get("name") or c["slug"]), slug=str(c["slug"]))
        for c in raw.get("categories") or []
        if isinstance(c, dict) and c.get("slug")
    ]
    tags = [
        Tag(id=str(t.get("id") or t["slug"]), name=str(t.get("name") or t["slug"]), slug=str(t["slug"]))
        for t in raw.get("tags") or []
        if isinstance(t, dict) and t.get("slug")
    ]
    return ContentSnapshot(
        site=SiteSettings(
            title=str(site.get("title") or ""),
            description=str(site.get("description") or ""),
        ),
        posts=posts,
        categories=categories,
        tags=tags,
    )


def load_content() -> ContentSnapshot:
    """Return the snapshot for one page view (remote API, else sample data)."""
    settings = get_settings()
    if settings.content_api_enabled:
        try:
            return fetch_index_content(
                settings.WORDPRESS_GRAPHQL_URL,
                max_posts=settings.BLOG_MAX_POSTS,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        except ContentSourceError as exc:
            logger.error("Content API failed (%s); falling back to sample data", exc)
        snapshot = load_sample_content()
        logger.warning("Serving %d posts from local sample data", len(snapshot.posts))
        return snapshot
    snapshot = load_sample_content()
    logger.info(
        "No WORDPRESS_GRAPHQL_URL configured; serving %d sample posts", len(snapshot.posts)
    )
    return snapshot


def find_post(snapshot: ContentSnapshot, slug: str) -> Optional[Post]:
    for post in snapshot.posts:
        if post.slug == slug:
            return post
    return None
