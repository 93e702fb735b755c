"""Projection of posts and vocabularies into display fields."""

from __future__ import annotations

import html
from typing import Iterable, List, Union

from .schemas import Category, FilterOption, Post, PostCard, Tag


def to_post_card(post: Post, escape_markup: bool = False) -> PostCard:
    """Map a post to the fields the index card renders.

    Title and excerpt are passed through as markup unless
    ``escape_markup`` is set, in which case the content source is not
    trusted and both are HTML-escaped.
    """
    title = post.title or ""
    excerpt = post.excerpt or ""
    if escape_markup:
        title = html.escape(title)
        excerpt = html.escape(excerpt)
    return PostCard(
        title_html=title,
        excerpt_html=excerpt,
        href=post.path,
        image_url=post.featured_image_url or None,
        image_alt=title,
    )


def to_filter_options(items: Iterable[Union[Category, Tag]]) -> List[FilterOption]:
    return [FilterOption(value=i.slug, label=i.name) for i in items]
