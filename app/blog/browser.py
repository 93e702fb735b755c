"""
Filter-and-paginate engine plus the selection controller for the blog index.

``compute_visible_posts()`` is a pure function over an already loaded
list of posts: nothing here fetches, caches or mutates shared state.
``PostBrowser`` owns a single ``BrowseState`` and recomputes the visible
page from the full post list every time it is asked.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .schemas import BrowseState, Post, VisiblePosts


logger = logging.getLogger(__name__)


def _norm(s: Optional[str]) -> str:
    return (s or "").lower()


def _clean_slug(slug: Optional[str]) -> Optional[str]:
    """Treat ``""`` the same as "no selection"; anything else is kept verbatim."""
    return slug or None


def _search_matches(post: Post, query: str) -> bool:
    if not query:
        return True
    return query in _norm(post.title) or query in _norm(post.excerpt)


def _relation_matches(slugs: Optional[Iterable[str]], selected: Optional[str]) -> bool:
    if not selected:
        return True
    return selected in (slugs or ())


def filter_posts(posts: Sequence[Post], state: BrowseState) -> List[Post]:
    """Return the posts that pass the search, category and tag predicates.

    All three predicates must hold. The relative order of ``posts`` is
    preserved.
    """
    query = _norm(state.search_query)
    category = _clean_slug(state.selected_category_slug)
    tag = _clean_slug(state.selected_tag_slug)
    return [
        p
        for p in posts
        if _search_matches(p, query)
        and _relation_matches(getattr(p, "category_slugs", None), category)
        and _relation_matches(getattr(p, "tag_slugs", None), tag)
    ]


def count_pages(total: int, page_size: int) -> int:
    """Ceiling division; zero results means zero pages."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    if total <= 0:
        return 0
    return (total + page_size - 1) // page_size


def compute_visible_posts(
    posts: Sequence[Post],
    state: BrowseState,
    page_size: int,
) -> VisiblePosts:
    """Filter ``posts`` by ``state`` and slice out the current page.

    Parameters
    ----------
    posts : Sequence[Post]
        The full, already loaded post list.
    state : BrowseState
        Current search query, category/tag selection and page number.
    page_size : int
        Posts per page. Must be at least 1.

    Returns
    -------
    VisiblePosts
        The items on the requested page, the total page count and the
        number of posts that matched. A page number past ``total_pages``
        yields an empty ``page_items`` list; it is not clamped.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    filtered = filter_posts(posts, state)
    total = len(filtered)
    start = (state.current_page_number - 1) * page_size
    if start < 0:
        page_items: List[Post] = []
    else:
        page_items = filtered[start:start + page_size]
    return VisiblePosts(
        page_items=page_items,
        total_pages=count_pages(total, page_size),
        total=total,
    )


class PostBrowser:
    """Owns the browse state for one view of the blog index.

    The setters replace one field of the state each. By default changing
    the search text or a filter leaves the page number alone, so a
    visitor on page 3 can end up on an empty page after narrowing the
    results. Pass ``reset_page_on_filter_change=True`` to send them back
    to page 1 whenever a filter actually changes.
    """

    def __init__(
        self,
        posts: Sequence[Post],
        page_size: int = 12,
        state: Optional[BrowseState] = None,
        reset_page_on_filter_change: bool = False,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.posts = list(posts)
        self.page_size = page_size
        self.state = state.model_copy() if state is not None else BrowseState()
        self.reset_page_on_filter_change = reset_page_on_filter_change

    def _filter_changed(self) -> None:
        if self.reset_page_on_filter_change and self.state.current_page_number != 1:
            logger.debug(
                "Filter changed; resetting page %s -> 1", self.state.current_page_number
            )
            self.state.current_page_number = 1

    def set_search_query(self, query: Optional[str]) -> None:
        query = query or ""
        if query != self.state.search_query:
            self.state.search_query = query
            self._filter_changed()

    def set_category(self, slug: Optional[str]) -> None:
        slug = _clean_slug(slug)
        if slug != self.state.selected_category_slug:
            self.state.selected_category_slug = slug
            self._filter_changed()

    def set_tag(self, slug: Optional[str]) -> None:
        slug = _clean_slug(slug)
        if slug != self.state.selected_tag_slug:
            self.state.selected_tag_slug = slug
            self._filter_changed()

    def set_page(self, page_number: int) -> None:
        # Stored as-is; range checking is the caller's business.
        self.state.current_page_number = page_number

    def visible(self) -> VisiblePosts:
        return compute_visible_posts(self.posts, self.state, self.page_size)

    def page_numbers(self) -> List[int]:
        return list(range(1, self.visible().total_pages + 1))
