"""
Route definitions for the blog index API.

Endpoints under /api/blog:
- GET  /index             : everything the index page renders (cards, filters, pagination)
- GET  /posts             : filtered, paginated raw posts
- GET  /posts/{slug}      : one post
- GET  /categories        : category vocabulary
- GET  /tags              : tag vocabulary
- GET  /debug/local       : debug local sample dataset
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from ..config import get_settings
from .browser import PostBrowser
from .presentation import to_filter_options, to_post_card
from .schemas import BlogIndex, Category, PaginatedPosts, Post, Tag
from .store import find_post, load_content, load_sample_content


EMPTY_MESSAGE = "Oops, no posts found!"

router = APIRouter(prefix="/api/blog", tags=["blog"])


def _browser_for(
    posts: List[Post],
    q: Optional[str],
    category: Optional[str],
    tag: Optional[str],
    page: int,
) -> PostBrowser:
    """Replay the visitor's selections onto a fresh browser.

    The page is applied last, so the requested page stands even with
    ``BLOG_RESET_PAGE_ON_FILTER`` on.
    """
    settings = get_settings()
    browser = PostBrowser(
        posts,
        page_size=settings.BLOG_PAGE_SIZE,
        reset_page_on_filter_change=settings.BLOG_RESET_PAGE_ON_FILTER,
    )
    browser.set_search_query(q)
    browser.set_category(category)
    browser.set_tag(tag)
    browser.set_page(page)
    return browser


@router.get("/index", response_model=BlogIndex)
def blog_index(
    q: Optional[str] = Query(default=None, description="Search in title and excerpt"),
    category: Optional[str] = Query(default=None, description="Category slug"),
    tag: Optional[str] = Query(default=None, description="Tag slug"),
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
) -> BlogIndex:
    settings = get_settings()
    snapshot = load_content()
    browser = _browser_for(snapshot.posts, q, category, tag, page)
    visible = browser.visible()
    state = browser.state

    return BlogIndex(
        title=snapshot.site.title,
        description=snapshot.site.description,
        search_query=state.search_query,
        selected_category=state.selected_category_slug,
        selected_tag=state.selected_tag_slug,
        categories=to_filter_options(snapshot.categories),
        tags=to_filter_options(snapshot.tags),
        page=state.current_page_number,
        page_size=browser.page_size,
        total=visible.total,
        total_pages=visible.total_pages,
        page_numbers=list(range(1, visible.total_pages + 1)),
        items=[to_post_card(p, escape_markup=settings.BLOG_ESCAPE_MARKUP) for p in visible.page_items],
        empty=visible.empty,
        empty_message=EMPTY_MESSAGE if visible.empty else None,
    )


@router.get("/posts", response_model=PaginatedPosts)
def list_posts(
    q: Optional[str] = Query(default=None, description="Search in title and excerpt"),
    category: Optional[str] = Query(default=None, description="Category slug"),
    tag: Optional[str] = Query(default=None, description="Tag slug"),
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
) -> PaginatedPosts:
    snapshot = load_content()
    browser = _browser_for(snapshot.posts, q, category, tag, page)
    visible = browser.visible()
    return PaginatedPosts(
        page=browser.state.current_page_number,
        page_size=browser.page_size,
        total=visible.total,
        total_pages=visible.total_pages,
        items=visible.page_items,
    )


@router.get("/posts/{slug}", response_model=Post)
def get_post(slug: str) -> Post:
    post = find_post(load_content(), slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("/categories", response_model=List[Category])
def list_categories() -> List[Category]:
    return load_content().categories


@router.get("/tags", response_model=List[Tag])
def list_tags() -> List[Tag]:
    return load_content().tags


@router.get("/debug/local")
def debug_local():
    """
    Debug endpoint to verify the local sample dataset is loaded.
    Visit: http://127.0.0.1:8000/api/blog/debug/local
    """
    snapshot = load_sample_content()
    return {
        "count": len(snapshot.posts),
        "sample": [
            {"id": p.id, "slug": p.slug, "title": p.title}
            for p in snapshot.posts[:5]
        ],
    }
