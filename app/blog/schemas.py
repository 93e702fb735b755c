"""
Pydantic schema definitions for the blog module.

``Post``, ``Category`` and ``Tag`` mirror what the headless content API
returns, flattened so that the filter engine only deals with slugs.
``BrowseState`` holds the visitor's current search/filter/page choices
and ``VisiblePosts`` is what the engine hands back. The remaining
models are response shapes for the HTTP routes.
"""

from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Category(BaseModel):
    """A category from the content API. ``slug`` is unique."""

    id: str
    name: str
    slug: str


class Tag(BaseModel):
    """A tag from the content API. ``slug`` is unique."""

    id: str
    name: str
    slug: str


class Post(BaseModel):
    """A single post entry.

    ``title`` and ``excerpt`` may contain markup coming straight from the
    CMS. ``category_slugs`` and ``tag_slugs`` can be empty; a post whose
    relations were missing in the payload simply has empty sets here.
    Posts are frozen once loaded.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    excerpt: str = ""
    slug: str
    category_slugs: FrozenSet[str] = Field(default_factory=frozenset)
    tag_slugs: FrozenSet[str] = Field(default_factory=frozenset)
    featured_image_url: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def path(self) -> str:
        return f"/posts/{self.slug}"


class SiteSettings(BaseModel):
    title: str = ""
    description: str = ""


class ContentSnapshot(BaseModel):
    """Everything the index page needs, fetched once per page view."""

    site: SiteSettings = Field(default_factory=SiteSettings)
    posts: List[Post] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)
    tags: List[Tag] = Field(default_factory=list)


class BrowseState(BaseModel):
    """The visitor's current selections.

    ``current_page_number`` is 1-indexed. It is stored as given: a page
    past the end of the filtered results is allowed and yields an empty
    page.
    """

    search_query: str = ""
    selected_category_slug: Optional[str] = None
    selected_tag_slug: Optional[str] = None
    current_page_number: int = 1


class VisiblePosts(BaseModel):
    page_items: List[Post]
    total_pages: int
    total: int

    @property
    def empty(self) -> bool:
        return self.total == 0


class PostCard(BaseModel):
    """Display projection of a post for the index grid."""

    title_html: str
    excerpt_html: str
    href: str
    image_url: Optional[str] = None
    image_alt: str = ""


class FilterOption(BaseModel):
    value: str
    label: str


class PaginatedPosts(BaseModel):
    """A wrapper for paginated results returned from ``/posts``."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: List[Post]


class BlogIndex(BaseModel):
    """Everything the frontend needs to render the index page."""

    title: str
    description: str
    search_query: str = ""
    selected_category: Optional[str] = None
    selected_tag: Optional[str] = None
    categories: List[FilterOption]
    tags: List[FilterOption]
    page: int
    page_size: int
    total: int
    total_pages: int
    page_numbers: List[int]
    items: List[PostCard]
    empty: bool
    empty_message: Optional[str] = None
