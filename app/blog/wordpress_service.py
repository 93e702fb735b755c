"""
WPGraphQL integration for the blog index. This module is the content
source: it asks a headless WordPress site for everything the index page
shows in a single query and maps the response into the ``schemas``
models.

* ``fetch_index_content()`` issues the query and returns a
  ``ContentSnapshot``.
* ``parse_index_response()`` does the mapping and is tolerant of
  missing pieces: absent ``edges``, ``nodes`` or ``featuredImage``
  simply become empty values.

Only the Python standard library is used for HTTP requests. Anything
that goes wrong on the wire is raised as ``ContentSourceError`` so the
store can decide whether to fall back to local sample data.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict, FrozenSet, List, Optional

from .schemas import Category, ContentSnapshot, Post, SiteSettings, Tag


logger = logging.getLogger(__name__)


INDEX_QUERY = """
query BlogIndex($first: Int!) {
  generalSettings {
    title
    description
  }
  posts(first: $first) {
    edges {
      node {
        id
        excerpt
        title
        slug
        uri
        featuredImage {
          node {
            sourceUrl
          }
        }
        categories {
          nodes {
            slug
            name
            id
          }
        }
        tags {
          nodes {
            slug
            name
            id
          }
        }
      }
    }
  }
  categories {
    nodes {
      id
      name
      slug
    }
  }
  tags {
    nodes {
      id
      name
      slug
    }
  }
}
"""


class ContentSourceError(Exception):
    """The content API could not be reached or returned an unusable response."""

    def __init__(self, message: str, url: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status = status


def _http_post_json(url: str, payload: dict, timeout: float) -> dict:
    """POST ``payload`` as JSON and return the decoded JSON body.

    Raises ``ContentSourceError`` for network failures, non-200
    statuses and bodies that are not a JSON object.
    """
    body = json.dumps(payload).encode("utf-8")
    try:
        request = urllib.request.Request(
            url,
            data=body,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": "blog-index/1.0",
            },
        )
        with urllib.request.urlopen(request, timeout=timeout) as response:
            if response.status != 200:
                raise ContentSourceError(
                    f"Content API returned status {response.status}",
                    url=url,
                    status=response.status,
                )
            raw = response.read().decode("utf-8", errors="ignore")
    except urllib.error.HTTPError as exc:
        raise ContentSourceError(
            f"Content API returned status {exc.code}", url=url, status=exc.code
        ) from exc
    except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError) as exc:
        # ValueError: malformed URL, e.g. missing scheme
        raise ContentSourceError(f"Error fetching {url}: {exc}", url=url) from exc
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ContentSourceError("Content API returned invalid JSON", url=url) from exc
    if not isinstance(data, dict):
        raise ContentSourceError("Content API returned a non-object body", url=url)
    return data


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _nodes(connection: Any) -> List[Dict[str, Any]]:
    """Return the ``nodes`` list of a GraphQL connection, or []."""
    return [n for n in _as_list(_as_dict(connection).get("nodes")) if isinstance(n, dict)]


def _slugs(connection: Any) -> FrozenSet[str]:
    return frozenset(
        str(n["slug"]) for n in _nodes(connection) if n.get("slug")
    )


def _featured_image_url(node: Dict[str, Any]) -> Optional[str]:
    image = _as_dict(_as_dict(node.get("featuredImage")).get("node"))
    url = image.get("sourceUrl")
    return str(url) if url else None


def _parse_post(node: Dict[str, Any]) -> Optional[Post]:
    slug = node.get("slug")
    if not slug:
        # No slug means no link target; the card would be unusable.
        logger.debug("Skipping post without slug: %s", node.get("id"))
        return None
    return Post(
        id=str(node.get("id") or slug),
        title=str(node.get("title") or ""),
        excerpt=str(node.get("excerpt") or ""),
        slug=str(slug),
        category_slugs=_slugs(node.get("categories")),
        tag_slugs=_slugs(node.get("tags")),
        featured_image_url=_featured_image_url(node),
    )


def _parse_terms(connection: Any, model):
    terms = []
    for n in _nodes(connection):
        if not n.get("slug"):
            continue
        terms.append(
            model(
                id=str(n.get("id") or n["slug"]),
                name=str(n.get("name") or n["slug"]),
                slug=str(n["slug"]),
            )
        )
    return terms


def parse_index_response(payload: Dict[str, Any]) -> ContentSnapshot:
    """Map a WPGraphQL index response into a ``ContentSnapshot``.

    Parameters
    ----------
    payload : Dict[str, Any]
        The decoded response body, i.e. ``{"data": {...}}``.

    Returns
    -------
    ContentSnapshot
        Site settings, posts in the order the API returned them, and the
        category/tag vocabularies. Missing sections become empty.
    """
    data = _as_dict(payload.get("data"))
    settings = _as_dict(data.get("generalSettings"))

    posts: List[Post] = []
    for edge in _as_list(_as_dict(data.get("posts")).get("edges")):
        node = _as_dict(_as_dict(edge).get("node"))
        if not node:
            continue
        post = _parse_post(node)
        if post is not None:
            posts.append(post)

    return ContentSnapshot(
        site=SiteSettings(
            title=str(settings.get("title") or ""),
            description=str(settings.get("description") or ""),
        ),
        posts=posts,
        categories=_parse_terms(data.get("categories"), Category),
        tags=_parse_terms(data.get("tags"), Tag),
    )


def fetch_index_content(url: str, max_posts: int = 10000, timeout: float = 10.0) -> ContentSnapshot:
    """Fetch site settings, posts, categories and tags in one request."""
    payload = {"query": INDEX_QUERY, "variables": {"first": int(max_posts)}}
    response = _http_post_json(url, payload, timeout)
    errors = _as_list(response.get("errors"))
    if errors:
        first = _as_dict(errors[0]).get("message") or "unknown error"
        raise ContentSourceError(f"Content API reported errors: {first}", url=url)
    snapshot = parse_index_response(response)
    logger.info(
        "Fetched %d posts, %d categories, %d tags from %s",
        len(snapshot.posts),
        len(snapshot.categories),
        len(snapshot.tags),
        url,
    )
    return snapshot
