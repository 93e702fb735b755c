"""
Blog API Endpoint Tests
=======================
Integration tests for the /api/blog routes, with the content source
patched to a fixed snapshot.

Usage:
    pip install -e .[test]
    pytest tests/test_router.py -v
"""
from unittest.mock import patch

import pytest

from fastapi.testclient import TestClient

from app.blog import router as blog_router_module
from app.blog.schemas import ContentSnapshot
from app.main import app


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def served(snapshot):
    """Serve the shared fixture snapshot from every route."""
    with patch.object(blog_router_module, "load_content", return_value=snapshot):
        yield snapshot


@pytest.fixture
def many_posts(make_post):
    big = ContentSnapshot(posts=[make_post(i) for i in range(1, 16)])
    with patch.object(blog_router_module, "load_content", return_value=big):
        yield big


# ============================================================================
# HEALTH ENDPOINT
# ============================================================================

def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# ============================================================================
# INDEX ENDPOINT
# ============================================================================

class TestIndexEndpoint:
    """Tests for GET /api/blog/index"""

    def test_defaults(self, client, served):
        data = client.get("/api/blog/index").json()

        assert data["title"] == "Test Blog"
        assert data["description"] == "Just testing"
        assert data["page"] == 1
        assert data["total"] == 5
        assert data["total_pages"] == 1
        assert data["page_numbers"] == [1]
        assert data["empty"] is False
        assert data["empty_message"] is None
        assert [o["value"] for o in data["categories"]] == ["news", "recipes"]
        assert data["items"][0]["href"] == "/posts/post-1"

    def test_category_and_tag(self, client, served):
        data = client.get("/api/blog/index", params={"category": "news", "tag": "featured"}).json()

        assert [i["href"] for i in data["items"]] == ["/posts/post-1", "/posts/post-5"]
        assert data["selected_category"] == "news"
        assert data["selected_tag"] == "featured"

    def test_no_results_is_flagged(self, client, served):
        data = client.get("/api/blog/index", params={"q": "hello"}).json()

        assert data["items"] == []
        assert data["total_pages"] == 0
        assert data["page_numbers"] == []
        assert data["empty"] is True
        assert data["empty_message"] == "Oops, no posts found!"

    def test_second_page(self, client, many_posts):
        data = client.get("/api/blog/index", params={"page": 2}).json()

        assert data["page_size"] == 12
        assert len(data["items"]) == 3
        assert data["page_numbers"] == [1, 2]

    def test_page_past_end_is_empty(self, client, many_posts):
        data = client.get("/api/blog/index", params={"page": 5}).json()

        assert data["items"] == []
        assert data["page"] == 5
        assert data["total_pages"] == 2
        assert data["empty"] is False

    def test_page_must_be_positive(self, client, served):
        assert client.get("/api/blog/index", params={"page": 0}).status_code == 422

    def test_page_size_from_settings(self, client, many_posts, monkeypatch):
        monkeypatch.setenv("BLOG_PAGE_SIZE", "5")
        data = client.get("/api/blog/index").json()

        assert data["page_size"] == 5
        assert data["total_pages"] == 3

    def test_escape_markup_setting(self, client, make_post, monkeypatch):
        monkeypatch.setenv("BLOG_ESCAPE_MARKUP", "true")
        snap = ContentSnapshot(posts=[make_post(1, title="<b>Bold</b>")])
        with patch.object(blog_router_module, "load_content", return_value=snap):
            data = client.get("/api/blog/index").json()

        assert data["items"][0]["title_html"] == "&lt;b&gt;Bold&lt;/b&gt;"

    def test_requested_page_survives_reset_setting(self, client, many_posts, monkeypatch):
        monkeypatch.setenv("BLOG_RESET_PAGE_ON_FILTER", "true")
        data = client.get(
            "/api/blog/index", params={"q": "Post", "category": "", "tag": "", "page": 2}
        ).json()

        assert data["page"] == 2
        assert data["total"] == 15
        assert len(data["items"]) == 3
        assert data["items"][0]["href"] == "/posts/post-13"

    def test_bad_api_url_still_serves_sample(self, client, monkeypatch):
        monkeypatch.setenv("WORDPRESS_GRAPHQL_URL", "blog.example.com/graphql")
        response = client.get("/api/blog/index")

        assert response.status_code == 200
        assert response.json()["total"] > 0


# ============================================================================
# POSTS / VOCABULARY ENDPOINTS
# ============================================================================

class TestPostsEndpoints:
    """Tests for /api/blog/posts, /categories, /tags"""

    def test_list_posts(self, client, served):
        data = client.get("/api/blog/posts", params={"q": "NEWS"}).json()

        assert data["total"] == 3
        assert [p["slug"] for p in data["items"]] == ["post-1", "post-2", "post-4"]
        assert data["items"][0]["path"] == "/posts/post-1"

    def test_get_post(self, client, served):
        response = client.get("/api/blog/posts/post-3")

        assert response.status_code == 200
        assert response.json()["title"] == "How to bake"

    def test_get_unknown_post(self, client, served):
        response = client.get("/api/blog/posts/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "Post not found"

    def test_vocabularies(self, client, served):
        assert [c["slug"] for c in client.get("/api/blog/categories").json()] == ["news", "recipes"]
        assert [t["slug"] for t in client.get("/api/blog/tags").json()] == ["featured"]


def test_debug_local(client):
    data = client.get("/api/blog/debug/local").json()

    assert data["count"] > 0
    assert len(data["sample"]) <= 5
