"""
Blog package for the headless blog index.

Posts, categories and tags are fetched once per page view from a
WPGraphQL endpoint (or the bundled sample dataset) and then searched,
filtered and paginated in memory. The router exposes the result as
JSON so any frontend can render the index page.
"""

from .router import router as blog_router  # noqa: F401
