# app/config.py
"""
Application settings loaded from environment variables.

Values come from the process environment or a ``.env`` file in the
project root. Access them through ``get_settings()`` so tests can clear
the cache and override values.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SAMPLE_FILE = Path(__file__).resolve().parent / "data" / "sample_posts.json"


class Settings(BaseSettings):
    """Settings for the blog index service."""

    # -------------------------------------------------------------------------
    # Content source (WPGraphQL)
    # -------------------------------------------------------------------------
    # Empty means "no remote API": the bundled sample dataset is served.

    WORDPRESS_GRAPHQL_URL: str = Field(
        default="",
        description="WPGraphQL endpoint, e.g. https://example.com/graphql",
    )

    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout for the one-shot content fetch",
    )

    BLOG_MAX_POSTS: int = Field(
        default=10000,
        ge=1,
        description="Upper bound passed as posts(first: N) in the index query",
    )

    SAMPLE_DATA_FILE: Path = Field(
        default=DEFAULT_SAMPLE_FILE,
        description="Local JSON dataset used when the content API is unavailable",
    )

    # -------------------------------------------------------------------------
    # Browsing
    # -------------------------------------------------------------------------

    BLOG_PAGE_SIZE: int = Field(
        default=12,
        ge=1,
        le=200,
        description="Posts per page on the index",
    )

    BLOG_RESET_PAGE_ON_FILTER: bool = Field(
        default=False,
        description="Return to page 1 whenever the search/category/tag changes",
    )

    BLOG_ESCAPE_MARKUP: bool = Field(
        default=False,
        description="HTML-escape titles and excerpts instead of passing markup through",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def content_api_enabled(self) -> bool:
        return bool(self.WORDPRESS_GRAPHQL_URL.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
