"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Azure Blob Storage (post and category indexes)
    azure_storage_account: str = "blogsearchstorage"
    azure_blog_container: str = "blog"

    # Azure User-Assigned Managed Identity
    managed_identity_client_id: str = ""

    # Request parameter names
    search_param: str = "search"
    page_param: str = "page"
    category_param: str = "cat"

    # Search behaviour
    disable_url_mapping: bool = False
    highlight: bool = False
    posts_per_page: str = "10"  # validated as digits-only per request
    no_posts_message: str = "No posts found"
    sort_order: str = "published_at desc"
    include_categories: list[str] = []
    exclude_categories: list[str] = []

    # Link targets: page names resolved through page_routes
    post_page: str = "blog/post"
    category_page: str = "blog/category"
    page_routes: dict[str, str] = {
        "blog/post": "/blog/post/:slug",
        "blog/category": "/blog/category/:slug",
    }

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
