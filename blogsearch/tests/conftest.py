"""Shared fixtures for blogsearch tests."""

import json
from unittest.mock import MagicMock

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from blogsearch.config import get_settings

    get_settings.cache_clear()

    # 2. Blog container client singleton
    import blogsearch.services.blob_storage as blob_mod

    blob_mod._blog_container_client = None

    # 3. Health check cache
    import blogsearch.main as main_mod

    main_mod._health_cache = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from blogsearch.config import Settings, get_settings

    test_settings = Settings(
        azure_storage_account="teststorage",
        azure_blog_container="test-blog",
        managed_identity_client_id="test-client-id",
    )

    get_settings.cache_clear()
    monkeypatch.setattr("blogsearch.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    # (from blogsearch.config import get_settings creates a local binding that
    # the blogsearch.config monkeypatch above does not affect)
    for mod_path in [
        "blogsearch.services.blob_storage",
        "blogsearch.routers.search",
        "blogsearch.main",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@pytest.fixture
def blog_storage(monkeypatch):
    """Serve post and category indexes from a mocked blob container.

    Returns a ``seed(posts, categories)`` function; the container mock is
    exposed as ``seed.container``.
    """
    from blogsearch.services.blob_storage import CATEGORY_INDEX_BLOB, POST_INDEX_BLOB

    blobs: dict[str, object] = {POST_INDEX_BLOB: [], CATEGORY_INDEX_BLOB: []}

    def _blob_client(name):
        blob = MagicMock()
        blob.download_blob.return_value.readall.return_value = json.dumps(
            blobs[name]
        ).encode()
        return blob

    container = MagicMock()
    container.get_blob_client.side_effect = _blob_client
    monkeypatch.setattr(
        "blogsearch.services.blob_storage._get_blog_container_client",
        lambda: container,
    )

    def seed(posts, categories=None):
        blobs[POST_INDEX_BLOB] = posts
        blobs[CATEGORY_INDEX_BLOB] = categories or []

    seed.container = container
    return seed
