"""Azure Blob Storage reads for the blog post and category indexes."""

import json
import logging
from typing import Any

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.identity import ManagedIdentityCredential
from azure.storage.blob import ContainerClient
from pydantic import ValidationError

from blogsearch.config import get_settings
from blogsearch.errors import StorageUnavailable
from blogsearch.models.blog import BlogCategory, BlogIndex, BlogPost

logger = logging.getLogger(__name__)

POST_INDEX_BLOB = "blog-index.json"
CATEGORY_INDEX_BLOB = "blog-categories.json"

# Lazy singleton, lives for the process lifetime
_blog_container_client: ContainerClient | None = None


def _get_credential() -> ManagedIdentityCredential:
    """Return Managed Identity credential."""
    settings = get_settings()
    return ManagedIdentityCredential(client_id=settings.managed_identity_client_id)


def create_container_client(container_name: str) -> ContainerClient:
    """Create a ContainerClient for the given container."""
    settings = get_settings()
    account_url = f"https://{settings.azure_storage_account}.blob.core.windows.net"
    return ContainerClient(
        account_url=account_url,
        container_name=container_name,
        credential=_get_credential(),
    )


def _get_blog_container_client() -> ContainerClient:
    """Return a shared blob container client for blog content (lazy singleton)."""
    global _blog_container_client
    if _blog_container_client is None:
        _blog_container_client = create_container_client(
            get_settings().azure_blog_container
        )
    return _blog_container_client


def check_storage_connectivity() -> bool:
    """Lightweight storage connectivity check: lists 1 blob."""
    try:
        client = _get_blog_container_client()
        next(client.list_blobs(results_per_page=1).__iter__())
        return True
    except StopIteration:
        # Container exists but is empty, still connected
        return True
    except Exception:
        return False


def _read_index_blob(blob_name: str, key: str) -> list[dict[str, Any]]:
    """Download a JSON index blob and return its list of records.

    Handles both list format and dict format (``{key: [...]}``). A missing
    blob reads as an empty index; any other failure raises StorageUnavailable.
    """
    client = _get_blog_container_client()
    try:
        blob = client.get_blob_client(blob_name)
        data = json.loads(blob.download_blob().readall())
    except ResourceNotFoundError:
        logger.info("Index blob %s not found, treating as empty", blob_name)
        return []
    except AzureError as e:
        logger.warning("Azure API error reading %s: %s", blob_name, e)
        raise StorageUnavailable(f"Could not read {blob_name}") from e
    except ValueError as e:
        logger.warning("Malformed JSON in %s: %s", blob_name, e)
        raise StorageUnavailable(f"Could not parse {blob_name}") from e

    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        logger.warning("Unexpected index layout in %s", blob_name)
        raise StorageUnavailable(f"{blob_name} is not a list of {key} records")
    return data


async def get_blog_posts() -> list[BlogPost]:
    """Read every post from the post index."""
    records = _read_index_blob(POST_INDEX_BLOB, "posts")
    try:
        return [BlogPost(**p) for p in records]
    except ValidationError as e:
        logger.warning("Invalid post record in %s: %s", POST_INDEX_BLOB, e)
        raise StorageUnavailable(f"Invalid post record in {POST_INDEX_BLOB}") from e


async def get_blog_categories() -> list[BlogCategory]:
    """Read every category from the category index."""
    records = _read_index_blob(CATEGORY_INDEX_BLOB, "categories")
    try:
        return [BlogCategory(**c) for c in records]
    except ValidationError as e:
        logger.warning("Invalid category record in %s: %s", CATEGORY_INDEX_BLOB, e)
        raise StorageUnavailable(
            f"Invalid category record in {CATEGORY_INDEX_BLOB}"
        ) from e


async def get_blog_index() -> BlogIndex:
    """Read posts together with the categories they reference."""
    posts = await get_blog_posts()
    categories = await get_blog_categories()
    return BlogIndex(posts=posts, categories=categories)
