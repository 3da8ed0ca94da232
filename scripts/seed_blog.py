"""Seed sample blog posts and categories to Azure Blob Storage.

Usage:
    python -m scripts.seed_blog
"""

import json

from azure.storage.blob import ContainerClient, ContentSettings

from blogsearch.config import get_settings
from blogsearch.services.blob_storage import CATEGORY_INDEX_BLOB, POST_INDEX_BLOB

JSON_CONTENT = ContentSettings(content_type="application/json")

SEED_CATEGORIES = [
    {"id": "1", "name": "Python", "slug": "python"},
    {"id": "2", "name": "Web", "slug": "web"},
    {"id": "3", "name": "Announcements", "slug": "announcements"},
]

SEED_POSTS = [
    {
        "id": "101",
        "title": "Async Python for Web Backends",
        "slug": "async-python-for-web-backends",
        "excerpt": "When asyncio pays off and when it does not.",
        "content_html": '<p>A tour of <a href="/blog/post/asyncio">asyncio</a> in web backends.</p>',
        "published_at": "2026-09-02T09:00:00Z",
        "category_ids": ["1", "2"],
    },
    {
        "id": "102",
        "title": "Writing Search Without a Search Engine",
        "slug": "writing-search-without-a-search-engine",
        "excerpt": "Substring search goes a long way on a small blog.",
        "content_html": "<p>Case-insensitive <em>substring</em> matching over titles and bodies.</p>",
        "published_at": "2026-09-15T12:30:00Z",
        "category_ids": ["1"],
    },
    {
        "id": "103",
        "title": "The Blog Has Moved",
        "slug": "the-blog-has-moved",
        "excerpt": "New home, same posts.",
        "content_html": "<p>Update your feed reader.</p>",
        "published_at": "2026-10-01T08:00:00Z",
        "category_ids": ["3"],
    },
]


def main() -> None:
    """Upload the sample post and category indexes to blob storage."""
    from azure.identity import DefaultAzureCredential

    settings = get_settings()
    account_url = f"https://{settings.azure_storage_account}.blob.core.windows.net"
    client = ContainerClient(
        account_url=account_url,
        container_name=settings.azure_blog_container,
        credential=DefaultAzureCredential(),
    )

    print(
        f"Seeding {len(SEED_POSTS)} posts to {settings.azure_storage_account}/{settings.azure_blog_container}..."
    )

    for blob_name, key, records in (
        (POST_INDEX_BLOB, "posts", SEED_POSTS),
        (CATEGORY_INDEX_BLOB, "categories", SEED_CATEGORIES),
    ):
        blob = client.get_blob_client(blob_name)
        blob.upload_blob(
            json.dumps({key: records}, indent=2),
            overwrite=True,
            content_settings=JSON_CONTENT,
        )
        print(f"  Uploaded: {blob_name} ({len(records)} {key})")

    client.close()
    print("Done!")


if __name__ == "__main__":
    main()
