"""Blog post and category data models."""

from collections.abc import Iterable
from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator

SLUG_PATTERN = r"^[a-z0-9][a-z0-9-]*[a-z0-9]$"


class BlogCategory(BaseModel):
    """A blog category. ``url`` is only set on search results."""

    id: str
    name: str
    slug: str = Field(..., pattern=SLUG_PATTERN, max_length=200)
    url: str | None = None


class BlogPost(BaseModel):
    """Blog post as stored in the post index."""

    id: str
    title: str
    slug: str = Field(..., pattern=SLUG_PATTERN, max_length=200)
    excerpt: str = ""
    content_html: str = ""
    published: bool = True
    published_at: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category_ids: list[str] = []

    @model_validator(mode="after")
    def ensure_aware_timestamps(self) -> "BlogPost":
        """Treat naive timestamps from older index files as UTC."""
        for field in ("published_at", "created_at", "updated_at"):
            dt = getattr(self, field)
            if dt is not None and dt.tzinfo is None:
                setattr(self, field, dt.replace(tzinfo=timezone.utc))
        return self


class BlogIndex(BaseModel):
    """Post and category records read from storage."""

    posts: list[BlogPost]
    categories: list[BlogCategory]

    def post_ids_in_categories(self, category_ids: Iterable[str]) -> set[str]:
        """Select post ids where category id is in ``category_ids``."""
        wanted = set(category_ids)
        if not wanted:
            return set()
        return {p.id for p in self.posts if wanted.intersection(p.category_ids)}
