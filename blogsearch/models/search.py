"""Search request, constraint and result models."""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel

from blogsearch.models.blog import BlogCategory


@dataclass(frozen=True)
class SortSpec:
    """A sort field and direction, e.g. ``published_at desc``."""

    field: str
    descending: bool = False

    def __str__(self) -> str:
        if self.field == "random":
            return "random"
        return f"{self.field} {'desc' if self.descending else 'asc'}"


@dataclass(frozen=True)
class CategoryConstraint:
    """Configured include/exclude category ids and the post ids they resolve to.

    ``allowed`` only restricts results when ``include`` is non-empty; an empty
    include set means every post is eligible, not that none are.
    """

    include: frozenset[str] = frozenset()
    exclude: frozenset[str] = frozenset()
    allowed: frozenset[str] = frozenset()
    blocked: frozenset[str] = frozenset()

    @property
    def restricts_posts(self) -> bool:
        return bool(self.include)

    def permits(self, post_id: str) -> bool:
        if post_id in self.blocked:
            return False
        if self.restricts_posts:
            return post_id in self.allowed
        return True


@dataclass(frozen=True)
class SearchQuery:
    """Everything the pipeline needs to answer one search request."""

    term: str = ""
    page: int = 1
    category_tags: tuple[str, ...] = ()
    highlight: bool = False
    per_page: int = 10
    sort: SortSpec = field(default_factory=lambda: SortSpec("published_at", True))


class SearchPost(BaseModel):
    """A post on a result page, with its visible categories and link."""

    id: str
    title: str
    slug: str
    excerpt: str
    content_html: str
    published_at: datetime
    categories: list[BlogCategory] = []
    url: str | None = None


class ResultPage(BaseModel):
    """One page of search results."""

    posts: list[SearchPost]
    current_page: int
    last_page: int
    per_page: int
    total: int


class SearchResponse(BaseModel):
    """Render payload for a search request."""

    posts: ResultPage
    pageParam: str
    searchParam: str
    searchTerm: str
    noPostsMessage: str
    postPage: str
    categoryPage: str


class CategoryOptions(BaseModel):
    """Category id to name mapping for building a category filter."""

    categories: dict[str, str]
