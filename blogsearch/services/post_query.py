"""Filtered, sorted and paginated post queries."""

import logging
import random
from datetime import datetime, timezone
from math import ceil

from blogsearch.errors import InvalidConfiguration
from blogsearch.models.blog import BlogCategory, BlogIndex, BlogPost
from blogsearch.models.search import (
    CategoryConstraint,
    ResultPage,
    SearchPost,
    SearchQuery,
    SortSpec,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("title", "created_at", "updated_at", "published_at")
SORT_DIRECTIONS = {"asc": False, "desc": True}


def allowed_sort_orders() -> list[str]:
    """Every sort order string accepted by ``parse_sort_order``."""
    orders = [f"{f} {d}" for f in SORTABLE_FIELDS for d in SORT_DIRECTIONS]
    orders.append("random")
    return orders


def parse_sort_order(value: str) -> SortSpec:
    """Parse ``"<field> <asc|desc>"`` or ``"random"`` into a SortSpec."""
    parts = value.strip().lower().split()
    if parts == ["random"]:
        return SortSpec("random")
    if len(parts) == 2 and parts[0] in SORTABLE_FIELDS and parts[1] in SORT_DIRECTIONS:
        return SortSpec(parts[0], SORT_DIRECTIONS[parts[1]])
    raise InvalidConfiguration(
        f"Unknown sort order {value!r}; expected one of {', '.join(allowed_sort_orders())}"
    )


def matches_term(post: BlogPost, term: str) -> bool:
    """Case-insensitive substring match on title, excerpt and body."""
    if not term:
        return True
    needle = term.casefold()
    return (
        needle in post.title.casefold()
        or needle in post.excerpt.casefold()
        or needle in post.content_html.casefold()
    )


def is_published(post: BlogPost, now: datetime) -> bool:
    return post.published and post.published_at <= now


def visible_categories(
    post: BlogPost,
    categories_by_id: dict[str, BlogCategory],
    constraint: CategoryConstraint,
) -> list[BlogCategory]:
    """Categories shown on a result: excluded ones dropped, included ones kept."""
    visible = []
    for cid in post.category_ids:
        category = categories_by_id.get(cid)
        if category is None:
            continue
        if cid in constraint.exclude:
            continue
        if constraint.include and cid not in constraint.include:
            continue
        visible.append(category.model_copy())
    return visible


def sort_posts(posts: list[BlogPost], sort: SortSpec) -> list[BlogPost]:
    if sort.field == "random":
        shuffled = list(posts)
        random.shuffle(shuffled)
        return shuffled

    def sort_key(post: BlogPost):
        value = getattr(post, sort.field)
        if value is None:
            value = post.published_at
        if isinstance(value, str):
            value = value.casefold()
        return (value, post.id)

    return sorted(posts, key=sort_key, reverse=sort.descending)


def build_result_page(
    posts: list[BlogPost],
    categories: list[BlogCategory],
    query: SearchQuery,
    constraint: CategoryConstraint,
    now: datetime | None = None,
) -> ResultPage:
    """Filter, sort and paginate ``posts`` for ``query``.

    A page past the end comes back empty; deciding what to do about that is
    left to the caller.
    """
    now = now or datetime.now(timezone.utc)
    tags = set(query.category_tags)

    matched = [
        post
        for post in posts
        if is_published(post, now)
        and constraint.permits(post.id)
        and matches_term(post, query.term)
        and (not tags or tags.intersection(post.category_ids))
    ]
    matched = sort_posts(matched, query.sort)

    total = len(matched)
    last_page = max(1, ceil(total / query.per_page))
    start = (query.page - 1) * query.per_page
    page_posts = matched[start : start + query.per_page]

    categories_by_id = {c.id: c for c in categories}
    results = [
        SearchPost(
            id=post.id,
            title=post.title,
            slug=post.slug,
            excerpt=post.excerpt,
            content_html=post.content_html,
            published_at=post.published_at,
            categories=visible_categories(post, categories_by_id, constraint),
        )
        for post in page_posts
    ]

    return ResultPage(
        posts=results,
        current_page=query.page,
        last_page=last_page,
        per_page=query.per_page,
        total=total,
    )


def search_posts(
    index: BlogIndex, query: SearchQuery, constraint: CategoryConstraint
) -> ResultPage:
    """Run ``query`` against a blog index read once for the request."""
    page = build_result_page(index.posts, index.categories, query, constraint)
    logger.info(
        "Search %r page %d: %d matches, %d pages",
        query.term,
        query.page,
        page.total,
        page.last_page,
    )
    return page
