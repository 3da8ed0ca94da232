"""Resolve configured include/exclude categories into post id sets."""

import logging
from collections.abc import Iterable

from blogsearch.models.blog import BlogIndex
from blogsearch.models.search import CategoryConstraint

logger = logging.getLogger(__name__)


def resolve_categories(
    index: BlogIndex,
    exclude_category_ids: Iterable[str] | None,
    include_category_ids: Iterable[str] | None,
) -> CategoryConstraint:
    """Build the category constraint for a search.

    Posts in any excluded category end up in ``blocked``; posts in any
    included category end up in ``allowed``. With no included categories the
    constraint does not restrict posts at all.
    """
    exclude = frozenset(exclude_category_ids or ())
    include = frozenset(include_category_ids or ())

    blocked = frozenset(index.post_ids_in_categories(exclude))
    allowed = frozenset(index.post_ids_in_categories(include))

    logger.debug(
        "Resolved categories: %d blocked posts, %d allowed posts (include=%s)",
        len(blocked),
        len(allowed),
        sorted(include),
    )
    return CategoryConstraint(
        include=include, exclude=exclude, allowed=allowed, blocked=blocked
    )
