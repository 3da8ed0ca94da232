"""Resolve link-target page names into URLs for posts and categories."""

import re
from urllib.parse import quote

from blogsearch.errors import InvalidConfiguration
from blogsearch.models.blog import BlogCategory
from blogsearch.models.search import SearchPost

# ":slug" or ":slug?" (optional)
_PARAM_RE = re.compile(r":([a-zA-Z_][a-zA-Z0-9_]*)\??")


class PageRoutes:
    """Page name to URL pattern table, e.g. ``blog/post -> /blog/post/:slug``."""

    def __init__(self, routes: dict[str, str]) -> None:
        self._routes = dict(routes)

    def pattern_for(self, page_name: str) -> str:
        try:
            return self._routes[page_name]
        except KeyError:
            raise InvalidConfiguration(
                f"Link target {page_name!r} does not match any configured page"
            ) from None

    def url(self, page_name: str, params: dict[str, str]) -> str:
        pattern = self.pattern_for(page_name)

        def _fill(match: re.Match[str]) -> str:
            return quote(params.get(match.group(1), ""), safe="")

        path = _PARAM_RE.sub(_fill, pattern)
        path = re.sub(r"/{2,}", "/", path)
        if len(path) > 1:
            path = path.rstrip("/")
        return path


def post_url(routes: PageRoutes, page_name: str, post: SearchPost) -> str:
    """URL for a post, with id, slug and publish date as route parameters."""
    published = post.published_at
    return routes.url(
        page_name,
        {
            "id": post.id,
            "slug": post.slug,
            "year": published.strftime("%Y"),
            "month": published.strftime("%m"),
            "day": published.strftime("%d"),
        },
    )


def category_url(routes: PageRoutes, page_name: str, category: BlogCategory) -> str:
    return routes.url(page_name, {"id": category.id, "slug": category.slug})
