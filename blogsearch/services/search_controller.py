"""Search request orchestration: redirect or render.

A request either redirects (to the URL-mapped form of a query-string search,
or back to the last page when the requested page is past the end) or renders
an annotated page of results.
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import quote, urlencode

from blogsearch.config import Settings
from blogsearch.errors import InvalidConfiguration, MalformedInput
from blogsearch.models.search import SearchQuery, SearchResponse, SortSpec
from blogsearch.services.annotator import annotate_results
from blogsearch.services.blob_storage import get_blog_index
from blogsearch.services.category_resolver import resolve_categories
from blogsearch.services.links import PageRoutes
from blogsearch.services.post_query import parse_sort_order, search_posts

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class SearchOptions:
    """Validated search configuration for one request."""

    search_param: str
    page_param: str
    category_param: str
    url_mapping: bool
    highlight: bool
    per_page: int
    no_posts_message: str
    sort: SortSpec
    include_categories: tuple[str, ...]
    exclude_categories: tuple[str, ...]
    post_page: str
    category_page: str
    routes: PageRoutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchOptions":
        """Validate settings, raising InvalidConfiguration on bad values."""
        per_page = settings.posts_per_page.strip()
        if not _DIGITS_RE.match(per_page) or int(per_page) < 1:
            raise InvalidConfiguration(
                f"posts_per_page must be a positive whole number, got {settings.posts_per_page!r}"
            )

        routes = PageRoutes(settings.page_routes)
        routes.pattern_for(settings.post_page)
        routes.pattern_for(settings.category_page)

        return cls(
            search_param=settings.search_param,
            page_param=settings.page_param,
            category_param=settings.category_param,
            url_mapping=not settings.disable_url_mapping,
            highlight=settings.highlight,
            per_page=int(per_page),
            no_posts_message=settings.no_posts_message,
            sort=parse_sort_order(settings.sort_order),
            include_categories=tuple(settings.include_categories),
            exclude_categories=tuple(settings.exclude_categories),
            post_page=settings.post_page,
            category_page=settings.category_page,
            routes=routes,
        )


@dataclass(frozen=True)
class SearchRequest:
    """The parts of an HTTP request the search needs.

    ``base_path`` is the search page path without a term segment and
    ``path_term`` is the decoded term segment, if the URL had one.
    """

    method: str
    base_path: str
    path_term: str | None
    query_params: tuple[tuple[str, str], ...] = ()

    def get(self, name: str) -> str | None:
        for key, value in self.query_params:
            if key == name:
                return value
        return None

    @property
    def path(self) -> str:
        if self.path_term:
            return f"{self.base_path}/{quote(self.path_term, safe='')}"
        return self.base_path


@dataclass(frozen=True)
class Redirect:
    location: str


@dataclass(frozen=True)
class RenderResults:
    response: SearchResponse


SearchOutcome = Redirect | RenderResults


def parse_page_number(raw: str | None) -> int:
    """Parse a page number; raise MalformedInput unless it is a positive integer."""
    if raw is None or not _DIGITS_RE.match(raw.strip()):
        raise MalformedInput(f"Invalid page number {raw!r}")
    page = int(raw)
    if page < 1:
        raise MalformedInput(f"Invalid page number {raw!r}")
    return page


def category_tags(request: SearchRequest, param: str) -> tuple[tuple[str, ...], bool]:
    """Collect category tags from ``cat`` and ``cat[]`` query parameters.

    Returns the tags and whether they arrived in array form.
    """
    tags: list[str] = []
    array_form = False
    for key, value in request.query_params:
        if key == f"{param}[]":
            array_form = True
        elif key != param:
            continue
        if value:
            tags.append(value)
    return tuple(tags), array_form or len(tags) > 1


def search_term(request: SearchRequest, options: SearchOptions) -> str:
    if options.url_mapping:
        return request.path_term or ""
    return request.get(options.search_param) or ""


def mapped_search_url(
    request: SearchRequest, term: str, options: SearchOptions
) -> str:
    """URL-mapped form of a query-string search, keeping category tags."""
    location = f"{request.base_path}/{quote(term, safe='')}"
    tags, array_form = category_tags(request, options.category_param)
    if tags:
        key = f"{options.category_param}[]" if array_form else options.category_param
        location += "?" + urlencode([(key, tag) for tag in tags])
    return location


def page_url(request: SearchRequest, page_param: str, page: int) -> str:
    """The current URL with the page parameter set to ``page``."""
    params = [(k, v) for k, v in request.query_params if k != page_param]
    params.append((page_param, str(page)))
    return f"{request.path}?{urlencode(params)}"


async def handle_search(request: SearchRequest, options: SearchOptions) -> SearchOutcome:
    """Run one search request through the redirect/render decision."""
    raw_term = request.get(options.search_param)
    if options.url_mapping and request.method.upper() == "GET" and raw_term:
        location = mapped_search_url(request, raw_term, options)
        logger.info("Redirecting query-string search to %s", location)
        return Redirect(location)

    term = search_term(request, options)

    raw_page = request.get(options.page_param)
    try:
        page_number = parse_page_number(raw_page) if raw_page else 1
    except MalformedInput as e:
        logger.debug("%s, using page 1", e.message)
        page_number = 1

    tags, _ = category_tags(request, options.category_param)
    query = SearchQuery(
        term=term,
        page=page_number,
        category_tags=tags,
        highlight=options.highlight,
        per_page=options.per_page,
        sort=options.sort,
    )

    index = await get_blog_index()
    constraint = resolve_categories(
        index, options.exclude_categories, options.include_categories
    )
    page = search_posts(index, query, constraint)

    if page_number > page.last_page and page_number > 1:
        location = page_url(request, options.page_param, page.last_page)
        logger.info(
            "Page %d past last page %d, redirecting to %s",
            page_number,
            page.last_page,
            location,
        )
        return Redirect(location)

    annotated = annotate_results(
        page,
        options.routes,
        options.post_page,
        options.category_page,
        query.highlight,
        term,
    )

    return RenderResults(
        SearchResponse(
            posts=annotated,
            pageParam=options.page_param,
            searchParam=options.search_param,
            searchTerm=term,
            noPostsMessage=options.no_posts_message,
            postPage=options.post_page,
            categoryPage=options.category_page,
        )
    )
