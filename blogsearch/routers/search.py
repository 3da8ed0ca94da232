"""Blog search endpoints."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from blogsearch.config import get_settings
from blogsearch.models.search import SearchResponse
from blogsearch.services.search_controller import (
    Redirect,
    SearchOptions,
    SearchRequest,
    handle_search,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


def _search_request(request: Request, term: str | None) -> SearchRequest:
    return SearchRequest(
        method=request.method,
        base_path=request.url_for("search_results").path,
        path_term=term,
        query_params=tuple(request.query_params.multi_items()),
    )


async def _run_search(request: Request, term: str | None):
    options = SearchOptions.from_settings(get_settings())
    outcome = await handle_search(_search_request(request, term), options)
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.location, status_code=302)
    return outcome.response


@router.api_route(
    "",
    methods=["GET", "POST"],
    name="search_results",
    response_model=SearchResponse,
)
async def search(request: Request):
    """Search posts by query-string term (or redirect to the URL-mapped form)."""
    return await _run_search(request, None)


@router.api_route(
    "/{term:path}",
    methods=["GET", "POST"],
    name="search_results_mapped",
    response_model=SearchResponse,
)
async def search_mapped(request: Request, term: str):
    """Search posts by the term in the URL path."""
    return await _run_search(request, term)
