"""
Blog Search API

Keyword search over blog posts with category filters, pagination and
highlighted matches.
"""

import logging
import time
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogsearch.config import get_settings
from blogsearch.errors import BlogSearchError, InvalidConfiguration
from blogsearch.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    current_request_id,
)
from blogsearch.routers import categories, search
from blogsearch.services.blob_storage import check_storage_connectivity
from blogsearch.services.search_controller import SearchOptions

logger = logging.getLogger(__name__)

settings = get_settings()

# Health check cache: (result_dict, timestamp)
_health_cache: tuple[dict[str, Any], float] | None = None
_HEALTH_CACHE_TTL = 30  # seconds


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    yield


app = FastAPI(
    title="Blog Search API",
    description="Keyword search over blog posts",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
# Request ID (added last, so outermost)
app.add_middleware(RequestIDMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Routers
app.include_router(search.router, prefix="/api/blogsearch")
app.include_router(categories.router, prefix="/api/blogsearch")


@app.exception_handler(BlogSearchError)
async def blog_search_error_handler(request: Request, exc: BlogSearchError):
    """Turn search errors into JSON responses with their status code."""
    if isinstance(exc, InvalidConfiguration):
        logger.error("[%s] Invalid configuration: %s", current_request_id(), exc.message)
    else:
        logger.warning(
            "[%s] %s on %s: %s",
            current_request_id(),
            type(exc).__name__,
            request.url.path,
            exc.message,
        )
    return JSONResponse(content=exc.to_dict(), status_code=exc.status_code)


def _check_config() -> str:
    """Verify the search options validate. Returns 'ok' or 'fail'."""
    try:
        SearchOptions.from_settings(get_settings())
    except InvalidConfiguration as e:
        logger.warning("Search configuration invalid: %s", e.message)
        return "fail"
    return "ok"


def _run_health_checks() -> dict[str, Any]:
    """Run all health checks, returning the full response body."""
    global _health_cache
    now = time.time()
    if _health_cache is not None:
        cached_result, cached_at = _health_cache
        if now - cached_at < _HEALTH_CACHE_TTL:
            return cached_result

    config_status = _check_config()
    storage_status = "ok" if check_storage_connectivity() else "fail"

    checks = {"config": config_status, "storage": storage_status}
    failed = [k for k, v in checks.items() if v != "ok"]

    if "config" in failed:
        overall = "fail"
    elif failed:
        overall = "degraded"
    else:
        overall = "ok"
    if failed:
        logger.warning("Health check %s, failed: %s", overall, ", ".join(failed))

    result: dict[str, Any] = {
        "status": overall,
        "service": "blogsearch-api",
        "version": "0.1.0",
        "checks": checks,
    }
    _health_cache = (result, now)
    return result


@app.get("/api/blogsearch/health")
async def health_check() -> JSONResponse:
    """Health check verifying configuration and storage."""
    result = _run_health_checks()
    status_code = 200 if result["status"] in ("ok", "degraded") else 503
    return JSONResponse(content=result, status_code=status_code)
