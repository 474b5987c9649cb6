"""Search endpoint — Web search and content extraction through the active provider."""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ragbrowser.api.deps import get_service
from ragbrowser.core.service import WebSearchService
from ragbrowser.models.query import WebSearchRequest
from ragbrowser.models.response import ErrorResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/api/search",
    response_model=SearchResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="Web Search",
    description=(
        "Search the web with the active provider and return the result pages as "
        "plain text and Markdown. `query` may be search keywords or a page URL."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request parameters"},
        500: {"model": ErrorResponse, "description": "Search failed upstream"},
    },
)
async def search(
    request: WebSearchRequest,
    service: WebSearchService = Depends(get_service),
) -> SearchResponse | JSONResponse:
    """Execute a web search.

    Args:
        request: The validated search request.
        service: The web search service (injected).

    Returns:
        A SearchResponse, or a 500 JSON error when the provider call fails.
    """
    start = time.monotonic()
    try:
        results = await service.search(request)
    except Exception as e:
        logger.error("Search error: %s", e, exc_info=True)
        error = ErrorResponse(
            error="Search failed",
            message=str(e),
            processing_time_ms=int((time.monotonic() - start) * 1000),
            timestamp=datetime.now(UTC).isoformat(),
        )
        return JSONResponse(status_code=500, content=error.model_dump(by_alias=True, exclude_none=True))

    return SearchResponse(
        query=request.query,
        max_results=request.max_results,
        total_results=len(results),
        results=results,
        provider=service.provider_type,
        processing_time_ms=int((time.monotonic() - start) * 1000),
        timestamp=datetime.now(UTC).isoformat(),
    )
