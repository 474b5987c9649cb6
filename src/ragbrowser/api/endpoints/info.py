"""Info endpoints — Service banner and self-describing API documentation."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ragbrowser import __version__
from ragbrowser.api.deps import get_service
from ragbrowser.core.service import WebSearchService
from ragbrowser.models.query import DEFAULT_MAX_RESULTS, DEFAULT_TIMEOUT_SECS
from ragbrowser.models.response import InfoResponse

router = APIRouter()

AVAILABLE_ENDPOINTS = ["GET /", "GET /health", "GET /api/info", "POST /api/search"]

_SEARCH_PARAMETERS: dict[str, dict[str, Any]] = {
    "query": {
        "type": "string",
        "required": True,
        "description": "Search query or URL to process",
    },
    "maxResults": {
        "type": "number",
        "required": False,
        "default": DEFAULT_MAX_RESULTS,
        "min": 1,
        "max": 100,
        "description": "Maximum number of results to return",
    },
    "scrapingTool": {
        "type": "string",
        "required": False,
        "enum": ["browser-playwright", "raw-http"],
        "default": "raw-http",
        "description": "Tool to use for web scraping",
    },
    "outputFormats": {
        "type": "array",
        "required": False,
        "items": ["text", "markdown", "html"],
        "default": ["markdown"],
        "description": "Output formats for extracted content",
    },
    "requestTimeoutSecs": {
        "type": "number",
        "required": False,
        "default": DEFAULT_TIMEOUT_SECS,
        "min": 1,
        "max": 300,
        "description": "Request timeout in seconds",
    },
}


@router.get("/", summary="Service Banner")
async def root(service: WebSearchService = Depends(get_service)) -> dict[str, Any]:
    return {
        "message": "RAG Web Browser HTTP Server",
        "version": __version__,
        "provider": service.provider_type.value,
        "documentation": "/api/info",
        "health": "/health",
    }


@router.get("/api/info", response_model=InfoResponse, summary="API Documentation")
async def api_info(service: WebSearchService = Depends(get_service)) -> InfoResponse:
    """Describe the endpoints and their parameters, with example requests."""
    return InfoResponse(
        name="RAG Web Browser HTTP API",
        version=__version__,
        description="HTTP API for web search and content extraction",
        provider=service.provider_type,
        endpoints=[
            {
                "path": "/api/search",
                "method": "POST",
                "description": "Perform web search and content extraction",
                "parameters": _SEARCH_PARAMETERS,
            },
            {"path": "/health", "method": "GET", "description": "Health check and provider status"},
            {"path": "/api/info", "method": "GET", "description": "API documentation and endpoint information"},
        ],
        examples={
            "simpleSearch": {
                "url": "/api/search",
                "method": "POST",
                "body": {"query": "artificial intelligence latest news", "maxResults": 3},
            },
            "urlExtraction": {
                "url": "/api/search",
                "method": "POST",
                "body": {"query": "https://www.example.com/article", "outputFormats": ["markdown", "text"]},
            },
        },
    )
