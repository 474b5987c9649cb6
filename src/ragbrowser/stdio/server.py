"""Stdio tool server — Exposes web search as an MCP tool over stdin/stdout.

The server registers one tool, ``search``. Its arguments mirror the HTTP
``POST /api/search`` body and its result is the JSON document
``{query, maxResults, totalResults, results}``.

stdout carries the protocol, so nothing else may be printed there; logging is
routed to stderr by the CLI.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from ragbrowser.config.settings import Settings
from ragbrowser.core.service import WebSearchService
from ragbrowser.models.query import DEFAULT_MAX_RESULTS, DEFAULT_TIMEOUT_SECS, OutputFormat, ScrapingTool, WebSearchRequest
from ragbrowser.models.response import ToolSearchOutput

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-server-rag-web-browser"
TOOL_SEARCH = "search"

_FIELDS = WebSearchRequest.model_fields


async def perform_web_search(service: WebSearchService, request: WebSearchRequest) -> str:
    """Run a search and format it as the tool's JSON text output."""
    results = await service.search(request)
    output = ToolSearchOutput(
        query=request.query,
        max_results=request.max_results,
        total_results=len(results),
        results=results,
    )
    return output.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def create_server(service: WebSearchService) -> FastMCP:
    """Build the FastMCP server around an already selected provider.

    The provider's HTTP client is opened and closed by the server lifespan.
    """

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        await service.initialize()
        try:
            yield
        finally:
            await service.shutdown()

    server = FastMCP(SERVER_NAME, lifespan=lifespan)

    async def search(
        query: Annotated[str, Field(description=_FIELDS["query"].description)],
        maxResults: Annotated[int, Field(description=_FIELDS["max_results"].description)] = DEFAULT_MAX_RESULTS,
        scrapingTool: Annotated[ScrapingTool, Field(description=_FIELDS["scraping_tool"].description)] = "raw-http",
        outputFormats: Annotated[
            list[OutputFormat] | None, Field(description=_FIELDS["output_formats"].description)
        ] = None,
        requestTimeoutSecs: Annotated[
            int, Field(description=_FIELDS["request_timeout_secs"].description)
        ] = DEFAULT_TIMEOUT_SECS,
    ) -> str:
        try:
            request = WebSearchRequest.model_validate(
                {
                    "query": query,
                    "maxResults": maxResults,
                    "scrapingTool": scrapingTool,
                    "outputFormats": ["markdown"] if outputFormats is None else outputFormats,
                    "requestTimeoutSecs": requestTimeoutSecs,
                }
            )
            return await perform_web_search(service, request)
        except Exception as e:
            logger.error("[MCP Error] %s", e, exc_info=True)
            raise ToolError(f"Failed to perform web search: {e}") from e

    server.add_tool(
        search,
        name=TOOL_SEARCH,
        description=f"Search the web and return crawled web pages as text or Markdown. {service.describe()}",
    )
    logger.info("Using search provider: %s", service.provider_type.value)
    return server


def run_stdio(settings: Settings) -> None:
    """Select the provider and serve the tool over stdio until stdin closes.

    Raises:
        ConfigurationError: If no provider can be selected.
    """
    service = WebSearchService(settings)
    create_server(service).run(transport="stdio")
