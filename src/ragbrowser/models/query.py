"""Web search request model shared by the HTTP and stdio front-ends."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_MAX_RESULTS = 1
DEFAULT_TIMEOUT_SECS = 40

ScrapingTool = Literal["browser-playwright", "raw-http"]
OutputFormat = Literal["text", "markdown", "html"]


class WebSearchRequest(BaseModel):
    """Incoming web search request.

    Field names on the wire are camelCase (``maxResults``); snake_case names are
    accepted as well.
    """

    model_config = {"populate_by_name": True}

    query: str = Field(
        min_length=1,
        pattern=r"\S",
        description=(
            "Search keywords or the URL of a specific web page. Keywords may include "
            'advanced search operators, e.g. "san francisco weather", "https://www.cnn.com", '
            '"function calling site:openai.com"'
        ),
    )
    max_results: int = Field(
        default=DEFAULT_MAX_RESULTS,
        ge=1,
        le=100,
        alias="maxResults",
        description=(
            "Maximum number of top organic results whose pages are extracted. "
            "Ignored by the provider when query is a URL."
        ),
    )
    scraping_tool: ScrapingTool = Field(
        default="raw-http",
        alias="scrapingTool",
        description="Scraping tool: the browser handles JavaScript-heavy sites, raw HTTP is faster",
    )
    output_formats: list[OutputFormat] = Field(
        default_factory=lambda: ["markdown"],
        alias="outputFormats",
        description="Formats the target pages are extracted to",
    )
    request_timeout_secs: int = Field(
        default=DEFAULT_TIMEOUT_SECS,
        ge=1,
        le=300,
        alias="requestTimeoutSecs",
        description="Maximum time in seconds for the whole upstream request",
    )
