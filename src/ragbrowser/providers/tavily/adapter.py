"""Tavily provider — Web search with raw page content via the Tavily REST API.

API reference:
  POST /search
    {"api_key": ..., "query": ..., "search_depth": "basic" | "advanced",
     "include_answer": bool, "include_raw_content": bool, "max_results": int,
     "include_domains": [...], "exclude_domains": [...]}
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ragbrowser.core.markdown import html_to_markdown
from ragbrowser.models.provider import ProviderType
from ragbrowser.models.result import SearchResult
from ragbrowser.providers.base.adapter import RawResults, SearchProvider
from ragbrowser.providers.base.exceptions import ConfigurationError, NotInitializedError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_DOMAINS = ["facebook.com", "twitter.com", "instagram.com"]


class TavilyProvider(SearchProvider):
    """Search provider for the Tavily API.

    Hits carry a snippet (``content``) and, because ``include_raw_content`` is
    requested, the page body (``raw_content``) which is rewritten to Markdown.

    Args:
        api_key: Tavily API key.
        base_url: Tavily API base URL.
        search_depth: ``"basic"`` or ``"advanced"``.
        exclude_domains: Domains never returned (social networks by default).
        include_domains: Domains to restrict the search to (empty = no restriction).
        timeout: Default HTTP timeout in seconds.
    """

    provider_type = ProviderType.TAVILY

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.tavily.com",
        search_depth: str = "advanced",
        exclude_domains: list[str] | None = None,
        include_domains: list[str] | None = None,
        timeout: float = 40.0,
        **kwargs: Any,
    ) -> None:
        if not api_key:
            raise ConfigurationError("Tavily API key is required")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._search_depth = search_depth
        self._exclude_domains = list(DEFAULT_EXCLUDE_DOMAINS if exclude_domains is None else exclude_domains)
        self._include_domains = list(include_domains or [])
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=self._timeout,
        )
        logger.info("Tavily provider initialized (search_depth: %s)", self._search_depth)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search(self, query: str, max_results: int, *, timeout: float | None = None) -> RawResults:
        """Execute a search against ``POST /search``."""
        body = {
            "api_key": self._api_key,
            "query": query,
            "search_depth": self._search_depth,
            "include_answer": True,
            "include_raw_content": True,
            "max_results": max_results,
            "include_domains": self._include_domains,
            "exclude_domains": self._exclude_domains,
        }

        start = time.monotonic()
        data = await self._post_search(body, timeout)
        took_ms = int((time.monotonic() - start) * 1000)

        results = data.get("results") or []
        hits = [hit for hit in results if isinstance(hit, dict)]

        logger.debug("Tavily search: query=%s, results=%d, took=%dms", query, len(hits), took_ms)

        return RawResults(
            hits=hits,
            metadata={
                "query": data.get("query", query),
                "answer": data.get("answer"),
                "response_time": data.get("response_time"),
                "follow_up_questions": data.get("follow_up_questions"),
            },
            took_ms=took_ms,
        )

    async def quick_answer(self, query: str) -> str:
        """Return Tavily's generated short answer for *query*.

        Runs a basic-depth search without raw content and keeps only ``answer``.
        """
        body = {
            "api_key": self._api_key,
            "query": query,
            "search_depth": "basic",
            "include_answer": True,
            "include_raw_content": False,
            "max_results": 3,
        }
        data = await self._post_search(body, None)
        return data.get("answer") or "No answer available"

    async def _post_search(self, body: dict[str, Any], timeout: float | None) -> dict[str, Any]:
        if not self._client:
            raise NotInitializedError("Tavily client not initialized.")

        # httpx treats timeout=None as "no timeout", so only pass an explicit value
        request_kwargs: dict[str, Any] = {} if timeout is None else {"timeout": timeout}
        try:
            response = await self._client.post("/search", json=body, **request_kwargs)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Tavily API error: {e.response.status_code} - {e.response.text[:200]}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(f"Tavily request failed: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Tavily returned an invalid JSON body: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamError(f"Tavily returned an unexpected body of type {type(data).__name__}")
        return data

    def map_to_search_result(self, raw_hit: dict[str, Any]) -> SearchResult:
        """Map a Tavily hit to ``SearchResult``; raw content becomes Markdown."""
        content = raw_hit.get("content") or ""
        return SearchResult(
            title=raw_hit.get("title") or "Untitled",
            url=raw_hit.get("url") or "",
            content=content,
            markdown=html_to_markdown(str(raw_hit.get("raw_content") or content)),
            published_date=raw_hit.get("published_date"),
            score=raw_hit.get("score"),
        )
