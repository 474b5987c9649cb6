"""Apify provider — Search and scrape via the Apify RAG Web Browser actor.

The actor runs a Google search, scrapes the top pages and returns them as
text/Markdown. Its response shape is not stable across actor versions, so the
body is first classified into one of a closed set of payload variants before
any hit is read.

API reference:
  GET https://rag-web-browser.apify.actor/search
    ?query=<query>
    &maxResults=<n>
    &scrapingTool=<raw-http|browser-playwright>
    &outputFormats=<markdown|text|html>   (repeatable)
    &requestTimeoutSecs=<secs>
  Authorization: Bearer <token>
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Literal

import httpx
from pydantic import BaseModel, Field

from ragbrowser.models.provider import ProviderType
from ragbrowser.models.result import SearchResult
from ragbrowser.providers.base.adapter import RawResults, SearchProvider
from ragbrowser.providers.base.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    NotInitializedError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

# ── Payload variants ─────────────────────────────────────────────────────────


class HitArray(BaseModel):
    """Body is a bare JSON array of hits."""

    kind: Literal["array"] = "array"
    hits: list[dict[str, Any]] = Field(default_factory=list)


class WrappedResults(BaseModel):
    """Body is an object carrying the hits under ``results``."""

    kind: Literal["wrapped"] = "wrapped"
    hits: list[dict[str, Any]] = Field(default_factory=list)


class SingleHit(BaseModel):
    """Body is one hit object."""

    kind: Literal["single"] = "single"
    hit: dict[str, Any]


class EmptyPayload(BaseModel):
    """Body carries nothing recognizable as a hit."""

    kind: Literal["empty"] = "empty"


ApifyPayload = HitArray | WrappedResults | SingleHit | EmptyPayload


def classify_payload(data: Any) -> ApifyPayload:
    """Tag a decoded response body with the shape it has."""
    if isinstance(data, list):
        return HitArray(hits=[hit for hit in data if isinstance(hit, dict)])
    if isinstance(data, dict):
        results = data.get("results")
        if isinstance(results, list):
            return WrappedResults(hits=[hit for hit in results if isinstance(hit, dict)])
        if data.get("title") or data.get("url") or isinstance(data.get("metadata"), dict):
            return SingleHit(hit=data)
    return EmptyPayload()


def payload_hits(payload: ApifyPayload) -> list[dict[str, Any]]:
    """Flatten any payload variant into the hit list."""
    match payload:
        case HitArray(hits=hits) | WrappedResults(hits=hits):
            return hits
        case SingleHit(hit=hit):
            return [hit]
        case EmptyPayload():
            return []


# ── Provider ─────────────────────────────────────────────────────────────────


class ApifyProvider(SearchProvider):
    """Search provider for the Apify RAG Web Browser.

    Args:
        api_token: Apify API token, sent as a bearer credential.
        base_url: Actor search endpoint.
        scraping_tool: ``"raw-http"`` (fast) or ``"browser-playwright"`` (JavaScript).
        output_formats: Formats the actor extracts pages to.
        request_timeout_secs: Upstream time budget forwarded to the actor.
        strict_parsing: Raise ``MalformedResponseError`` on an undecodable body
            instead of returning no results.
        timeout: Default HTTP timeout in seconds.
    """

    provider_type = ProviderType.APIFY

    def __init__(
        self,
        api_token: str,
        base_url: str = "https://rag-web-browser.apify.actor/search",
        scraping_tool: str = "raw-http",
        output_formats: list[str] | None = None,
        request_timeout_secs: int = 40,
        strict_parsing: bool = False,
        timeout: float = 40.0,
        **kwargs: Any,
    ) -> None:
        if not api_token:
            raise ConfigurationError("Apify API token is required")
        self._api_token = api_token
        self._base_url = base_url
        self._scraping_tool = scraping_tool
        self._output_formats = list(output_formats or ["markdown"])
        self._request_timeout_secs = request_timeout_secs
        self._strict_parsing = strict_parsing
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self._api_token}",
                "Accept": "application/json",
            },
            timeout=self._timeout,
        )
        logger.info("Apify provider initialized (scraping_tool: %s)", self._scraping_tool)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search(self, query: str, max_results: int, *, timeout: float | None = None) -> RawResults:
        """Execute a search against the RAG Web Browser endpoint.

        When *timeout* is given it is used both as the HTTP timeout and as the
        actor's ``requestTimeoutSecs`` budget.
        """
        if not self._client:
            raise NotInitializedError("Apify client not initialized.")

        params: dict[str, Any] = {
            "query": query,
            "maxResults": max_results,
            "scrapingTool": self._scraping_tool,
            "outputFormats": self._output_formats,
            "requestTimeoutSecs": int(timeout) if timeout is not None else self._request_timeout_secs,
        }
        request_kwargs: dict[str, Any] = {} if timeout is None else {"timeout": timeout}

        try:
            start = time.monotonic()
            response = await self._client.get(self._base_url, params=params, **request_kwargs)
            response.raise_for_status()
            took_ms = int((time.monotonic() - start) * 1000)
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Failed to call RAG Web Browser: {e.response.status_code} {e.response.reason_phrase}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(f"RAG Web Browser request failed: {e}") from e

        payload = self.parse_payload(response.text)
        hits = payload_hits(payload)

        logger.debug(
            "Apify search: query=%s, shape=%s, results=%d, took=%dms",
            query,
            payload.kind,
            len(hits),
            took_ms,
        )

        return RawResults(hits=hits, metadata={"query": query, "shape": payload.kind}, took_ms=took_ms)

    def parse_payload(self, body: str) -> ApifyPayload:
        """Decode and classify a response body.

        An undecodable body is reported as ``EmptyPayload`` (so the search
        yields no results) unless strict parsing is enabled.

        Raises:
            MalformedResponseError: If the body is not JSON and strict parsing is on.
        """
        try:
            data = json.loads(body)
        except ValueError as e:
            if self._strict_parsing:
                raise MalformedResponseError(f"RAG Web Browser returned malformed JSON: {e}") from e
            logger.warning("Error parsing Apify response, returning no results: %s", e)
            return EmptyPayload()
        return classify_payload(data)

    def map_to_search_result(self, raw_hit: dict[str, Any]) -> SearchResult:
        """Map an actor hit to ``SearchResult``, trying each known key name in turn."""
        metadata = raw_hit.get("metadata") if isinstance(raw_hit.get("metadata"), dict) else {}
        search_result = raw_hit.get("searchResult") if isinstance(raw_hit.get("searchResult"), dict) else {}

        score = raw_hit.get("score")
        if score is None:
            score = raw_hit.get("rank")

        return SearchResult(
            title=raw_hit.get("title") or raw_hit.get("name") or metadata.get("title") or "Untitled",
            url=raw_hit.get("url") or raw_hit.get("link") or metadata.get("url") or search_result.get("url") or "",
            content=raw_hit.get("text") or raw_hit.get("content") or search_result.get("description") or "",
            markdown=raw_hit.get("markdown") or raw_hit.get("text") or raw_hit.get("content") or "",
            published_date=raw_hit.get("publishedDate") or raw_hit.get("date"),
            score=score,
        )
