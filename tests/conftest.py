"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from ragbrowser.config.settings import Settings
from ragbrowser.core.service import WebSearchService
from ragbrowser.models.provider import ProviderType
from ragbrowser.models.result import SearchResult
from ragbrowser.providers.base.adapter import RawResults, SearchProvider


class StubProvider(SearchProvider):
    """In-memory provider returning canned hits (or raising a canned error)."""

    provider_type = ProviderType.TAVILY

    def __init__(self, hits: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.hits = hits or []
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.initialized = False

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.initialized = False

    async def search(self, query: str, max_results: int, *, timeout: float | None = None) -> RawResults:
        self.calls.append({"query": query, "max_results": max_results, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return RawResults(hits=self.hits)

    def map_to_search_result(self, raw_hit: dict[str, Any]) -> SearchResult:
        return SearchResult(**raw_hit)


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with only Tavily configured."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        search_provider="tavily",
        tavily_api_key="tvly-test-key",
        apify_token="",
    )


@pytest.fixture
def stub_hits() -> list[dict[str, Any]]:
    return [
        {
            "title": "AI in 2024",
            "url": "https://example.com/ai-2024",
            "content": "A look back at AI in 2024.",
            "markdown": "# AI in 2024",
            "score": 0.97,
        },
        {
            "title": "Second result",
            "url": "https://example.com/second",
            "content": "More.",
            "markdown": "More.",
        },
    ]


@pytest.fixture
def stub_provider(stub_hits: list[dict[str, Any]]) -> StubProvider:
    return StubProvider(hits=stub_hits)


@pytest.fixture
def service(settings: Settings, stub_provider: StubProvider) -> WebSearchService:
    """Service wired to the stub provider instead of a real upstream."""
    return WebSearchService(settings, provider=stub_provider)


@pytest.fixture
def tavily_response() -> dict[str, Any]:
    """Sample Tavily /search response for "artificial intelligence 2024"."""
    return {
        "answer": "AI in 2024 was dominated by large multimodal models.",
        "query": "artificial intelligence 2024",
        "response_time": 1.42,
        "images": [],
        "follow_up_questions": None,
        "results": [
            {
                "title": "The state of AI in 2024",
                "url": "https://example.com/state-of-ai-2024",
                "content": "Generative AI adoption jumped in 2024.",
                "raw_content": "<h1>The state of AI</h1><p>Adoption <b>jumped</b> in 2024.</p>",
                "published_date": "2024-05-30",
                "score": 0.98,
            },
            {
                "title": "AI Index Report 2024",
                "url": "https://example.com/ai-index-2024",
                "content": "The AI Index tracks AI progress.",
                "raw_content": None,
                "score": 0.91,
            },
            {
                "title": "",
                "url": "https://example.com/untitled",
                "content": "Untitled page about AI regulation.",
                "score": 0.5,
            },
        ],
    }


@pytest.fixture
def apify_hit() -> dict[str, Any]:
    """One RAG Web Browser hit using the alternate key names."""
    return {
        "name": "Example Domain",
        "link": "https://example.com/",
        "text": "This domain is for use in illustrative examples.",
        "markdown": "# Example Domain\n\nThis domain is for use in illustrative examples.",
        "date": "2024-01-01",
        "rank": 1,
    }


@pytest.fixture
def make_provider() -> type[StubProvider]:
    """Factory for stub providers with custom hits or a canned error."""
    return StubProvider
