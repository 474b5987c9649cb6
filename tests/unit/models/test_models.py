"""Tests for request and result models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ragbrowser.models.provider import ProviderType
from ragbrowser.models.query import WebSearchRequest
from ragbrowser.models.result import SearchResult


class TestWebSearchRequest:
    def test_defaults(self) -> None:
        request = WebSearchRequest(query="ai")
        assert request.max_results == 1
        assert request.scraping_tool == "raw-http"
        assert request.output_formats == ["markdown"]
        assert request.request_timeout_secs == 40

    def test_wire_names(self) -> None:
        request = WebSearchRequest.model_validate(
            {"query": "ai", "maxResults": 5, "scrapingTool": "browser-playwright", "requestTimeoutSecs": 60}
        )
        assert request.max_results == 5
        assert request.scraping_tool == "browser-playwright"
        assert request.request_timeout_secs == 60

    @pytest.mark.parametrize("max_results", [1, 100])
    def test_max_results_bounds_inclusive(self, max_results: int) -> None:
        assert WebSearchRequest(query="ai", maxResults=max_results).max_results == max_results

    @pytest.mark.parametrize("query", ["", " ", "\t\n"])
    def test_blank_query_rejected(self, query: str) -> None:
        with pytest.raises(ValidationError):
            WebSearchRequest(query=query)


class TestSearchResult:
    def test_defaults(self) -> None:
        result = SearchResult()
        assert result.title == "Untitled"
        assert result.url == ""
        assert result.published_date is None
        assert result.score is None

    def test_serialization_omits_missing_optionals(self) -> None:
        dumped = SearchResult(title="T", url="https://x", published_date="2024-01-01").model_dump(
            by_alias=True, exclude_none=True
        )
        assert dumped["publishedDate"] == "2024-01-01"
        assert "score" not in dumped

    @pytest.mark.parametrize(("raw", "expected"), [(3, 3.0), (0.5, 0.5), ("0.5", None), (True, None), (None, None)])
    def test_score_kept_only_when_numeric(self, raw: object, expected: float | None) -> None:
        assert SearchResult(score=raw).score == expected

    def test_epoch_date_stringified(self) -> None:
        assert SearchResult(publishedDate=1704067200).published_date == "1704067200"


class TestProviderType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("tavily", ProviderType.TAVILY), (" APIFY ", ProviderType.APIFY), ("bing", None), ("", None), (None, None)],
    )
    def test_parse(self, value: str | None, expected: ProviderType | None) -> None:
        assert ProviderType.parse(value) == expected


class TestSearchResultText:
    def test_numbers_become_text(self) -> None:
        result = SearchResult(title=42, url=1, content=3.5, markdown=0)
        assert (result.title, result.url, result.content, result.markdown) == ("42", "1", "3.5", "0")

    def test_none_uses_defaults(self) -> None:
        result = SearchResult(title=None, url=None, content=None, markdown=None)
        assert result.title == "Untitled"
        assert result.url == ""
