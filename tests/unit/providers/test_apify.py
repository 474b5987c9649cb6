"""Tests for the Apify RAG Web Browser provider."""

from __future__ import annotations

import json
import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from ragbrowser.providers.apify.adapter import (
    ApifyProvider,
    EmptyPayload,
    HitArray,
    SingleHit,
    WrappedResults,
    classify_payload,
    payload_hits,
)
from ragbrowser.providers.base.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    NotInitializedError,
    UpstreamError,
)

# ── Helpers ──


def _ok_response(text: str) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.text = text
    response.raise_for_status = MagicMock()
    return response


def _error_response(status_code: int, reason: str) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = reason
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        f"{status_code} {reason}", request=MagicMock(), response=response
    )
    return response


async def _provider(**kwargs: Any) -> ApifyProvider:
    p = ApifyProvider(api_token="apify-test-token", **kwargs)
    await p.initialize()
    return p


# ── Tests: payload classification ──


class TestClassifyPayload:
    def test_array(self, apify_hit: dict) -> None:
        payload = classify_payload([apify_hit])
        assert isinstance(payload, HitArray)
        assert payload_hits(payload) == [apify_hit]

    def test_wrapped(self, apify_hit: dict) -> None:
        payload = classify_payload({"results": [apify_hit]})
        assert isinstance(payload, WrappedResults)
        assert payload_hits(payload) == [apify_hit]

    def test_single_hit_by_url(self) -> None:
        payload = classify_payload({"url": "https://example.com"})
        assert isinstance(payload, SingleHit)
        assert payload_hits(payload) == [{"url": "https://example.com"}]

    def test_single_hit_by_metadata(self) -> None:
        payload = classify_payload({"metadata": {"title": "T"}, "markdown": "x"})
        assert isinstance(payload, SingleHit)

    @pytest.mark.parametrize("data", [{}, {"error": "nothing"}, None, "text", 42])
    def test_unrecognized_is_empty(self, data: Any) -> None:
        payload = classify_payload(data)
        assert isinstance(payload, EmptyPayload)
        assert payload_hits(payload) == []

    def test_non_object_items_dropped(self, apify_hit: dict) -> None:
        assert payload_hits(classify_payload([apify_hit, "junk", 3, None])) == [apify_hit]


# ── Tests: lifecycle ──


class TestApifyLifecycle:
    def test_name(self) -> None:
        assert ApifyProvider(api_token="t").name == "apify"

    def test_missing_token_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="token is required"):
            ApifyProvider(api_token="")

    @pytest.mark.asyncio
    async def test_client_sends_bearer_token(self) -> None:
        p = await _provider()
        assert p._client is not None
        assert p._client.headers["Authorization"] == "Bearer apify-test-token"
        await p.shutdown()
        assert p._client is None

    @pytest.mark.asyncio
    async def test_search_not_initialized_raises(self) -> None:
        with pytest.raises(NotInitializedError):
            await ApifyProvider(api_token="t").search_web("q", 1)


# ── Tests: search request ──


class TestApifySearch:
    @pytest.mark.asyncio
    async def test_query_parameters(self, apify_hit: dict) -> None:
        p = await _provider(scraping_tool="browser-playwright", output_formats=["markdown", "text"])
        p._client.get = AsyncMock(return_value=_ok_response(json.dumps([apify_hit])))  # type: ignore[union-attr]

        await p.search_web("https://example.com", 2)

        call = p._client.get.call_args  # type: ignore[union-attr]
        assert call.args[0] == "https://rag-web-browser.apify.actor/search"
        params = call.kwargs["params"]
        assert params["query"] == "https://example.com"
        assert params["maxResults"] == 2
        assert params["scrapingTool"] == "browser-playwright"
        assert params["outputFormats"] == ["markdown", "text"]
        assert params["requestTimeoutSecs"] == 40
        assert "timeout" not in call.kwargs
        await p.shutdown()

    @pytest.mark.asyncio
    async def test_timeout_forwarded(self, apify_hit: dict) -> None:
        p = await _provider()
        p._client.get = AsyncMock(return_value=_ok_response(json.dumps([apify_hit])))  # type: ignore[union-attr]

        await p.search_web("q", 1, timeout=15.0)

        call = p._client.get.call_args  # type: ignore[union-attr]
        assert call.kwargs["timeout"] == 15.0
        assert call.kwargs["params"]["requestTimeoutSecs"] == 15
        await p.shutdown()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("shape", ["array", "wrapped", "single"])
    async def test_every_shape_yields_same_results(self, apify_hit: dict, shape: str) -> None:
        # a lone hit is only recognized by title, url or metadata
        single = dict(apify_hit, url="https://example.com/")
        body = {"array": [apify_hit], "wrapped": {"results": [apify_hit]}, "single": single}[shape]
        p = await _provider()
        p._client.get = AsyncMock(return_value=_ok_response(json.dumps(body)))  # type: ignore[union-attr]

        results = await p.search_web("example", 1)

        assert len(results) == 1
        assert results[0].title == "Example Domain"
        assert results[0].url == "https://example.com/"
        assert results[0].content == "This domain is for use in illustrative examples."
        assert results[0].markdown.startswith("# Example Domain")
        await p.shutdown()

    @pytest.mark.asyncio
    async def test_does_not_truncate_upstream(self, apify_hit: dict) -> None:
        p = await _provider()
        body = json.dumps([apify_hit, apify_hit, apify_hit])
        p._client.get = AsyncMock(return_value=_ok_response(body))  # type: ignore[union-attr]

        results = await p.search_web("q", 1)

        assert len(results) == 3
        await p.shutdown()

    @pytest.mark.asyncio
    async def test_invalid_json_returns_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        p = await _provider()
        p._client.get = AsyncMock(return_value=_ok_response("<html>oops</html>"))  # type: ignore[union-attr]

        with caplog.at_level(logging.WARNING, logger="ragbrowser.providers.apify.adapter"):
            results = await p.search_web("q", 1)

        assert results == []
        assert "Error parsing Apify response" in caplog.text
        await p.shutdown()

    @pytest.mark.asyncio
    async def test_invalid_json_strict_raises(self) -> None:
        p = await _provider(strict_parsing=True)
        p._client.get = AsyncMock(return_value=_ok_response("not json"))  # type: ignore[union-attr]

        with pytest.raises(MalformedResponseError, match="malformed JSON"):
            await p.search_web("q", 1)
        await p.shutdown()

    @pytest.mark.asyncio
    async def test_shape_recorded_in_metadata(self, apify_hit: dict) -> None:
        p = await _provider()
        body = json.dumps({"results": [apify_hit]})
        p._client.get = AsyncMock(return_value=_ok_response(body))  # type: ignore[union-attr]

        raw = await p.search("q", 1)

        assert raw.metadata == {"query": "q", "shape": "wrapped"}
        await p.shutdown()


# ── Tests: errors ──


class TestApifyErrors:
    @pytest.mark.asyncio
    async def test_503_raises_upstream_error(self) -> None:
        p = await _provider()
        p._client.get = AsyncMock(  # type: ignore[union-attr]
            return_value=_error_response(503, "Service Unavailable")
        )

        with pytest.raises(UpstreamError, match="503 Service Unavailable") as exc_info:
            await p.search_web("q", 1)

        assert exc_info.value.status_code == 503
        assert str(exc_info.value).startswith("Failed to call RAG Web Browser")
        await p.shutdown()

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        p = await _provider()
        p._client.get = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))  # type: ignore[union-attr]

        with pytest.raises(UpstreamError, match="request failed"):
            await p.search_web("q", 1)
        await p.shutdown()

    def test_malformed_is_an_upstream_error(self) -> None:
        assert issubclass(MalformedResponseError, UpstreamError)


# ── Tests: normalization ──


class TestApifyMapping:
    def test_alternate_key_names(self, apify_hit: dict) -> None:
        result = ApifyProvider(api_token="t").map_to_search_result(apify_hit)

        assert result.title == "Example Domain"
        assert result.url == "https://example.com/"
        assert result.published_date == "2024-01-01"
        assert result.score == 1.0

    def test_metadata_and_search_result_fallbacks(self) -> None:
        hit = {
            "metadata": {"title": "From metadata", "url": "https://meta.example"},
            "searchResult": {"url": "https://serp.example", "description": "Snippet from SERP"},
            "markdown": "# Body",
        }
        result = ApifyProvider(api_token="t").map_to_search_result(hit)

        assert result.title == "From metadata"
        assert result.url == "https://meta.example"
        assert result.content == "Snippet from SERP"
        assert result.markdown == "# Body"

    def test_search_result_url_used_last(self) -> None:
        hit = {"searchResult": {"url": "https://serp.example"}}
        result = ApifyProvider(api_token="t").map_to_search_result(hit)
        assert result.url == "https://serp.example"
        assert result.title == "Untitled"

    def test_markdown_falls_back_to_text(self) -> None:
        result = ApifyProvider(api_token="t").map_to_search_result({"url": "https://x", "text": "plain"})
        assert result.markdown == "plain"
        assert result.content == "plain"

    def test_score_preferred_over_rank(self) -> None:
        result = ApifyProvider(api_token="t").map_to_search_result({"url": "https://x", "score": 0.4, "rank": 2})
        assert result.score == 0.4

    def test_non_numeric_score_dropped(self) -> None:
        result = ApifyProvider(api_token="t").map_to_search_result({"url": "https://x", "score": "high"})
        assert result.score is None

    def test_non_text_fields_are_stringified(self) -> None:
        result = ApifyProvider(api_token="t").map_to_search_result({"url": 12345, "title": 42, "text": 7})
        assert result.title == "42"
        assert result.url == "12345"
        assert result.content == "7"
        assert result.markdown == "7"

    @pytest.mark.asyncio
    async def test_non_text_fields_do_not_fail_search(self) -> None:
        p = await _provider()
        body = json.dumps([{"url": "https://x", "title": 42}])
        p._client.get = AsyncMock(return_value=_ok_response(body))  # type: ignore[union-attr]

        results = await p.search_web("q", 1)

        assert results[0].title == "42"
        await p.shutdown()
