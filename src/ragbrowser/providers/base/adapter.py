"""Base search provider — Abstract interface for all web search providers.

Every provider must implement this interface to back the web search service.
The provider is responsible for:
  1. Building the outbound request to its external API
  2. Turning non-success upstream answers into ``UpstreamError``
  3. Mapping raw hits to the common ``SearchResult`` schema
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, Field

from ragbrowser.models.provider import ProviderType
from ragbrowser.models.result import SearchResult


class RawResults(BaseModel):
    """Raw hits from a provider before normalization."""

    hits: list[dict[str, Any]] = Field(default_factory=list, description="Raw hit dicts, in upstream order")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Provider-specific metadata")
    took_ms: int = Field(default=0, description="Upstream call time in ms")


class SearchProvider(ABC):
    """Abstract base class for web search providers.

    All providers must implement:
      - search(): Execute one upstream call and return raw hits
      - map_to_search_result(): Normalize one raw hit

    A single instance is shared by every concurrent request for the lifetime
    of the process, so implementations must not keep per-call state on
    ``self``. The pooled HTTP client is created in ``initialize()``.
    """

    provider_type: ClassVar[ProviderType]

    @property
    def name(self) -> str:
        """Provider identifier (e.g. 'tavily')."""
        return self.provider_type.value

    @abstractmethod
    async def initialize(self) -> None:
        """Create the HTTP client. Called once during startup."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the HTTP client. Called once during shutdown."""

    @abstractmethod
    async def search(self, query: str, max_results: int, *, timeout: float | None = None) -> RawResults:
        """Execute one search call against the provider.

        Args:
            query: Search phrase or literal URL; interpretation is left to the provider.
            max_results: Upper bound passed to the provider. Larger upstream
                responses are not truncated.
            timeout: Per-call timeout in seconds. ``None`` uses the client default.

        Returns:
            Raw hits in upstream order.

        Raises:
            UpstreamError: On a non-success status or a transport failure.
        """

    @abstractmethod
    def map_to_search_result(self, raw_hit: dict[str, Any]) -> SearchResult:
        """Map one raw provider hit to a ``SearchResult``."""

    async def search_web(self, query: str, max_results: int = 5, *, timeout: float | None = None) -> list[SearchResult]:
        """Search and normalize results in one step.

        Args:
            query: Search phrase or literal URL.
            max_results: Upper bound passed to the provider.
            timeout: Per-call timeout in seconds.

        Returns:
            Normalized results, in the order the provider returned them.
        """
        raw = await self.search(query, max_results, timeout=timeout)
        return [self.map_to_search_result(hit) for hit in raw.hits]
