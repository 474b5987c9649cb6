"""Web search service — Holds the active provider for the process lifetime.

Both front-ends (HTTP API and stdio tool server) talk to a single
``WebSearchService``. The provider is chosen and constructed when the service
is created, so a missing credential fails at startup rather than on the first
request:

  Settings → ProviderConfig → [Selector] → provider type
           → [Selector.instantiate] → SearchProvider
           → initialize() → search_web() per request → shutdown()
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ragbrowser.models.provider import ProviderDescriptor
from ragbrowser.models.query import WebSearchRequest
from ragbrowser.models.result import SearchResult
from ragbrowser.providers.base.selector import ProviderSelector

if TYPE_CHECKING:
    from ragbrowser.config.settings import Settings
    from ragbrowser.providers.base.adapter import SearchProvider

logger = logging.getLogger(__name__)


class WebSearchService:
    """Process-wide web search facade.

    Attributes:
        settings: Application configuration.
        selector: Provider selector built from the settings.
        provider_type: Identifier of the active provider.
        provider: The active provider instance.

    Raises:
        ConfigurationError: On construction, if no provider can be selected.
    """

    def __init__(self, settings: Settings, provider: SearchProvider | None = None) -> None:
        self.settings = settings
        self.selector = ProviderSelector(settings.provider_config())
        if provider is None:
            self.provider_type = self.selector.resolve_configured()
            self.provider = self.selector.instantiate(self.provider_type)
        else:
            self.provider_type = provider.provider_type
            self.provider = provider
        self.started_at = time.monotonic()

    async def initialize(self) -> None:
        """Open the provider's HTTP client."""
        await self.provider.initialize()
        logger.info("Initialized search provider: %s", self.provider_type.value)

    async def shutdown(self) -> None:
        """Close the provider's HTTP client."""
        await self.provider.shutdown()
        logger.info("Search provider shut down")

    async def search(self, request: WebSearchRequest) -> list[SearchResult]:
        """Run one web search with the active provider.

        The request timeout is applied to the outbound call.

        Raises:
            UpstreamError: If the provider call fails.
        """
        logger.info("Searching for: %r (max_results: %d)", request.query, request.max_results)
        start = time.monotonic()
        results = await self.provider.search_web(
            request.query,
            request.max_results,
            timeout=float(request.request_timeout_secs),
        )
        logger.info(
            "Search completed in %dms, found %d results",
            int((time.monotonic() - start) * 1000),
            len(results),
        )
        return results

    def available_providers(self) -> list[ProviderDescriptor]:
        """Availability of every known provider."""
        return self.selector.list_available()

    def describe(self) -> str:
        """One-line summary of the active and known providers."""
        listing = ", ".join(
            f"{d.type.value}{'' if d.available else ' (not configured)'}" for d in self.available_providers()
        )
        return f"Currently using: {self.provider_type.value}. Available providers: {listing}"

    @property
    def uptime(self) -> float:
        return time.monotonic() - self.started_at
