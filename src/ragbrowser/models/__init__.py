"""Data models — results, provider descriptors, requests and responses."""

from ragbrowser.models.provider import ProviderConfig, ProviderDescriptor, ProviderType
from ragbrowser.models.query import WebSearchRequest
from ragbrowser.models.result import SearchResult

__all__ = [
    "ProviderConfig",
    "ProviderDescriptor",
    "ProviderType",
    "SearchResult",
    "WebSearchRequest",
]
