"""Base provider interface — Abstract classes, errors and selection."""

from ragbrowser.providers.base.adapter import RawResults, SearchProvider
from ragbrowser.providers.base.selector import ProviderSelector

__all__ = ["ProviderSelector", "RawResults", "SearchProvider"]
