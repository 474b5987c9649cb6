"""Provider-specific exceptions."""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for provider errors."""


class ConfigurationError(ProviderError):
    """Raised when no provider can be configured (missing credentials, unknown name)."""


class NotInitializedError(ProviderError):
    """Raised when a provider is used before ``initialize()`` was awaited."""


class UpstreamError(ProviderError):
    """Raised when the upstream provider call fails.

    ``status_code`` is set when the provider answered with a non-success
    HTTP status and is ``None`` for transport failures (DNS, timeouts, resets).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(UpstreamError):
    """Raised when the upstream body cannot be parsed and strict parsing is on."""
