"""Provider models — Identifiers, availability descriptors and selection config."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ProviderType(str, Enum):
    """Known search providers, in fallback order."""

    TAVILY = "tavily"
    APIFY = "apify"

    @classmethod
    def parse(cls, value: str | None) -> ProviderType | None:
        """Case-insensitive lookup; returns None for empty or unknown names."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


# Environment variable holding each provider's single required credential.
CREDENTIAL_ENV: dict[ProviderType, str] = {
    ProviderType.TAVILY: "TAVILY_API_KEY",
    ProviderType.APIFY: "APIFY_TOKEN",
}


class ProviderDescriptor(BaseModel):
    """Configuration state of one provider."""

    type: ProviderType = Field(description="Provider identifier")
    available: bool = Field(description="True iff the provider's credential is set")
    reason: str | None = Field(default=None, description="Why the provider is unavailable")


class ProviderConfig(BaseModel):
    """Everything the selector needs, read once at the bootstrap boundary.

    Example:
        >>> config = ProviderConfig(
        ...     configured="tavily",
        ...     credentials={ProviderType.TAVILY: "tvly-..."},
        ... )
    """

    configured: str | None = Field(default=None, description="Requested provider name (case-insensitive)")
    credentials: dict[ProviderType, str] = Field(
        default_factory=dict,
        description="Credential per provider; missing or empty means unavailable",
    )
    options: dict[ProviderType, dict[str, Any]] = Field(
        default_factory=dict,
        description="Extra constructor kwargs per provider (base URL, timeouts, ...)",
    )

    def credential(self, provider_type: ProviderType) -> str:
        return self.credentials.get(provider_type) or ""
