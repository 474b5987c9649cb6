"""Response models — Serialized output of the HTTP and stdio front-ends.

Wire names are camelCase; serialize with ``by_alias=True, exclude_none=True``
so optional result fields are omitted rather than emitted as ``null``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ragbrowser.models.provider import ProviderType
from ragbrowser.models.result import SearchResult


class ToolSearchOutput(BaseModel):
    """Payload returned by the stdio ``search`` tool."""

    model_config = {"populate_by_name": True}

    query: str = Field(description="Query as received")
    max_results: int = Field(alias="maxResults", description="Requested result bound")
    total_results: int = Field(alias="totalResults", description="Number of results returned")
    results: list[SearchResult] = Field(default_factory=list, description="Normalized results")


class SearchResponse(ToolSearchOutput):
    """Successful ``POST /api/search`` response."""

    success: bool = Field(default=True)
    provider: ProviderType = Field(description="Provider that served the search")
    processing_time_ms: int = Field(alias="processingTimeMs", description="Wall time in ms")
    timestamp: str = Field(description="ISO-8601 completion time")


class ErrorDetail(BaseModel):
    """One request validation failure."""

    field: str
    message: str
    code: str


class ErrorResponse(BaseModel):
    """Error body returned by every HTTP endpoint."""

    model_config = {"populate_by_name": True}

    success: bool = Field(default=False)
    error: str = Field(description="Short error category")
    message: str | None = Field(default=None, description="Human-readable error message")
    details: list[ErrorDetail] | None = Field(default=None, description="Validation failures")
    processing_time_ms: int | None = Field(default=None, alias="processingTimeMs")
    timestamp: str | None = Field(default=None)
    available_endpoints: list[str] | None = Field(default=None, alias="availableEndpoints")


class ProviderStatus(BaseModel):
    """Provider availability as reported by ``GET /health``."""

    type: ProviderType
    available: bool
    configured: str = Field(description="Check mark for configured providers, cross otherwise")


class ServerInfo(BaseModel):
    mode: str = Field(default="HTTP")
    version: str
    uptime: float = Field(description="Seconds since the application started")


class HealthResponse(BaseModel):
    """``GET /health`` response."""

    model_config = {"populate_by_name": True}

    status: str = Field(default="OK")
    timestamp: str
    active_provider: ProviderType = Field(alias="activeProvider")
    available_providers: list[ProviderStatus] = Field(alias="availableProviders")
    server: ServerInfo


class InfoResponse(BaseModel):
    """``GET /api/info`` response (free-form endpoint documentation)."""

    name: str
    version: str
    description: str
    provider: ProviderType
    endpoints: list[dict[str, Any]]
    examples: dict[str, Any]
