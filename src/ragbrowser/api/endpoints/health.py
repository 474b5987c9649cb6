"""Health check endpoint — Active provider and credential status."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from ragbrowser import __version__
from ragbrowser.api.deps import get_service
from ragbrowser.core.service import WebSearchService
from ragbrowser.models.response import HealthResponse, ProviderStatus, ServerInfo

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_by_alias=True,
    summary="Health Check",
    description="Returns the active provider and whether each provider has its credential configured.",
)
async def health_check(
    service: WebSearchService = Depends(get_service),
) -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(UTC).isoformat(),
        active_provider=service.provider_type,
        available_providers=[
            ProviderStatus(type=d.type, available=d.available, configured="✅" if d.available else "❌")
            for d in service.available_providers()
        ],
        server=ServerInfo(version=__version__, uptime=service.uptime),
    )
