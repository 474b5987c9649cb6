"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from ragbrowser.core.service import WebSearchService

# Global service instance (set during application lifespan)
_service: WebSearchService | None = None


def set_service(service: WebSearchService | None) -> None:
    """Set the global service instance (called during app lifespan)."""
    global _service
    _service = service


def get_service() -> WebSearchService:
    """Get the global web search service.

    Raises:
        RuntimeError: If the service is not initialized.
    """
    if _service is None:
        raise RuntimeError("Web search service not initialized. Is the server running?")
    return _service
