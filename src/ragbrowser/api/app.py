"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ragbrowser import __version__
from ragbrowser.api.deps import set_service
from ragbrowser.api.endpoints.info import AVAILABLE_ENDPOINTS
from ragbrowser.api.router import router
from ragbrowser.config.settings import Settings
from ragbrowser.core.service import WebSearchService
from ragbrowser.models.response import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The search provider is selected when the lifespan starts; a
    ``ConfigurationError`` there aborts startup.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # Auto-detect ragbrowser-config.yaml if present
        yaml_path = Path("ragbrowser-config.yaml")
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting RAG Web Browser v%s", __version__)

        service = WebSearchService(settings)
        await service.initialize()
        set_service(service)

        app.state.settings = settings
        app.state.service = service

        logger.info(
            "Ready on %s:%d (provider: %s)",
            settings.server.host,
            settings.server.port,
            service.provider_type.value,
        )
        yield

        logger.info("Shutting down...")
        await service.shutdown()
        set_service(None)
        logger.info("Shutdown complete")

    app = FastAPI(
        title="RAG Web Browser",
        description="Web search and content extraction for RAG pipelines and AI agents.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )

    app.include_router(router)

    # ── Error handlers ──────────────────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            ErrorDetail(
                field=".".join(str(part) for part in err["loc"] if part != "body"),
                message=err["msg"],
                code=err["type"],
            )
            for err in exc.errors()
        ]
        body = ErrorResponse(error="Invalid request parameters", details=details)
        return JSONResponse(status_code=400, content=body.model_dump(by_alias=True, exclude_none=True))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            body = ErrorResponse(
                error="Endpoint not found",
                message=f"The endpoint {request.method} {request.url.path} does not exist",
                available_endpoints=AVAILABLE_ENDPOINTS,
            )
        else:
            body = ErrorResponse(error=str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True, exclude_none=True))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error: %s", exc, exc_info=exc)
        body = ErrorResponse(
            error="Internal server error",
            message=str(exc) if settings.debug else "Something went wrong",
        )
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True, exclude_none=True))

    return app
