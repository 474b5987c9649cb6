"""API Router — Search, health and info endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ragbrowser.api.endpoints.health import router as health_router
from ragbrowser.api.endpoints.info import router as info_router
from ragbrowser.api.endpoints.search import router as search_router

router = APIRouter()
router.include_router(search_router)
router.include_router(health_router)
router.include_router(info_router)
