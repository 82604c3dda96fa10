"""Health check endpoints — used by load balancers and uptime monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from lorenzo import __version__
from lorenzo.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe — returns 200 if the process is running."""
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def ready() -> JSONResponse:
    """
    Readiness probe. The process serves model replies only with API_KEY set.
    Returns 200 with {"api_key": "ok"}, or 503 with {"api_key": "missing"}.
    """
    if settings.api_key:
        return JSONResponse(content={"api_key": "ok"}, status_code=200)
    logger.warning("Readiness check: API_KEY is not configured")
    return JSONResponse(content={"api_key": "missing"}, status_code=503)
