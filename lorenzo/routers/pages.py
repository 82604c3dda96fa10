"""Static landing page and its loader animation."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(tags=["pages"])


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@router.get("/loader.gif", include_in_schema=False)
async def loader() -> FileResponse:
    return FileResponse(STATIC_DIR / "loader.gif", media_type="image/gif")
