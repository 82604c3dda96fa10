"""
Lorenzo — FastAPI application entry point.
Lifespan: log configuration, warn when API_KEY is missing, ensure UPLOAD_DIR.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lorenzo import __version__
from lorenzo.config import settings
from lorenzo.exceptions import LorenzoError
from lorenzo.routers import chat, health, pages, upload
from lorenzo.services.pdf_text import too_large

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Report the configured model.
    2. Warn (but keep serving) when API_KEY is absent.
    3. Create the upload staging directory.
    """
    logger.info(
        "Starting Lorenzo (env=%s, model=%s)", settings.app_env, settings.gemini_model
    )
    if not settings.api_key:
        logger.warning("API_KEY is not set; /chat will fail until it is configured.")

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    yield

    logger.info("Shutting down Lorenzo.")


app = FastAPI(
    title="Lorenzo",
    description="Career-guidance chat relay in front of Google Gemini, with PDF context upload.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(pages.router)
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(upload.router)


# ── Upload size guard ────────────────────────────────────────────────────────

# Room for multipart boundaries and part headers around the file itself.
_MULTIPART_OVERHEAD = 16 * 1024


@app.middleware("http")
async def reject_oversized_uploads(request: Request, call_next):
    """Refuse an /upload-pdf body by its Content-Length, before it is read."""
    if request.method == "POST" and request.url.path == "/upload-pdf":
        declared = request.headers.get("content-length", "")
        limit = settings.max_upload_bytes
        if declared.isdigit() and int(declared) > limit + _MULTIPART_OVERHEAD:
            logger.info("Rejected /upload-pdf: Content-Length %s over limit", declared)
            return JSONResponse(
                status_code=413,
                content={"error": too_large(limit).public_message},
            )
    return await call_next(request)


# ── Exception handlers ───────────────────────────────────────────────────────

@app.exception_handler(LorenzoError)
async def lorenzo_error_handler(request: Request, exc: LorenzoError) -> JSONResponse:
    """Map the error taxonomy onto {"error": ...} bodies."""
    if exc.status_code >= 500:
        logger.error("Error in %s %s: %s", request.method, request.url.path, exc)
    else:
        logger.info(
            "Rejected %s %s: %s", request.method, request.url.path, exc.public_message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.public_message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are client errors: 400, not FastAPI's default 422."""
    logger.info("Invalid body on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a generic error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error"},
    )


def run() -> None:
    """Console entry point: serve on 0.0.0.0:PORT."""
    logger.info("Server listening on port %d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
