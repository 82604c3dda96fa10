"""
PDF upload handling: type checks, scoped temp storage and text extraction.

The uploaded file is streamed to a temp file under UPLOAD_DIR inside
`stored_upload`, which deletes it on every exit path. Deletion failures are
logged and swallowed; they never reach the client.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import UploadFile
from pypdf import PdfReader

from lorenzo.exceptions import PayloadTooLarge, UpstreamFailure

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def is_pdf_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
    """Both the extension and the declared MIME type must say PDF."""
    ext = Path(filename or "").suffix.lower()
    mime = (content_type or "").lower()
    return ext == ".pdf" and "pdf" in mime


def format_size(n_bytes: int) -> str:
    """Human-readable size: "10MB", "1.5KB", "512 bytes"."""
    if n_bytes >= 1024 * 1024:
        return f"{n_bytes / (1024 * 1024):g}MB"
    if n_bytes >= 1024:
        return f"{n_bytes / 1024:g}KB"
    return f"{n_bytes} bytes"


def too_large(max_bytes: int) -> PayloadTooLarge:
    return PayloadTooLarge(f"File too large (limit {format_size(max_bytes)})")


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
        logger.debug("Uploaded file %s deleted.", path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.error("Error deleting uploaded file %s: %s", path, exc)


@asynccontextmanager
async def stored_upload(
    upload: UploadFile,
    upload_dir: str | os.PathLike,
    max_bytes: int,
) -> AsyncIterator[Path]:
    """
    Stream `upload` to a fresh temp file and yield its path.

    Raises PayloadTooLarge as soon as more than `max_bytes` have been read.
    The file is removed when the block exits, whether or not it raised.
    """
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    suffix = Path(upload.filename or "").suffix.lower()
    fd, name = tempfile.mkstemp(prefix="pdf-", suffix=suffix, dir=directory)
    path = Path(name)
    try:
        written = 0
        with os.fdopen(fd, "wb") as fh:
            while chunk := await upload.read(_CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise too_large(max_bytes)
                fh.write(chunk)
        logger.debug("Stored upload %s (%d bytes)", path, written)
        yield path
    finally:
        _remove_quietly(path)


def extract_text(data: bytes) -> str:
    """Return the text of every page joined by newlines; UpstreamFailure if unparseable."""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:
        logger.error("PDF parse failed: %s", exc)
        raise UpstreamFailure(f"PDF parse failed: {exc}") from exc
    return "\n".join(pages).strip()


async def extract_text_from_file(path: Path) -> str:
    """Read `path` and extract its text off the event loop."""
    data = await asyncio.to_thread(path.read_bytes)
    return await asyncio.to_thread(extract_text, data)
