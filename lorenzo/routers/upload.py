"""
PDF upload endpoint.

The file's extension and MIME type are checked before anything touches disk.
The text is extracted from a scoped temp file (always deleted) and parked in
the session's pending-document slot for the next /chat call.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from lorenzo.config import settings
from lorenzo.dependencies import get_session
from lorenzo.exceptions import InvalidRequest
from lorenzo.schemas.upload import UploadResponse
from lorenzo.services.pdf_text import (
    extract_text_from_file,
    is_pdf_upload,
    stored_upload,
    too_large,
)
from lorenzo.services.session_store import ChatSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post("/upload-pdf", response_model=UploadResponse)
async def upload_pdf(
    pdf: Optional[UploadFile] = File(None),
    session: ChatSession = Depends(get_session),
) -> UploadResponse:
    """
    Accept a single PDF in the multipart field `pdf`.

    400 when no file is sent or it is not a PDF, 413 when it exceeds
    MAX_UPLOAD_BYTES, 500 when the PDF cannot be parsed.
    """
    if pdf is None or not pdf.filename:
        raise InvalidRequest("No file uploaded.")

    if not is_pdf_upload(pdf.filename, pdf.content_type):
        logger.info(
            "Rejected upload %r (content_type=%s)", pdf.filename, pdf.content_type
        )
        raise InvalidRequest("Only PDF files are allowed!")

    # Starlette has already spooled the part; refuse it before copying it again.
    if pdf.size is not None and pdf.size > settings.max_upload_bytes:
        raise too_large(settings.max_upload_bytes)

    async with stored_upload(pdf, settings.upload_dir, settings.max_upload_bytes) as path:
        contents = await extract_text_from_file(path)
        file_path = str(path)

    session.set_pending_document(contents)
    logger.info(
        "Session %s: extracted %d chars from %r",
        session.session_id,
        len(contents),
        pdf.filename,
    )
    return UploadResponse(
        message="File uploaded successfully",
        filePath=file_path,
        contents=contents,
    )
