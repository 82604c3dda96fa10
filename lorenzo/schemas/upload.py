"""Pydantic schemas for the PDF upload endpoint."""

from __future__ import annotations

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Response for POST /upload-pdf.

    `filePath` is where the upload was staged; the file itself is already
    gone by the time the client reads this.
    """

    message: str
    filePath: str
    contents: str
