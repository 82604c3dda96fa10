"""Error taxonomy shared by services and routers.

Every error carries the HTTP status and the body text the client sees.
Upstream failures deliberately expose only a generic message; details go to
the server log.
"""

from __future__ import annotations


class LorenzoError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    public_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        if message is not None and self.status_code < 500:
            self.public_message = message


class InvalidRequest(LorenzoError):
    """Missing or empty required field, wrong file type, no file."""

    status_code = 400
    public_message = "Invalid request body"


class PayloadTooLarge(InvalidRequest):
    """Uploaded file exceeds MAX_UPLOAD_BYTES."""

    status_code = 413
    public_message = "File too large"


class UpstreamFailure(LorenzoError):
    """The model provider or the PDF parser failed."""

    status_code = 500
    public_message = "Internal Server Error"
