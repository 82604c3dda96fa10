"""Pydantic schemas package."""

from lorenzo.schemas.chat import ChatRequest, ChatResponse, TranscriptRead, TurnRead
from lorenzo.schemas.upload import UploadResponse

__all__ = [
    "ChatRequest", "ChatResponse", "TranscriptRead", "TurnRead",
    "UploadResponse",
]
