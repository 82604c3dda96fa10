"""Pydantic schemas for the chat and transcript endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Body for POST /chat, sent by the landing page.

    `userInput` is optional at the schema level so that a missing or empty
    value reaches the composer and is rejected with a 400, not a 422.
    """

    model_config = ConfigDict(extra="ignore")

    userInput: Optional[str] = None


class ChatResponse(BaseModel):
    """Successful POST /chat reply."""

    response: str


class TurnRead(BaseModel):
    """A single transcript turn as exposed over HTTP."""

    model_config = ConfigDict(from_attributes=True)

    role: Literal["user", "model"]
    text: str


class TranscriptRead(BaseModel):
    """Response for GET /transcript."""

    session_id: str
    turns: list[TurnRead] = Field(default_factory=list)
    pending_document: bool = False
