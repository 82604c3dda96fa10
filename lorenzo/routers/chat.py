"""
Chat endpoints called by the landing page.
POST /chat runs one exchange; GET /transcript exposes the session history.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from lorenzo.dependencies import get_session
from lorenzo.schemas.chat import ChatRequest, ChatResponse, TranscriptRead, TurnRead
from lorenzo.services.composer import compose_and_send
from lorenzo.services.gemini import CompletionFn, get_completion
from lorenzo.services.session_store import ChatSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    session: ChatSession = Depends(get_session),
    complete: CompletionFn = Depends(get_completion),
) -> ChatResponse:
    """
    Run one chat exchange and return the model's reply.

    400 if userInput is missing or empty (session untouched);
    500 if the model call fails (transcript untouched).
    """
    logger.info(
        "Incoming /chat: session=%s input_len=%d",
        session.session_id,
        len(body.userInput or ""),
    )
    reply = await compose_and_send(session, body.userInput, complete)
    return ChatResponse(response=reply)


@router.get("/transcript", response_model=TranscriptRead)
async def transcript(session: ChatSession = Depends(get_session)) -> TranscriptRead:
    """Return the session's turns in order, plus whether a document is pending."""
    return TranscriptRead(
        session_id=session.session_id,
        turns=[TurnRead.model_validate(t) for t in session.transcript.snapshot()],
        pending_document=bool(session.pending_document),
    )
