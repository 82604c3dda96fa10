"""
Turn composer: one chat exchange against a session.

  1. Validate the user input (InvalidRequest on empty/absent).
  2. Build the final message, folding in any pending uploaded document.
  3. Call the completion function with the transcript as history.
  4. On success only: append the user and model turns, drain the pending
     document.

A failed upstream call leaves both the transcript and the pending document
untouched, so a retry still carries the uploaded text. Steps 2–4 run under
the session lock.
"""

from __future__ import annotations

import logging
from typing import Optional

from lorenzo.exceptions import InvalidRequest, UpstreamFailure
from lorenzo.services.gemini import CompletionFn
from lorenzo.services.session_store import ChatSession
from lorenzo.utils.prompts import build_final_message

logger = logging.getLogger(__name__)


async def compose_and_send(
    session: ChatSession,
    user_input: Optional[str],
    complete: CompletionFn,
) -> str:
    """Run one exchange and return the model's reply text."""
    if not isinstance(user_input, str) or not user_input:
        raise InvalidRequest("Invalid request body")

    async with session.lock:
        pending = session.pending_document
        pending_version = session.pending_version
        final_message = build_final_message(user_input, pending)
        if pending:
            logger.info(
                "Session %s: folding uploaded document (%d chars) into message",
                session.session_id,
                len(pending),
            )

        try:
            reply = await complete(session.transcript.as_history(), final_message)
        except UpstreamFailure:
            raise
        except Exception as exc:
            raise UpstreamFailure(str(exc)) from exc
        if not isinstance(reply, str):
            raise UpstreamFailure(f"Malformed model reply: {type(reply).__name__}")

        session.transcript.append("user", final_message)
        session.transcript.append("model", reply)

        # A newer upload that landed mid-call stays pending for the next turn.
        if pending and session.pending_version == pending_version:
            session.pending_document = ""

    logger.info(
        "Session %s: exchange complete, transcript now %d turns",
        session.session_id,
        len(session.transcript),
    )
    return reply
