"""
In-process conversation sessions.

Each session owns a Transcript, the single pending-document slot filled by
/upload-pdf, and an asyncio.Lock that serialises chat exchanges so a
snapshot→call→append cycle is never interleaved with another on the same
session.

Sessions live in a cachetools TTLCache:
  Key    : session id (X-Session-ID header, "default" when absent)
  TTL    : SESSION_TTL_SECONDS since last access   MaxSize: SESSION_MAX_COUNT
An evicted session simply starts over from the bootstrap transcript.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from cachetools import TTLCache

from lorenzo.config import settings
from lorenzo.services.transcript import Transcript

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"


@dataclass
class ChatSession:
    """Mutable per-session conversation state."""

    session_id: str
    transcript: Transcript
    pending_document: str = ""
    # Bumped on every upload so a drain can tell "same text" from "same upload".
    pending_version: int = 0
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def set_pending_document(self, text: str) -> None:
        """Store extracted upload text, overwriting any unconsumed value."""
        if self.pending_document:
            logger.info(
                "Session %s: discarding unconsumed document (%d chars)",
                self.session_id,
                len(self.pending_document),
            )
        self.pending_document = text or ""
        self.pending_version += 1


class SessionStore:
    """TTL-bounded mapping of session id → ChatSession."""

    def __init__(
        self,
        maxsize: int = 1_000,
        ttl: float = 86_400,
        max_history_turns: Optional[int] = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_history_turns = max_history_turns
        self._sessions: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    def get(self, session_id: str = DEFAULT_SESSION_ID) -> ChatSession:
        """Return the session for `session_id`, creating it on first use.

        Every access re-inserts the session, so the TTL counts from last use.
        """
        session = self._sessions.get(session_id)
        if session is None:
            session = ChatSession(
                session_id=session_id,
                transcript=Transcript(max_turns=self.max_history_turns),
            )
            logger.info("Created session %s", session_id)
        self._sessions[session_id] = session
        return session

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


# Module-level singleton, imported by routers via get_session_store()
session_store = SessionStore(
    maxsize=settings.session_max_count,
    ttl=settings.session_ttl_seconds,
    max_history_turns=settings.max_history_turns,
)


def get_session_store() -> SessionStore:
    """FastAPI dependency: the process-wide session store."""
    return session_store
