"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from lorenzo.services.session_store import (
    DEFAULT_SESSION_ID,
    ChatSession,
    SessionStore,
    get_session_store,
)


async def get_session(
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID"),
    store: SessionStore = Depends(get_session_store),
) -> ChatSession:
    """Resolve the caller's session; clients without a header share "default"."""
    session_id = (x_session_id or "").strip() or DEFAULT_SESSION_ID
    return store.get(session_id)
