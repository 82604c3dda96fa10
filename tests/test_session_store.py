"""Tests for SessionStore and ChatSession."""

from __future__ import annotations

from lorenzo.services.session_store import DEFAULT_SESSION_ID, SessionStore


class TestSessionStore:
    def test_get_creates_session_once(self) -> None:
        store = SessionStore()
        first = store.get("abc")
        assert store.get("abc") is first
        assert "abc" in store
        assert len(store) == 1

    def test_default_session_id(self) -> None:
        store = SessionStore()
        assert store.get().session_id == DEFAULT_SESSION_ID

    def test_sessions_are_isolated(self) -> None:
        store = SessionStore()
        a, b = store.get("a"), store.get("b")
        a.transcript.append("user", "only in a")
        a.set_pending_document("doc")
        assert len(b.transcript) == 6
        assert b.pending_document == ""

    def test_history_bound_passed_to_transcripts(self) -> None:
        store = SessionStore(max_history_turns=10)
        assert store.get("x").transcript.max_turns == 10

    def test_maxsize_evicts(self) -> None:
        store = SessionStore(maxsize=2)
        store.get("a")
        store.get("b")
        store.get("c")
        assert len(store) == 2


class TestPendingDocument:
    def test_second_upload_overwrites_first(self) -> None:
        session = SessionStore().get("s")
        session.set_pending_document("first")
        session.set_pending_document("second")
        assert session.pending_document == "second"


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestSessionExpiry:
    def test_active_session_outlives_ttl(self) -> None:
        clock = _Clock()
        store = SessionStore(ttl=10, timer=clock)
        session = store.get()
        session.transcript.append("user", "kept")
        for _ in range(5):
            clock.now += 6
            assert store.get() is session
        assert clock.now > 10
        assert len(store.get().transcript) == 7

    def test_idle_session_expires(self) -> None:
        clock = _Clock()
        store = SessionStore(ttl=10, timer=clock)
        session = store.get("idle")
        clock.now += 11
        assert "idle" not in store
        assert store.get("idle") is not session


class TestPendingVersion:
    def test_every_upload_bumps_version(self) -> None:
        session = SessionStore().get("s")
        session.set_pending_document("same")
        first = session.pending_version
        session.set_pending_document("same")
        assert session.pending_version == first + 1
