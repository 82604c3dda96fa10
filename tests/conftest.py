"""Shared pytest fixtures."""

from __future__ import annotations

import os

os.environ.setdefault("API_KEY", "test-key")

from pathlib import Path  # noqa: E402
from typing import Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from lorenzo.config import settings  # noqa: E402
from lorenzo.main import app  # noqa: E402
from lorenzo.services.gemini import get_completion  # noqa: E402
from lorenzo.services.session_store import SessionStore, get_session_store  # noqa: E402


class FakeCompletion:
    """Stand-in for the Gemini call that records what it was sent."""

    def __init__(self, reply: str = "Here is some career advice.") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[tuple[list[dict], str]] = []

    async def __call__(self, history: list[dict], message: str) -> str:
        self.calls.append((history, message))
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_message(self) -> str:
        return self.calls[-1][1]


def build_pdf(text: str) -> bytes:
    """Return the bytes of a valid single-page PDF showing `text` in Helvetica."""
    escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    stream = f"BT /F1 18 Tf 72 720 Td ({escaped}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[[str], bytes]:
    return build_pdf


@pytest.fixture
def store() -> SessionStore:
    """A fresh session store so tests never share transcripts."""
    return SessionStore(maxsize=100, ttl=3600, max_history_turns=200)


@pytest.fixture
def fake_completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(target))
    return target


@pytest.fixture
def client(store: SessionStore, fake_completion: FakeCompletion, upload_dir: Path):
    """TestClient wired to a fresh store and the fake completion."""
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_completion] = lambda: fake_completion
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
