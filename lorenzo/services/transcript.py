"""
Transcript store: the ordered turn history replayed to Gemini on every call.

Seeded with the persona bootstrap from lorenzo.utils.prompts. Grows by one user turn and
one model turn per successful exchange; once more than `max_turns` turns sit
after the bootstrap, the oldest user/model pairs are dropped so alternation
is preserved and the persona preamble is never lost.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Optional

from lorenzo.utils.prompts import BOOTSTRAP_TURNS

Role = Literal["user", "model"]


@dataclass(frozen=True)
class Turn:
    """One role-tagged message."""

    role: Role
    text: str

    def to_history(self) -> dict:
        """Render in the shape `ChatSession.history` accepts."""
        return {"role": self.role, "parts": [self.text]}


class Transcript:
    """Ordered, append-only turn history with a fixed bootstrap prefix."""

    def __init__(self, max_turns: Optional[int] = None) -> None:
        # None means unbounded; any bound keeps at least one full exchange.
        self.max_turns = None if max_turns is None else max(max_turns, 2)
        self._turns: list[Turn] = []
        self.initialize()

    def initialize(self) -> None:
        """Reset to the bootstrap sequence."""
        self._turns = [Turn(role=role, text=text) for role, text in BOOTSTRAP_TURNS]

    def append(self, role: Role, text: str) -> Turn:
        """Push a turn. Alternation is the caller's responsibility."""
        turn = Turn(role=role, text=text)
        self._turns.append(turn)
        self._trim()
        return turn

    def snapshot(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    def as_history(self) -> list[dict]:
        return [t.to_history() for t in self._turns]

    def _trim(self) -> None:
        if self.max_turns is None:
            return
        bootstrap = len(BOOTSTRAP_TURNS)
        overflow = len(self._turns) - bootstrap - self.max_turns
        if overflow <= 0:
            return
        # Drop whole pairs, rounding up, so user/model alternation survives.
        drop = overflow + (overflow % 2)
        del self._turns[bootstrap : bootstrap + drop]

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.snapshot())
