"""In-memory match history."""

from __future__ import annotations

from collections import deque
from typing import Deque, Sequence

from .base import MatchRecord, MatchStore


class InMemoryMatchStore(MatchStore):
    def __init__(self, *, maxlen: int = 5000) -> None:
        self._history: Deque[MatchRecord] = deque(maxlen=maxlen)

    async def add_record(self, record: MatchRecord) -> None:
        self._history.append(record)

    async def recent_for_chat(self, chat_id: int, limit: int = 10) -> Sequence[MatchRecord]:
        filtered = [rec for rec in reversed(self._history) if rec.chat_id == chat_id]
        return filtered[:limit]
