"""Storage abstractions for finished matches."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, Sequence


@dataclass(slots=True)
class MatchRecord:
    chat_id: int
    winner: str | None
    moves: int
    field_size: int
    finished_at: datetime
    winning_cells: Sequence[tuple[int, int]] = field(default_factory=tuple)

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class MatchStore(Protocol):
    async def add_record(self, record: MatchRecord) -> None:
        ...

    async def recent_for_chat(self, chat_id: int, limit: int = 10) -> Sequence[MatchRecord]:
        ...
