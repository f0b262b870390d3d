"""Top level application object for BoardForge front ends."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from .config import BoardForgeConfig
from .exceptions import UnknownSession
from .game.session import GameSession, MatchOutcome
from .platform import Document
from .storage.base import MatchRecord, MatchStore
from .storage.memory import InMemoryMatchStore
from .storage.sqlalchemy import AsyncSQLAlchemyStorage

logger = logging.getLogger(__name__)


class BoardApp:
    """Central dependency container used by the bot and the terminal front end.

    Each chat owns one :class:`GameSession` rendered into its own
    :class:`Document`.
    """

    def __init__(self, config: BoardForgeConfig, *, match_store: MatchStore | None = None) -> None:
        self.config = config
        self._sqlalchemy_storage: AsyncSQLAlchemyStorage | None = None
        self.match_store = self._wire_storage(match_store)
        self._sessions: dict[int, GameSession] = {}

    def _wire_storage(self, match_store: MatchStore | None) -> MatchStore:
        if match_store is not None:
            return match_store

        backend = self.config.storage.backend
        if backend == "memory":
            return InMemoryMatchStore()
        if backend == "sqlalchemy":
            dsn = self.config.storage.resolve_dsn()
            if not dsn:
                raise ValueError("SQLAlchemy backend requires a DSN")
            storage = AsyncSQLAlchemyStorage(dsn, echo=self.config.storage.echo_sql)
            self._sqlalchemy_storage = storage
            return storage.match_store()
        raise ValueError(f"Unsupported storage backend {backend}")

    @property
    def chat_ids(self) -> tuple[int, ...]:
        return tuple(self._sessions)

    def has_session(self, chat_id: int) -> bool:
        return chat_id in self._sessions

    def session_for(self, chat_id: int) -> GameSession:
        try:
            return self._sessions[chat_id]
        except KeyError:
            raise UnknownSession(chat_id) from None

    def new_session(self, chat_id: int) -> GameSession:
        """Replace whatever session the chat had with a fresh one."""
        if chat_id in self._sessions:
            self.drop_session(chat_id)
        session = GameSession(self.config, document=Document())
        self._sessions[chat_id] = session
        logger.debug("Opened session for chat %s", chat_id)
        return session

    def drop_session(self, chat_id: int) -> None:
        session = self._sessions.pop(chat_id, None)
        if session is None:
            raise UnknownSession(chat_id)
        session.close()
        logger.debug("Closed session for chat %s", chat_id)

    async def record_outcome(self, chat_id: int, outcome: MatchOutcome) -> MatchRecord:
        record = MatchRecord(
            chat_id=chat_id,
            winner=outcome.winner,
            moves=outcome.moves,
            field_size=outcome.field_size,
            finished_at=datetime.now(timezone.utc),
            winning_cells=outcome.winning_cells,
        )
        await self.match_store.add_record(record)
        return record

    async def history(self, chat_id: int, limit: int | None = None) -> Sequence[MatchRecord]:
        return await self.match_store.recent_for_chat(chat_id, limit or self.config.history_limit)

    def snapshot(self) -> dict[str, Any]:
        """Export current configuration for debugging."""
        return {
            "storage": self.config.storage.backend,
            "field_size": self.config.board.size,
            "players": [seed.name for seed in self.config.players],
            "argument_comparison": self.config.dispatch.argument_comparison,
            "sessions": sorted(self._sessions),
        }

    async def init_backend(self) -> None:
        """Initialize storage backend resources (e.g., database tables)."""
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.init_models()

    async def shutdown(self) -> None:
        for chat_id in list(self._sessions):
            self.drop_session(chat_id)
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.dispose()
