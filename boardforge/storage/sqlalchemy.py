"""SQLAlchemy match history backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Sequence

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .base import MatchRecord, MatchStore


class Base(DeclarativeBase):
    pass


class MatchTable(Base):
    __tablename__ = "boardforge_matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chat_id: Mapped[int] = mapped_column(BigInteger, index=True)
    winner: Mapped[str | None] = mapped_column(String(255), nullable=True)
    moves: Mapped[int] = mapped_column(Integer)
    field_size: Mapped[int] = mapped_column(Integer)
    finished_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    winning_cells: Mapped[list] = mapped_column(JSON, default=list)


class AsyncSQLAlchemyStorage:
    """Engine and session factory shared by the SQLAlchemy stores."""

    def __init__(self, dsn: str, *, echo: bool = False) -> None:
        self._engine = create_async_engine(dsn, echo=echo)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    async def init_models(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    def match_store(self) -> "AsyncSQLAlchemyMatchStore":
        return AsyncSQLAlchemyMatchStore(self._session_factory)


class AsyncSQLAlchemyMatchStore(MatchStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add_record(self, record: MatchRecord) -> None:
        async with self._session_factory() as session:
            session.add(
                MatchTable(
                    chat_id=record.chat_id,
                    winner=record.winner,
                    moves=record.moves,
                    field_size=record.field_size,
                    finished_at=record.finished_at,
                    winning_cells=[list(cell) for cell in record.winning_cells],
                )
            )
            await session.commit()

    async def recent_for_chat(self, chat_id: int, limit: int = 10) -> Sequence[MatchRecord]:
        async with self._session_factory() as session:
            stmt = (
                select(MatchTable)
                .where(MatchTable.chat_id == chat_id)
                .order_by(MatchTable.finished_at.desc(), MatchTable.id.desc())
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
            return [
                MatchRecord(
                    chat_id=row.chat_id,
                    winner=row.winner,
                    moves=row.moves,
                    field_size=row.field_size,
                    finished_at=row.finished_at,
                    winning_cells=tuple(tuple(cell) for cell in row.winning_cells or ()),
                )
                for row in rows
            ]
