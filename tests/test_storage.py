from datetime import datetime, timedelta, timezone

import pytest

from boardforge.app import BoardApp
from boardforge.config import BoardForgeConfig, StorageConfig
from boardforge.exceptions import UnknownSession
from boardforge.game.session import MatchOutcome
from boardforge.storage import AsyncSQLAlchemyStorage, InMemoryMatchStore, MatchRecord


def make_record(chat_id: int, minutes: int, winner: str | None = "X") -> MatchRecord:
    return MatchRecord(
        chat_id=chat_id,
        winner=winner,
        moves=5,
        field_size=3,
        finished_at=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes),
        winning_cells=((0, 0), (1, 1), (2, 2)),
    )


@pytest.mark.asyncio()
async def test_memory_store_returns_latest_first():
    store = InMemoryMatchStore()
    for minutes in range(3):
        await store.add_record(make_record(1, minutes))
    await store.add_record(make_record(2, 10))

    records = await store.recent_for_chat(1, limit=2)
    assert [record.finished_at.minute for record in records] == [2, 1]


@pytest.mark.asyncio()
async def test_sqlalchemy_store_round_trip(tmp_path):
    storage = AsyncSQLAlchemyStorage(f"sqlite+aiosqlite:///{(tmp_path / 'matches.db').as_posix()}")
    await storage.init_models()
    store = storage.match_store()
    try:
        await store.add_record(make_record(7, 0))
        await store.add_record(make_record(7, 5, winner=None))
        await store.add_record(make_record(8, 1))

        records = await store.recent_for_chat(7)
        assert len(records) == 2
        assert records[0].is_draw
        assert records[1].winner == "X"
        assert records[1].winning_cells == ((0, 0), (1, 1), (2, 2))
    finally:
        await storage.dispose()


@pytest.mark.asyncio()
async def test_app_records_outcomes(memory_app):
    outcome = MatchOutcome(winner="O", moves=7, field_size=3, winning_cells=((2, 0), (2, 1), (2, 2)))
    record = await memory_app.record_outcome(42, outcome)

    assert record.winner == "O"
    assert list(await memory_app.history(42)) == [record]
    assert list(await memory_app.history(43)) == []


@pytest.mark.asyncio()
async def test_app_with_sqlalchemy_backend(tmp_path):
    dsn = f"sqlite+aiosqlite:///{(tmp_path / 'app.db').as_posix()}"
    app = BoardApp(BoardForgeConfig(storage=StorageConfig(backend="sqlalchemy", dsn=dsn)))
    await app.init_backend()
    try:
        await app.record_outcome(1, MatchOutcome(winner=None, moves=9, field_size=3))
        history = await app.history(1)
        assert len(history) == 1
        assert history[0].is_draw
    finally:
        await app.shutdown()


def test_app_rejects_unknown_backend():
    with pytest.raises(ValueError):
        BoardApp(BoardForgeConfig(storage=StorageConfig(backend="redis")))  # type: ignore[arg-type]


def test_app_sessions_per_chat(memory_app):
    first = memory_app.new_session(1)
    memory_app.new_session(2)

    assert memory_app.session_for(1) is first
    assert memory_app.chat_ids == (1, 2)

    first.click_button()
    replacement = memory_app.new_session(1)
    assert replacement is not first
    assert not first.button.is_listener_active("click")

    memory_app.drop_session(2)
    with pytest.raises(UnknownSession) as exc:
        memory_app.session_for(2)
    assert exc.value.chat_id == 2
    with pytest.raises(UnknownSession):
        memory_app.drop_session(2)

    snapshot = memory_app.snapshot()
    assert snapshot["sessions"] == [1]
    assert snapshot["players"] == ["X", "O"]
