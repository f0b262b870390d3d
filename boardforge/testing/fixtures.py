"""Pytest fixtures for BoardForge."""

from __future__ import annotations

from typing import Iterator

import pytest

from ..app import BoardApp
from ..config import BoardForgeConfig
from ..game.session import GameSession
from ..platform import Document
from .driver import GameDriver


@pytest.fixture()
def config() -> BoardForgeConfig:
    return BoardForgeConfig(bot_token="test")


@pytest.fixture()
def document() -> Document:
    return Document()


@pytest.fixture()
def session(config: BoardForgeConfig, document: Document) -> Iterator[GameSession]:
    game = GameSession(config, document=document)
    yield game
    game.close()


@pytest.fixture()
def driver(session: GameSession) -> GameDriver:
    return GameDriver(session)


@pytest.fixture()
def memory_app(config: BoardForgeConfig) -> BoardApp:
    return BoardApp(config)


def app_fixture(bot_token: str = "test", **kwargs) -> BoardApp:
    """Helper for ad-hoc scripts where pytest is not available."""
    return BoardApp(BoardForgeConfig(bot_token=bot_token, **kwargs))
