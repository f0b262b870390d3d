"""Match history backends."""

from .base import MatchRecord, MatchStore
from .memory import InMemoryMatchStore
from .sqlalchemy import AsyncSQLAlchemyMatchStore, AsyncSQLAlchemyStorage

__all__ = [
    "AsyncSQLAlchemyMatchStore",
    "AsyncSQLAlchemyStorage",
    "InMemoryMatchStore",
    "MatchRecord",
    "MatchStore",
]
