"""BoardForge public API."""

from .app import BoardApp
from .callables import BoundCallable, membership_equal, positional_equal
from .clickable import Clickable
from .config import BoardForgeConfig
from .dispatchable import Dispatchable
from .handlers import HandlerRegistry

__all__ = [
    "BoardApp",
    "BoardForgeConfig",
    "BoundCallable",
    "Clickable",
    "Dispatchable",
    "HandlerRegistry",
    "membership_equal",
    "positional_equal",
]
