"""Testing utilities for BoardForge."""

from .driver import DriverStep, GameDriver
from .factory import PlayerFactory
from .fixtures import app_fixture

__all__ = ["DriverStep", "GameDriver", "PlayerFactory", "app_fixture"]
