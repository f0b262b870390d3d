"""Tic-tac-toe objects built on the dispatch core."""

from .cell import Cell
from .field import Field
from .info_label import InfoLabel
from .players import Player, Players
from .session import GameSession, MatchOutcome
from .toggle_button import ToggleButton

__all__ = [
    "Cell",
    "Field",
    "GameSession",
    "InfoLabel",
    "MatchOutcome",
    "Player",
    "Players",
    "ToggleButton",
]
