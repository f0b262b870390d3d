"""Players and the turn order between them."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ..validators import not_empty_str
from .cell import Cell


class Player:
    """A participant with a symbol and the cells it has claimed."""

    def __init__(
        self,
        name: str,
        content: str | None = None,
        filled_cells: Iterable[Cell] | None = None,
    ) -> None:
        self._name: str | None = None
        self._content: str | None = None
        self._filled_cells: list[Cell] = []
        self.name = name
        self.content = content
        for cell in filled_cells or ():
            self.add_filled_cell(cell)

    def __repr__(self) -> str:
        return f"<Player {self._name!r} {self._content!r} cells={len(self._filled_cells)}>"

    @property
    def name(self) -> str | None:
        return self._name

    @name.setter
    def name(self, value: str | None) -> None:
        self._name = value if not_empty_str(value) else None

    @property
    def content(self) -> str | None:
        return self._content

    @content.setter
    def content(self, value: str | None) -> None:
        self._content = value if not_empty_str(value) else None

    @property
    def filled_cells(self) -> tuple[Cell, ...]:
        return tuple(self._filled_cells)

    def extract_win_combination(self, win_combinations: Iterable[Sequence[Cell]]) -> list[Cell] | None:
        """First combination whose cells were all claimed by this player."""
        for combination in win_combinations:
            if combination and all(self.has_filled_cell(cell) for cell in combination):
                return list(combination)
        return None

    def is_winner(self, win_combinations: Iterable[Sequence[Cell]]) -> bool:
        return self.extract_win_combination(win_combinations) is not None

    def has_filled_cell(self, target: Cell) -> bool:
        return any(cell is target for cell in self._filled_cells)

    def add_filled_cell(self, cell: Cell) -> None:
        if isinstance(cell, Cell):
            self._filled_cells.append(cell)

    def remove_filled_cell(self, target: Cell) -> None:
        """Forget ``target`` and clear its content."""
        for index, cell in enumerate(self._filled_cells):
            if cell is target:
                del self._filled_cells[index]
                target.free()
                return

    def reset_filled_cells(self) -> None:
        self._filled_cells = []


class Players:
    """Ordered roster with a rotating active player."""

    def __init__(self, *players: Player | Mapping[str, str]) -> None:
        self._players: list[Player] = []
        self._active_index = -1
        self.add_players(*players)

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self):
        return iter(tuple(self._players))

    @property
    def players_count(self) -> int:
        return len(self._players)

    @property
    def active_player(self) -> Player | None:
        if 0 <= self._active_index < len(self._players):
            return self._players[self._active_index]
        return None

    def get_player_by_name(self, name: str) -> Player | None:
        if not not_empty_str(name):
            return None
        return next((player for player in self._players if player.name == name), None)

    def switch_active_player(self) -> None:
        if not self._players:
            self._active_index = -1
        else:
            self._active_index = (self._active_index + 1) % len(self._players)

    def add_player(self, player: Player | Mapping[str, str] | None = None) -> None:
        """Add a :class:`Player` or a ``{"name", "content"}`` mapping; anything else is ignored."""
        if isinstance(player, Player):
            self._players.append(player)
        elif isinstance(player, Mapping):
            name, content = player.get("name"), player.get("content")
            if not_empty_str(name) and not_empty_str(content):
                self._players.append(Player(name, content))

    def add_players(self, *players: Player | Mapping[str, str]) -> None:
        for player in players:
            self.add_player(player)

    def reset_all_players_filled_cells(self) -> None:
        for player in self._players:
            player.reset_filled_cells()

    def delete_all_players(self) -> None:
        self.reset_all_players_filled_cells()
        self._players = []
        self._active_index = -1

    def reset_active_player(self) -> None:
        self._active_index = -1
