"""Tic-tac-toe round controller built on the dispatch core."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from ..callables import HandlerSpec, resolve_comparison
from ..clickable import CLICK
from ..config import BoardForgeConfig
from ..handlers import HandlerRegistry
from ..platform import Document, MemoryNode
from .cell import Cell
from .field import Field
from .info_label import InfoLabel
from .players import Player, Players
from .toggle_button import ToggleButton

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchOutcome:
    winner: str | None
    moves: int
    field_size: int
    winning_cells: tuple[tuple[int, int], ...] = ()

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class GameSession:
    """One table: field, toggle button, status label and players.

    Every cell gets a one-shot click handler when a round starts; evicting it
    deactivates the cell, so a claimed cell stops listening on its own. The
    button's click handler starts or stops rounds.
    """

    def __init__(
        self,
        config: BoardForgeConfig | None = None,
        *,
        document: Document | None = None,
        players: Iterable[Player | Mapping[str, str]] | None = None,
    ) -> None:
        self.config = config or BoardForgeConfig()
        self.document = document or Document()
        comparison = resolve_comparison(self.config.dispatch.argument_comparison)

        self.info = InfoLabel(config=self.config.label, document=self.document, comparison=comparison)
        self.button = ToggleButton(config=self.config.button, document=self.document, comparison=comparison)
        self.field = Field(config=self.config.board, document=self.document, comparison=comparison)
        for part in (self.info, self.button, self.field):
            if isinstance(part.node, MemoryNode) and part.node.parent is None:
                part.publish(self.document.body)

        if players is None:
            players = [{"name": seed.name, "content": seed.content} for seed in self.config.players]
        self.players = Players(*players)

        self._finish_handlers = HandlerRegistry("finish", comparison=comparison)
        self._running = False
        self._moves = 0
        self._outcome: MatchOutcome | None = None

        self.button.activate({"function": GameSession._on_toggle, "context": self})
        self.info.set_not_started()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def outcome(self) -> MatchOutcome | None:
        """Result of the last finished round, reset when a new round starts."""
        return self._outcome

    def add_finish_handler(self, handler: HandlerSpec, on_remove: HandlerSpec = None) -> bool:
        """Register a handler called with the :class:`MatchOutcome` of each finished round."""
        return self._finish_handlers.append(handler, on_remove)

    def remove_finish_handler(self, handler: HandlerSpec) -> bool:
        return self._finish_handlers.remove(handler)

    def start(self) -> None:
        self.field.reset_all_cells()
        self.players.reset_all_players_filled_cells()
        self.players.reset_active_player()
        self.players.switch_active_player()
        self._moves = 0
        self._outcome = None
        self._running = True
        self.field.activate_all_cells(
            {"function": GameSession._on_cell_click, "context": self, "one_shot": True}
        )
        active = self.players.active_player
        self.info.set_active_player(active.name if active else None)
        logger.debug("Round started on a %sx%s field", self.field.size, self.field.size)

    def stop(self) -> None:
        self._running = False
        self.field.deactivate_all_cells()
        self.players.reset_active_player()
        self.info.set_not_started()

    def click_button(self) -> bool:
        """Deliver a native click to the toggle button; False when nobody listened."""
        return self._fire(self.button.node)

    def click_cell(self, x: int, y: int) -> bool:
        """Deliver a native click to the cell at ``(x, y)``; False when it is inactive or missing."""
        cell = self.field.get_cell(x, y)
        return cell is not None and self._fire(cell.node)

    def close(self) -> None:
        """Drop every native subscription held by the session's objects."""
        self._running = False
        for cell in self.field.cells():
            cell.deactivate_all_listeners()
        self.button.deactivate_all_listeners()
        self.field.deactivate_all_listeners()
        self.info.deactivate_all_listeners()

    def _fire(self, node: Any) -> bool:
        if not isinstance(node, MemoryNode):
            return False
        return node.fire(CLICK) > 0

    def _on_toggle(self, event: Any = None) -> None:
        # The button flips its state after this handler returns.
        if self.button.state == "start":
            self.start()
        else:
            self.stop()

    def _on_cell_click(self, cell: Cell, event: Any = None) -> None:
        player = self.players.active_player
        if not self._running or player is None:
            return
        cell.fill(player.content or "")
        player.add_filled_cell(cell)
        self._moves += 1

        combination = player.extract_win_combination(self.field.win_combinations)
        if combination:
            self.field.add_win_class_name_for(combination)
            self.info.set_winner(player.name)
            self._finish(player, combination)
        elif self.field.is_full:
            self.info.set_draw()
            self._finish(None, ())
        else:
            self.players.switch_active_player()
            upcoming = self.players.active_player
            self.info.set_active_player(upcoming.name if upcoming else None)

    def _finish(self, winner: Player | None, combination: Iterable[Cell]) -> None:
        self._running = False
        self.field.deactivate_all_cells()
        self.button.set_start()
        positions = tuple(
            position for position in (self.field.position_of(cell) for cell in combination) if position
        )
        self._outcome = MatchOutcome(
            winner=winner.name if winner else None,
            moves=self._moves,
            field_size=self.field.size,
            winning_cells=positions,
        )
        logger.info(
            "Round finished after %s moves: %s",
            self._moves,
            f"{self._outcome.winner} wins" if winner else "draw",
        )
        self._finish_handlers.dispatch(self._outcome)
