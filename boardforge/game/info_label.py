"""Status line of the game."""

from __future__ import annotations

from ..callables import ArgumentComparison
from ..config import LabelConfig
from ..dispatchable import Dispatchable
from ..platform import Document, PresentationNode
from ..validators import not_empty_str

NOT_STARTED = "Game not started"
DRAW = "Draw!"


class InfoLabel(Dispatchable):
    def __init__(
        self,
        node: PresentationNode | str | None = None,
        *,
        config: LabelConfig | None = None,
        document: Document | None = None,
        comparison: ArgumentComparison | None = None,
    ) -> None:
        config = config or LabelConfig()
        super().__init__(
            node if node is not None else config.selector,
            document=document,
            comparison=comparison,
        )
        if self.node is None:
            self.create(config.tag, config.element_id, config.classes)

    def set_not_started(self) -> None:
        self.text = NOT_STARTED

    def set_active_player(self, player_name: str | None) -> None:
        if not_empty_str(player_name):
            self.text = f"{player_name}'s turn"

    def set_winner(self, player_name: str | None) -> None:
        if not_empty_str(player_name):
            self.text = f"{player_name} is winner!"

    def set_draw(self) -> None:
        self.text = DRAW
