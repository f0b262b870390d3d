"""Playing field cell."""

from __future__ import annotations

from typing import Iterable

from ..callables import ArgumentComparison, BoundCallable, HandlerSpec
from ..clickable import Clickable
from ..platform import Document, PresentationNode
from ..validators import is_valid_class_name


class Cell(Clickable):
    """Clickable square that can be filled with a player's symbol.

    Created on the fly when no node is given.
    """

    def __init__(
        self,
        node: PresentationNode | str | None = None,
        clickable_class_name: str | None = "tic-tac-toe__cell--empty",
        win_class_name: str | None = "tic-tac-toe__cell--win",
        tag_name: str = "div",
        classes: Iterable[str] = ("tic-tac-toe__cell",),
        *,
        document: Document | None = None,
        comparison: ArgumentComparison | None = None,
    ) -> None:
        super().__init__(node, clickable_class_name, document=document, comparison=comparison)
        self._win_class_name: str | None = None
        self.win_class_name = win_class_name
        if self.node is None:
            self.create(tag_name, None, classes)

    def __repr__(self) -> str:
        return f"<Cell {self.content or '·'} active={self.is_active}>"

    @property
    def is_active(self) -> bool:
        return self.is_clickable

    @property
    def win_class_name(self) -> str | None:
        return self._win_class_name

    @win_class_name.setter
    def win_class_name(self, value: str | None) -> None:
        if value is None or is_valid_class_name(value):
            self._win_class_name = value

    @property
    def content(self) -> str:
        return self.text or ""

    @property
    def is_filled(self) -> bool:
        return bool(self.content)

    def add_win_class_name(self) -> None:
        self.add_class(self._win_class_name)

    def remove_win_class_name(self) -> None:
        self.remove_class(self._win_class_name)

    def has_win_class_name(self) -> bool:
        return self.has_class(self._win_class_name)

    def change_click_handler(self, handler: HandlerSpec, on_remove: HandlerSpec = None) -> None:
        """Replace every click handler with a copy of ``handler`` receiving this cell first.

        Without ``on_remove`` the cell deactivates itself once the handler is
        removed.
        """
        self.reset_click_handlers()
        own_handler = BoundCallable(handler).copy()
        own_handler.arguments = [self, *own_handler.arguments]
        own_on_remove = BoundCallable(on_remove).copy()
        if not own_on_remove.is_ready:
            own_on_remove = BoundCallable({"function": type(self).deactivate, "context": self})
        self.add_click_handler(own_handler, own_on_remove)

    def activate(self, handler: HandlerSpec, on_remove: HandlerSpec = None) -> None:
        self.change_click_handler(handler, on_remove)
        self.activate_click()

    def deactivate(self) -> None:
        if self.is_active:
            self.deactivate_click()

    def fill(self, content: str) -> None:
        self.text = content

    def free(self) -> None:
        self.text = ""

    def reset(self) -> None:
        self.deactivate()
        self.free()
