"""Dispatchable objects specialised for click handling."""

from __future__ import annotations

from typing import Any

from .callables import ArgumentComparison, HandlerSpec
from .dispatchable import Dispatchable, Position
from .handlers import EntryPoint
from .platform import Document, PresentationNode
from .validators import is_valid_class_name

CLICK = "click"


class Clickable(Dispatchable):
    """Object that reacts to clicks and marks itself with a class modifier while clickable."""

    def __init__(
        self,
        node: PresentationNode | str | None = None,
        clickable_class_name: str | None = None,
        *,
        document: Document | None = None,
        comparison: ArgumentComparison | None = None,
    ) -> None:
        super().__init__(node, document=document, comparison=comparison)
        self._clickable_class_name: str | None = None
        self._is_clickable = False
        self.clickable_class_name = clickable_class_name

    @property
    def clickable_class_name(self) -> str | None:
        return self._clickable_class_name

    @clickable_class_name.setter
    def clickable_class_name(self, value: str | None) -> None:
        if value is None or is_valid_class_name(value):
            self._clickable_class_name = value

    @property
    def is_clickable(self) -> bool:
        return self._is_clickable

    @property
    def has_click_handlers(self) -> bool:
        return self.has_handlers(CLICK)

    @property
    def is_click_listener_active(self) -> bool:
        return self.is_listener_active(CLICK)

    def add_click_handler(
        self,
        handler: HandlerSpec,
        on_remove: HandlerSpec = None,
        position: Position = "last",
    ) -> bool:
        return self.add_handler(CLICK, handler, on_remove, position)

    def remove_click_handler(self, handler: HandlerSpec) -> bool:
        return self.remove_handler(CLICK, handler)

    def has_click_handler(self, handler: HandlerSpec) -> bool:
        return self.includes_handler(CLICK, handler)

    def set_after_click_handler(self, spec: HandlerSpec) -> None:
        self.set_post_dispatch_hook(CLICK, spec)

    def reset_click_handlers(self) -> None:
        self.reset_handlers(CLICK)

    def activate_click_listener(self) -> EntryPoint | None:
        return self.activate_listener(CLICK)

    def deactivate_click_listener(self) -> None:
        self.deactivate_listener(CLICK)

    def activate_click(self) -> None:
        """Listen for clicks and add the clickable class modifier."""
        self.activate_click_listener()
        self.add_class(self._clickable_class_name)
        self._is_clickable = True

    def deactivate_click(self) -> None:
        self.deactivate_click_listener()
        self.remove_class(self._clickable_class_name)
        self._is_clickable = False

    def click(self, event: Any = None) -> None:
        """Run the click handlers directly; ignored while the listener is inactive."""
        if self.is_click_listener_active:
            self.dispatch_event(CLICK, event)

    def create(self, tag_name, id=None, classes=(), styles=()) -> None:  # type: ignore[override]
        self.deactivate_click()
        super().create(tag_name, id, classes, styles)


__all__ = ["CLICK", "Clickable"]
