"""Start/stop toggle button."""

from __future__ import annotations

from ..callables import ArgumentComparison, HandlerSpec
from ..clickable import Clickable
from ..config import ButtonConfig
from ..platform import Document, PresentationNode
from ..validators import is_valid_class_name

STATES = ("start", "stop")


class ToggleButton(Clickable):
    """Button flipping between ``start`` and ``stop`` after every click.

    The flip is installed as the post-dispatch hook of the click registry, so
    click handlers observe the state the button had when it was pressed.
    """

    def __init__(
        self,
        node: PresentationNode | str | None = None,
        *,
        config: ButtonConfig | None = None,
        document: Document | None = None,
        comparison: ArgumentComparison | None = None,
    ) -> None:
        config = config or ButtonConfig()
        super().__init__(
            node if node is not None else config.selector,
            document=document,
            comparison=comparison,
        )
        if self.node is None:
            self.create("button", config.element_id, config.classes)
        self._state_index = -1
        self._start_class_name: str | None = None
        self._stop_class_name: str | None = None
        self.start_class_name = config.start_class
        self.stop_class_name = config.stop_class

    @property
    def state(self) -> str | None:
        return STATES[self._state_index] if 0 <= self._state_index < len(STATES) else None

    @property
    def is_active(self) -> bool:
        return self.is_clickable and self.state is not None

    @property
    def start_class_name(self) -> str | None:
        return self._start_class_name

    @start_class_name.setter
    def start_class_name(self, value: str | None) -> None:
        if value is None or is_valid_class_name(value):
            self._start_class_name = value

    @property
    def stop_class_name(self) -> str | None:
        return self._stop_class_name

    @stop_class_name.setter
    def stop_class_name(self, value: str | None) -> None:
        if value is None or is_valid_class_name(value):
            self._stop_class_name = value

    def activate(self, handler: HandlerSpec) -> None:
        """Make the button clickable in the ``start`` state with ``handler`` attached once."""
        if not self.has_click_handler(handler):
            self.add_click_handler(handler)
        self.set_after_click_handler({"function": ToggleButton._toggle_state, "context": self})
        self.activate_click()
        self.set_start()

    def deactivate(self) -> None:
        if self.is_active:
            self.deactivate_click()
        self.set_stop()

    def set_start(self) -> None:
        self._set_state("start")

    def set_stop(self) -> None:
        self._set_state("stop")

    def _set_state(self, state: str) -> None:
        self._state_index = STATES.index(state) if state in STATES else -1
        self._sync_with_state()

    def _toggle_state(self, event: object = None) -> None:
        self._state_index = (self._state_index + 1) % len(STATES)
        self._sync_with_state()

    def _sync_with_state(self) -> None:
        self.remove_class(self._start_class_name)
        self.remove_class(self._stop_class_name)
        if self.state == "start":
            self.add_class(self._start_class_name)
        elif self.state == "stop":
            self.add_class(self._stop_class_name)
        self.text = self.state or ""
