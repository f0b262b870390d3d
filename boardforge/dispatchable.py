"""Objects that bind handler registries to a presentation node."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Literal

from .callables import ArgumentComparison, HandlerSpec
from .handlers import EntryPoint, HandlerRegistry
from .platform import Document, MemoryNode, PresentationNode
from .validators import (
    is_valid_class_name,
    is_valid_event_kind,
    is_valid_id,
    is_valid_style_rule,
    is_valid_tag_name,
    not_empty_str,
)

logger = logging.getLogger(__name__)

Position = Literal["first", "last"]
StyleRule = tuple[str, str]


def _is_node(value: Any) -> bool:
    return hasattr(value, "add_event_listener") and hasattr(value, "remove_event_listener")


class Dispatchable:
    """Wrapper around a presentation node with per-kind handler registries.

    Registries are created lazily the first time a handler is registered for
    a kind and are only ever reset explicitly. Whatever the number of
    handlers, at most one native listener per kind is attached to the node:
    the registry's entry point.
    """

    def __init__(
        self,
        node: PresentationNode | str | None = None,
        *,
        document: Document | None = None,
        comparison: ArgumentComparison | None = None,
    ) -> None:
        self._document = document
        self._comparison = comparison
        self._node: PresentationNode | None = None
        self._registries: dict[str, HandlerRegistry] = {}
        self._subscriptions: dict[str, EntryPoint] = {}
        self.node = node

    @property
    def node(self) -> PresentationNode | None:
        return self._node

    @node.setter
    def node(self, value: PresentationNode | str | None) -> None:
        """Accepts a node, a selector resolved through the document, or None."""
        if self._subscriptions:
            self.deactivate_all_listeners()
        if not_empty_str(value):
            value = self._document.query_selector(value) if self._document else None
        self._node = value if _is_node(value) else None

    @property
    def document(self) -> Document | None:
        return self._document

    def has_node(self) -> bool:
        return self._node is not None

    # presentation -----------------------------------------------------------

    @property
    def tag_name(self) -> str | None:
        return self._node.tag_name if isinstance(self._node, MemoryNode) else None

    @property
    def id(self) -> str | None:
        return self._node.id if isinstance(self._node, MemoryNode) else None

    @id.setter
    def id(self, value: str | None) -> None:
        if isinstance(self._node, MemoryNode):
            self._node.id = value if is_valid_id(value) else None

    @property
    def text(self) -> str | None:
        return self._node.text if isinstance(self._node, MemoryNode) else None

    @text.setter
    def text(self, value: str) -> None:
        if isinstance(self._node, MemoryNode) and isinstance(value, str):
            self._node.text = value

    def create(
        self,
        tag_name: str,
        id: str | None = None,
        classes: Iterable[str] = (),
        styles: Iterable[StyleRule] = (),
    ) -> None:
        """Replace the current node with a freshly created element."""
        if not is_valid_tag_name(tag_name):
            self.node = None
            return
        if self._document is not None:
            self.node = self._document.create_element(tag_name)
        else:
            self.node = MemoryNode(tag_name)
        self.id = id
        self.add_classes(*classes)
        self.add_styles(*styles)

    def add_class(self, name: str | None) -> None:
        if isinstance(self._node, MemoryNode) and is_valid_class_name(name):
            self._node.add_class(name)

    def add_classes(self, *names: str) -> None:
        for name in names:
            self.add_class(name)

    def remove_class(self, name: str | None) -> None:
        if isinstance(self._node, MemoryNode) and is_valid_class_name(name):
            self._node.remove_class(name)

    def has_class(self, name: str | None) -> bool:
        return isinstance(self._node, MemoryNode) and name is not None and self._node.has_class(name)

    def add_style(self, rule: StyleRule) -> None:
        if isinstance(self._node, MemoryNode) and is_valid_style_rule(rule):
            key, value = rule
            self._node.set_style(key, value)

    def add_styles(self, *rules: StyleRule) -> None:
        for rule in rules:
            self.add_style(rule)

    def remove_style(self, rule: StyleRule) -> None:
        """Remove a style only when both key and value match."""
        if isinstance(self._node, MemoryNode) and is_valid_style_rule(rule):
            key, value = rule
            if self._node.style(key) == value:
                self._node.remove_style(key)

    def publish(self, container: "Dispatchable | MemoryNode | None") -> None:
        """Append the node to the end of ``container``."""
        if isinstance(container, Dispatchable):
            container = container.node
        if isinstance(container, MemoryNode) and isinstance(self._node, MemoryNode):
            container.append(self._node)

    def unpublish(self) -> None:
        """Detach the node from the tree, dropping every native subscription."""
        self.deactivate_all_listeners()
        if isinstance(self._node, MemoryNode):
            self._node.remove()

    # handlers ---------------------------------------------------------------

    def registry(self, kind: str) -> HandlerRegistry | None:
        return self._registries.get(kind) if is_valid_event_kind(kind) else None

    def has_registry(self, kind: str) -> bool:
        return self.registry(kind) is not None

    def has_handlers(self, kind: str) -> bool:
        registry = self.registry(kind)
        return registry is not None and registry.size > 0

    def add_handler(
        self,
        kind: str,
        handler: HandlerSpec,
        on_remove: HandlerSpec = None,
        position: Position = "last",
    ) -> bool:
        registry = self._ensure_registry(kind)
        if registry is None:
            return False
        if position == "first":
            return registry.prepend(handler, on_remove)
        return registry.append(handler, on_remove)

    def remove_handler(self, kind: str, handler: HandlerSpec) -> bool:
        registry = self.registry(kind)
        return registry.remove(handler) if registry is not None else False

    def index_of_handler(self, kind: str, handler: HandlerSpec) -> int:
        registry = self.registry(kind)
        return registry.index_of(handler) if registry is not None else -1

    def includes_handler(self, kind: str, handler: HandlerSpec) -> bool:
        return self.index_of_handler(kind, handler) >= 0

    def set_post_dispatch_hook(self, kind: str, spec: HandlerSpec) -> None:
        registry = self._ensure_registry(kind)
        if registry is not None:
            registry.set_post_dispatch_hook(spec)

    def dispatch_event(self, kind: str, payload: Any = None) -> None:
        registry = self.registry(kind)
        if registry is not None:
            registry.dispatch(payload)

    def activate_listener(self, kind: str) -> EntryPoint | None:
        """Subscribe the node with the registry entry point, once per kind.

        Returns the subscribed entry point, or None when there is no registry
        for ``kind`` or no node to listen on.
        """
        registry = self.registry(kind)
        if registry is None or self._node is None:
            return None
        token = self._subscriptions.get(kind)
        if token is None:
            token = registry.attach()
            self._node.add_event_listener(kind, token)
            self._subscriptions[kind] = token
            logger.debug("Activated '%s' listener on %r", kind, self._node)
        return token

    def deactivate_listener(self, kind: str) -> None:
        token = self._subscriptions.pop(kind, None)
        if token is None:
            return
        if self._node is not None:
            self._node.remove_event_listener(kind, token)
        registry = self._registries.get(kind)
        if registry is not None:
            registry.detach()
        logger.debug("Deactivated '%s' listener on %r", kind, self._node)

    def is_listener_active(self, kind: str) -> bool:
        return kind in self._subscriptions

    @property
    def active_kinds(self) -> tuple[str, ...]:
        return tuple(self._subscriptions)

    def reset_handlers(self, kind: str) -> None:
        """Deactivate and empty the registry for ``kind``, creating it if missing."""
        if not is_valid_event_kind(kind):
            return
        registry = self._registries.get(kind)
        if registry is None:
            self._registries[kind] = self._new_registry(kind)
            return
        self.deactivate_listener(kind)
        registry.reset()

    def deactivate_all_listeners(self) -> None:
        for kind in list(self._subscriptions):
            self.deactivate_listener(kind)

    def _ensure_registry(self, kind: str) -> HandlerRegistry | None:
        if not is_valid_event_kind(kind):
            return None
        registry = self._registries.get(kind)
        if registry is None:
            registry = self._registries[kind] = self._new_registry(kind)
        return registry

    def _new_registry(self, kind: str) -> HandlerRegistry:
        return HandlerRegistry(kind, comparison=self._comparison)


__all__ = ["Dispatchable", "Position", "StyleRule"]
