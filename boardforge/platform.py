"""In-process presentation nodes used as the native event source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Protocol

Listener = Callable[..., Any]


class PresentationNode(Protocol):
    """What a dispatchable object needs from the platform."""

    def add_event_listener(self, kind: str, listener: Listener) -> None: ...
    def remove_event_listener(self, kind: str, listener: Listener) -> None: ...


@dataclass(slots=True)
class NodeEvent:
    """Default payload delivered by :meth:`MemoryNode.fire`."""

    kind: str
    target: "MemoryNode"
    data: dict[str, Any] = field(default_factory=dict)


class MemoryNode:
    """Minimal element tree node with DOM-like listener semantics.

    Registering the same listener twice for a kind is a no-op and removal
    matches listeners by identity. Listeners removed while an event is being
    delivered are skipped for the rest of that delivery.
    """

    def __init__(
        self,
        tag_name: str = "div",
        *,
        id: str | None = None,
        classes: Iterable[str] = (),
        text: str = "",
    ) -> None:
        self.tag_name = tag_name.lower()
        self.id = id
        self.classes: list[str] = []
        self.styles: dict[str, str] = {}
        self.text = text
        self.children: list[MemoryNode] = []
        self.parent: MemoryNode | None = None
        self._listeners: dict[str, list[Listener]] = {}
        for name in classes:
            self.add_class(name)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        classes = "".join(f".{name}" for name in self.classes)
        return f"<MemoryNode {self.tag_name}{ident}{classes}>"

    def add_class(self, name: str) -> None:
        if name not in self.classes:
            self.classes.append(name)

    def remove_class(self, name: str) -> None:
        if name in self.classes:
            self.classes.remove(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def style(self, key: str) -> str | None:
        return self.styles.get(key)

    def set_style(self, key: str, value: str) -> None:
        self.styles[key] = value

    def remove_style(self, key: str) -> None:
        self.styles.pop(key, None)

    def append(self, child: MemoryNode) -> None:
        child.remove()
        child.parent = self
        self.children.append(child)

    def remove(self) -> None:
        """Detach the node from its parent."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def iter_tree(self) -> Iterator[MemoryNode]:
        yield self
        for child in self.children:
            yield from child.iter_tree()

    def matches(self, selector: str) -> bool:
        selector = selector.strip()
        if selector.startswith("#"):
            return self.id == selector[1:]
        if selector.startswith("."):
            return self.has_class(selector[1:])
        return self.tag_name == selector.lower()

    def query(self, selector: str) -> MemoryNode | None:
        """First descendant matching a ``#id``, ``.class`` or tag selector."""
        for node in self.iter_tree():
            if node is not self and node.matches(selector):
                return node
        return None

    def add_event_listener(self, kind: str, listener: Listener) -> None:
        listeners = self._listeners.setdefault(kind, [])
        if not any(existing is listener for existing in listeners):
            listeners.append(listener)

    def remove_event_listener(self, kind: str, listener: Listener) -> None:
        listeners = self._listeners.get(kind)
        if not listeners:
            return
        self._listeners[kind] = [existing for existing in listeners if existing is not listener]

    def listener_count(self, kind: str) -> int:
        return len(self._listeners.get(kind, ()))

    def fire(self, kind: str, payload: Any = None) -> int:
        """Deliver an event to the listeners of ``kind``; returns how many ran."""
        event = payload if payload is not None else NodeEvent(kind=kind, target=self)
        delivered = 0
        for listener in list(self._listeners.get(kind, ())):
            if any(existing is listener for existing in self._listeners.get(kind, ())):
                listener(event)
                delivered += 1
        return delivered


class Document:
    """Owns the root of a node tree and resolves selectors against it."""

    def __init__(self) -> None:
        self.body = MemoryNode("body")

    def create_element(
        self,
        tag_name: str,
        *,
        id: str | None = None,
        classes: Iterable[str] = (),
    ) -> MemoryNode:
        return MemoryNode(tag_name, id=id, classes=classes)

    def query_selector(self, selector: str) -> MemoryNode | None:
        if self.body.matches(selector):
            return self.body
        return self.body.query(selector)


__all__ = ["Document", "Listener", "MemoryNode", "NodeEvent", "PresentationNode"]
