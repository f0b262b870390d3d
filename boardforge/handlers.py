"""Ordered handler registries with a live, mutation-tolerant dispatch loop."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

from .callables import ArgumentComparison, BoundCallable, HandlerSpec, membership_equal
from .exceptions import ListenerStillActive

logger = logging.getLogger(__name__)

EntryPoint = Callable[..., None]


class HandlerRegistry:
    """Handlers for one event kind, dispatched strictly in registration order.

    Every entry is paired with a removal hook stored at the same index; the
    hook runs (without payload) right after its entry is evicted. A single
    post-dispatch hook runs after each individual handler.

    ``entry_point`` is the callable handed to a native event source. It keeps
    its identity until :meth:`reset`, so the same object can later be used to
    unsubscribe.
    """

    def __init__(
        self,
        kind: str | None = None,
        *,
        comparison: ArgumentComparison | None = None,
    ) -> None:
        self.kind = kind
        self._comparison = comparison or membership_equal
        self._attached = False
        self.reset()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BoundCallable]:
        return iter(tuple(self._entries))

    def __contains__(self, handler: HandlerSpec) -> bool:
        return self.includes(handler)

    def __repr__(self) -> str:
        return f"<HandlerRegistry {self.kind or '?'} size={len(self._entries)} attached={self._attached}>"

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[BoundCallable, ...]:
        return tuple(self._entries)

    @property
    def removal_hooks(self) -> tuple[BoundCallable, ...]:
        return tuple(self._removal_hooks)

    @property
    def post_dispatch_hook(self) -> BoundCallable:
        return self._post_dispatch_hook

    @property
    def entry_point(self) -> EntryPoint:
        return self._entry_point

    @property
    def is_attached(self) -> bool:
        return self._attached

    def append(self, handler: HandlerSpec, on_remove: HandlerSpec = None) -> bool:
        """Add a handler at the end. Returns False when ``handler`` has no function."""
        return self._insert(len(self._entries), handler, on_remove)

    def prepend(self, handler: HandlerSpec, on_remove: HandlerSpec = None) -> bool:
        """Add a handler at the front. Returns False when ``handler`` has no function."""
        return self._insert(0, handler, on_remove)

    def index_of(self, handler: HandlerSpec) -> int:
        """Index of the first entry ``handler`` equals, or -1.

        ``handler`` is the left side of the comparison: with the membership
        strategy every argument of ``handler`` must appear in the entry.
        """
        target = handler if isinstance(handler, BoundCallable) else BoundCallable(handler)
        if not target.is_ready:
            return -1
        for index, entry in enumerate(self._entries):
            if target.equals(entry, comparison=self._comparison):
                return index
        return -1

    def includes(self, handler: HandlerSpec) -> bool:
        return self.index_of(handler) >= 0

    def remove(self, handler: HandlerSpec) -> bool:
        """Evict the first matching entry and run its removal hooks.

        Returns False when nothing matched.
        """
        index = self.index_of(handler)
        if index < 0:
            return False
        self._evict(index)
        return True

    def set_post_dispatch_hook(self, spec: HandlerSpec) -> None:
        self._post_dispatch_hook = BoundCallable(spec)

    def dispatch(self, payload: Any = None) -> None:
        """Invoke every entry in order, evicting one-shot entries as they run.

        The loop reads the live entry list, so handlers appended during the
        pass are visited in the same pass. The cursor follows the running
        entry by identity: handlers inserted before it do not cause it to run
        twice, and a handler that removed itself does not skip its successor.
        """
        cursor = 0
        while cursor < len(self._entries):
            entry = self._entries[cursor]
            entry.invoke(payload)
            self._post_dispatch_hook.invoke(payload)
            index = self._locate(entry, cursor)
            if index < 0:
                continue
            if entry.one_shot:
                self._evict(index)
                cursor = index
            else:
                cursor = index + 1

    def attach(self) -> EntryPoint:
        """Mark the registry as referenced by a native listener and return its entry point."""
        self._attached = True
        return self._entry_point

    def detach(self) -> None:
        self._attached = False

    def reset(self) -> None:
        """Drop every handler and hook and issue a fresh entry point.

        The registry must not be attached: a native listener would keep
        calling the previous entry point.
        """
        if self._attached:
            raise ListenerStillActive(self.kind)
        self._entries: list[BoundCallable] = []
        self._removal_hooks: list[BoundCallable] = []
        self._post_dispatch_hook = BoundCallable()
        self._entry_point = self._new_entry_point()

    def _insert(self, index: int, handler: HandlerSpec, on_remove: HandlerSpec) -> bool:
        entry = BoundCallable(handler)
        if not entry.is_ready:
            logger.debug("Ignoring handler without a function for kind %s", self.kind)
            return False
        self._entries.insert(index, entry)
        self._removal_hooks.insert(index, BoundCallable(on_remove))
        return True

    def _locate(self, entry: BoundCallable, hint: int) -> int:
        if hint < len(self._entries) and self._entries[hint] is entry:
            return hint
        for index, candidate in enumerate(self._entries):
            if candidate is entry:
                return index
        return -1

    def _evict(self, index: int) -> None:
        entry = self._entries.pop(index)
        hook = self._removal_hooks.pop(index)
        logger.debug("Evicted %r from kind %s", entry, self.kind)
        hook.invoke()
        entry.run_removal_hook()

    def _new_entry_point(self) -> EntryPoint:
        def entry_point(payload: Any = None) -> None:
            self.dispatch(payload)

        return entry_point


__all__ = ["EntryPoint", "HandlerRegistry"]
