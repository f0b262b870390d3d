"""Bound callables: deferred invocations carrying a context, leading arguments and hooks."""

from __future__ import annotations

import copy
import inspect
from collections.abc import Callable, Mapping, Sequence
from types import SimpleNamespace
from typing import Any, TypedDict, Union

_PRIMITIVES = (str, bytes, bytearray, int, float, complex, bool)

ArgumentComparison = Callable[[Sequence[Any], Any], bool]


class HandlerDescriptor(TypedDict, total=False):
    """Plain mapping form of a handler."""

    function: Callable[..., Any]
    context: Any
    arguments: Sequence[Any]
    on_removal: "HandlerSpec"
    one_shot: bool


HandlerSpec = Union["BoundCallable", HandlerDescriptor, Mapping[str, Any], Callable[..., Any], None]


def is_structured(value: Any) -> bool:
    """Return True for values usable as a context or forwarded as an event payload."""
    return value is not None and not isinstance(value, _PRIMITIVES)


def _is_argument_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def membership_equal(first: Sequence[Any], second: Any) -> bool:
    """Compare argument lists by length and membership.

    Order is ignored and duplicates are not counted: ``[1, 2]`` equals
    ``[2, 1]`` and ``[1, 1, 2]`` equals ``[1, 2, 2]``. The check is one-way:
    only the members of ``first`` are looked up in ``second``, so
    ``membership_equal([1, 1], [1, 2])`` is True while
    ``membership_equal([1, 2], [1, 1])`` is False. This is the historical
    behaviour and stays the default; :func:`positional_equal` is most likely
    what callers mean and should become the default in a future major release.
    """
    if not _is_argument_sequence(second) or len(first) != len(second):
        return False
    return all(argument in second for argument in first)


def positional_equal(first: Sequence[Any], second: Any) -> bool:
    """Compare argument lists element by element."""
    if not _is_argument_sequence(second) or len(first) != len(second):
        return False
    return all(left == right for left, right in zip(first, second))


ARGUMENT_COMPARISONS: dict[str, ArgumentComparison] = {
    "membership": membership_equal,
    "positional": positional_equal,
}


def resolve_comparison(name: str) -> ArgumentComparison:
    try:
        return ARGUMENT_COMPARISONS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown argument comparison '{name}'") from exc


def _same_function(first: Callable[..., Any] | None, second: Callable[..., Any] | None) -> bool:
    if first is second:
        return True
    # Bound methods are recreated on every attribute access.
    if inspect.ismethod(first) and inspect.ismethod(second):
        return first.__func__ is second.__func__ and first.__self__ is second.__self__
    return False


def _duplicate_context(context: Any) -> Any:
    if isinstance(context, dict):
        return dict(context)
    if isinstance(context, SimpleNamespace):
        return copy.copy(context)
    return context


class BoundCallable:
    """Deferred call of ``function`` with ``context`` as receiver and fixed leading arguments.

    A bound callable without a function is *inert*: it never calls anything
    and ignores the context, arguments, removal hook and one-shot setters until
    a function is assigned. Assigning a function resets those fields, so
    nothing leaks from a previous assignment. Setters keep the previous value
    when given invalid input instead of raising.

    Instances compare structurally (see :meth:`equals`) and are unhashable.
    """

    __slots__ = ("_function", "_context", "_arguments", "_one_shot", "_on_removal", "_last_result")

    def __init__(self, spec: HandlerSpec = None) -> None:
        self._clear()
        self.parse(spec)

    @property
    def function(self) -> Callable[..., Any] | None:
        return self._function

    @function.setter
    def function(self, value: Callable[..., Any] | None) -> None:
        self._clear()
        if callable(value):
            self._function = value

    @property
    def context(self) -> Any:
        return self._context

    @context.setter
    def context(self, value: Any) -> None:
        if self._function is None:
            return
        if value is None:
            self._context = None
        elif is_structured(value):
            self._context = value

    @property
    def arguments(self) -> tuple[Any, ...]:
        return tuple(self._arguments)

    @arguments.setter
    def arguments(self, value: Sequence[Any] | None) -> None:
        if self._function is None:
            return
        if value is None:
            self._arguments = []
        elif _is_argument_sequence(value):
            self._arguments = list(value)

    @property
    def one_shot(self) -> bool:
        return self._one_shot

    @one_shot.setter
    def one_shot(self, value: bool) -> None:
        if self._function is not None and isinstance(value, bool):
            self._one_shot = value

    @property
    def on_removal(self) -> BoundCallable | None:
        return self._on_removal

    @on_removal.setter
    def on_removal(self, value: HandlerSpec) -> None:
        if self._function is None:
            return
        if value is None:
            self._on_removal = None
            return
        hook = BoundCallable(value)
        if hook.is_ready:
            self._on_removal = hook

    @property
    def last_result(self) -> Any:
        return self._last_result

    @property
    def is_ready(self) -> bool:
        """True when a function is assigned."""
        return self._function is not None

    def parse(self, spec: HandlerSpec) -> None:
        """Load state from another bound callable, a descriptor mapping or a bare callable.

        Anything else leaves the instance inert.
        """
        if spec is self:
            return
        if isinstance(spec, BoundCallable):
            self.function = spec.function
            self.context = spec.context
            self.arguments = spec.arguments
            self.one_shot = spec.one_shot
            self.on_removal = spec.on_removal
        elif isinstance(spec, Mapping):
            self.function = spec.get("function")
            self.context = spec.get("context")
            self.arguments = spec.get("arguments")
            self.one_shot = spec.get("one_shot", False)
            self.on_removal = spec.get("on_removal")
        elif callable(spec):
            self.function = spec
        else:
            self._clear()

    def invoke(self, payload: Any = None) -> Any:
        """Call the function and remember its result.

        ``payload`` is appended after the stored arguments only when it is a
        structured value; primitives are dropped. Already bound methods keep
        their own receiver.
        """
        if self._function is None:
            return None
        arguments = [*self._arguments, payload] if is_structured(payload) else list(self._arguments)
        if self._context is not None and not inspect.ismethod(self._function):
            result = self._function(self._context, *arguments)
        else:
            result = self._function(*arguments)
        self._last_result = result
        return result

    def __call__(self, payload: Any = None) -> Any:
        return self.invoke(payload)

    def arguments_equal(self, other: Any, comparison: ArgumentComparison | None = None) -> bool:
        compare = comparison or membership_equal
        return compare(self._arguments, other)

    def equals(self, other: HandlerSpec, *, comparison: ArgumentComparison | None = None) -> bool:
        """Structural equality against another bound callable or any handler spec."""
        if not isinstance(other, BoundCallable):
            other = BoundCallable(other)
        if not _same_function(self._function, other._function):
            return False
        if self._context is not other._context or self._one_shot != other._one_shot:
            return False
        if (self._on_removal is None) != (other._on_removal is None):
            return False
        if self._on_removal is not None and not self._on_removal.equals(
            other._on_removal, comparison=comparison
        ):
            return False
        return self.arguments_equal(other._arguments, comparison)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundCallable):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def run_removal_hook(self) -> Any:
        if self._on_removal is not None:
            return self._on_removal.invoke()
        return None

    def copy(self) -> BoundCallable:
        """Return an independent clone; dict and namespace contexts are duplicated."""
        duplicate = BoundCallable(self._function)
        if not duplicate.is_ready:
            return duplicate
        duplicate.context = _duplicate_context(self._context)
        duplicate.arguments = self._arguments
        duplicate.one_shot = self._one_shot
        if self._on_removal is not None:
            duplicate._on_removal = self._on_removal.copy()
        return duplicate

    def __repr__(self) -> str:
        if self._function is None:
            return "BoundCallable(<inert>)"
        name = getattr(self._function, "__qualname__", repr(self._function))
        flags = ", one_shot" if self._one_shot else ""
        return f"BoundCallable({name}, arguments={self._arguments!r}{flags})"

    def _clear(self) -> None:
        self._function: Callable[..., Any] | None = None
        self._context: Any = None
        self._arguments: list[Any] = []
        self._one_shot = False
        self._on_removal: BoundCallable | None = None
        self._last_result: Any = None


__all__ = [
    "ARGUMENT_COMPARISONS",
    "ArgumentComparison",
    "BoundCallable",
    "HandlerDescriptor",
    "HandlerSpec",
    "is_structured",
    "membership_equal",
    "positional_equal",
    "resolve_comparison",
]
