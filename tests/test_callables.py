from types import SimpleNamespace

import pytest

from boardforge.callables import (
    BoundCallable,
    is_structured,
    membership_equal,
    positional_equal,
    resolve_comparison,
)


def collect(target, *args):
    target.append(args)
    return len(target)


class Counter:
    def __init__(self) -> None:
        self.hits = 0

    def bump(self, *args) -> int:
        self.hits += 1
        return self.hits


def test_inert_callable_ignores_setters():
    handler = BoundCallable()
    handler.context = {"a": 1}
    handler.arguments = [1, 2]
    handler.one_shot = True
    handler.on_removal = collect

    assert not handler.is_ready
    assert handler.context is None
    assert handler.arguments == ()
    assert handler.one_shot is False
    assert handler.on_removal is None
    assert handler.invoke() is None


def test_assigning_function_resets_other_fields():
    log: list = []
    handler = BoundCallable({"function": collect, "context": log, "arguments": [1], "one_shot": True})
    handler.function = print

    assert handler.context is None
    assert handler.arguments == ()
    assert handler.one_shot is False


def test_invalid_specs_leave_callable_inert():
    for spec in (None, 42, "collect", {"context": []}, {"function": "nope"}):
        assert not BoundCallable(spec).is_ready


def test_invoke_passes_context_then_arguments_then_structured_payload():
    log: list = []
    handler = BoundCallable({"function": collect, "context": log, "arguments": [1, 2]})
    payload = {"kind": "click"}

    assert handler.invoke(payload) == 1
    assert log == [(1, 2, payload)]
    assert handler.last_result == 1


def test_primitive_payload_is_dropped():
    log: list = []
    handler = BoundCallable({"function": collect, "context": log, "arguments": ["a"]})

    handler.invoke(5)
    handler("text")

    assert log == [("a",), ("a",)]


def test_primitive_context_is_ignored():
    handler = BoundCallable({"function": collect, "context": 3})
    assert handler.context is None


def test_bound_method_keeps_its_receiver():
    counter = Counter()
    other = Counter()
    handler = BoundCallable({"function": counter.bump, "context": other})

    handler.invoke()

    assert counter.hits == 1
    assert other.hits == 0


def test_parse_from_another_bound_callable_copies_fields():
    log: list = []
    original = BoundCallable({"function": collect, "context": log, "arguments": [1], "one_shot": True})
    clone = BoundCallable(original)

    assert clone is not original
    assert clone.equals(original)
    assert clone.one_shot is True


def test_equality_is_structural():
    log: list = []
    first = BoundCallable({"function": collect, "context": log, "arguments": [1, 2]})
    second = BoundCallable({"function": collect, "context": log, "arguments": [1, 2]})
    third = BoundCallable({"function": collect, "context": [], "arguments": [1, 2]})

    assert first == second
    assert first != third
    assert first.equals({"function": collect, "context": log, "arguments": [1, 2]})


def test_bound_methods_compare_by_function_and_receiver():
    counter = Counter()
    assert BoundCallable(counter.bump) == BoundCallable(counter.bump)
    assert BoundCallable(counter.bump) != BoundCallable(Counter().bump)


def test_one_shot_and_removal_hook_take_part_in_equality():
    plain = BoundCallable(collect)
    one_shot = BoundCallable({"function": collect, "one_shot": True})
    hooked = BoundCallable({"function": collect, "on_removal": print})

    assert plain != one_shot
    assert plain != hooked


def test_bound_callables_are_unhashable():
    with pytest.raises(TypeError):
        hash(BoundCallable(collect))


def test_reordered_arguments_are_equal_by_default():
    log: list = []
    first = BoundCallable({"function": collect, "context": log, "arguments": [1, 2]})
    second = BoundCallable({"function": collect, "context": log, "arguments": [2, 1]})

    assert first.arguments_equal(second.arguments)
    assert first.equals(second)
    assert not first.equals(second, comparison=positional_equal)


def test_membership_comparison_ignores_duplicates():
    assert membership_equal([1, 1, 2], [1, 2, 2])
    assert not positional_equal([1, 1, 2], [1, 2, 2])
    assert not membership_equal([1], [1, 1])
    assert not membership_equal([1], "1")


def test_resolve_comparison_by_name():
    assert resolve_comparison("membership") is membership_equal
    assert resolve_comparison("positional") is positional_equal
    with pytest.raises(ValueError):
        resolve_comparison("fuzzy")


def test_copy_is_independent():
    original = BoundCallable({"function": collect, "context": [], "arguments": [1, 2]})
    duplicate = original.copy()
    duplicate.arguments = [3]

    assert original.arguments == (1, 2)
    assert duplicate.arguments == (3,)


def test_copy_duplicates_dict_and_namespace_contexts():
    dict_handler = BoundCallable({"function": collect, "context": {"score": 1}})
    ns_handler = BoundCallable({"function": collect, "context": SimpleNamespace(score=1)})

    dict_copy = dict_handler.copy()
    ns_copy = ns_handler.copy()
    dict_copy.context["score"] = 2
    ns_copy.context.score = 2

    assert dict_handler.context == {"score": 1}
    assert ns_handler.context.score == 1


def test_copy_clones_removal_hook():
    original = BoundCallable({"function": collect, "on_removal": {"function": collect, "arguments": [1]}})
    duplicate = original.copy()

    assert duplicate.on_removal is not original.on_removal
    assert duplicate.on_removal.equals(original.on_removal)


def test_run_removal_hook_without_payload():
    log: list = []
    handler = BoundCallable({"function": print, "on_removal": {"function": collect, "context": log}})

    handler.run_removal_hook()

    assert log == [()]


def test_is_structured():
    assert is_structured({})
    assert is_structured(SimpleNamespace())
    assert not is_structured(None)
    assert not is_structured("click")
    assert not is_structured(True)


def test_membership_comparison_is_one_way():
    assert membership_equal([1, 1], [1, 2])
    assert not membership_equal([1, 2], [1, 1])
