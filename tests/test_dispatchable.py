import pytest

from boardforge.clickable import CLICK, Clickable
from boardforge.dispatchable import Dispatchable
from boardforge.exceptions import ListenerStillActive
from boardforge.platform import Document, MemoryNode


def record(log, name, *rest):
    log.append(name)


def spec(log, name, **extra):
    return {"function": record, "context": log, "arguments": [name], **extra}


def test_node_is_resolved_from_selector():
    document = Document()
    node = document.create_element("div", id="board")
    document.body.append(node)

    assert Dispatchable("#board", document=document).node is node
    assert Dispatchable("#missing", document=document).node is None
    assert Dispatchable(42).node is None


def test_registries_are_created_lazily():
    item = Dispatchable(MemoryNode())
    assert not item.has_registry(CLICK)

    assert item.add_handler(CLICK, print)
    assert item.has_registry(CLICK)
    assert item.has_handlers(CLICK)
    assert item.add_handler("", print) is False


def test_add_handler_position_first():
    log: list = []
    item = Dispatchable(MemoryNode())
    item.add_handler(CLICK, spec(log, "b"))
    item.add_handler(CLICK, spec(log, "a"), position="first")

    item.dispatch_event(CLICK)

    assert log == ["a", "b"]
    assert item.index_of_handler(CLICK, spec(log, "a")) == 0
    assert item.index_of_handler("hover", spec(log, "a")) == -1


def test_activate_listener_is_idempotent():
    node = MemoryNode()
    item = Dispatchable(node)
    item.add_handler(CLICK, print)

    first = item.activate_listener(CLICK)
    second = item.activate_listener(CLICK)

    assert first is second
    assert node.listener_count(CLICK) == 1
    assert item.registry(CLICK).is_attached


def test_activate_without_registry_or_node_returns_none():
    assert Dispatchable(MemoryNode()).activate_listener(CLICK) is None
    detached = Dispatchable()
    detached.reset_handlers(CLICK)
    assert detached.activate_listener(CLICK) is None


def test_deactivate_without_activation_is_noop():
    item = Dispatchable(MemoryNode())
    item.deactivate_listener(CLICK)
    assert not item.is_listener_active(CLICK)


def test_native_event_reaches_handlers_once():
    log: list = []
    node = MemoryNode()
    item = Dispatchable(node)
    item.add_handler(CLICK, spec(log, "a"))
    item.add_handler(CLICK, spec(log, "b"))
    item.activate_listener(CLICK)

    assert node.fire(CLICK) == 1
    assert log == ["a", "b"]

    item.deactivate_listener(CLICK)
    assert node.fire(CLICK) == 0
    assert not item.registry(CLICK).is_attached


def test_reset_handlers_deactivates_and_reissues_entry_point():
    node = MemoryNode()
    item = Dispatchable(node)
    item.add_handler(CLICK, print)
    old_token = item.activate_listener(CLICK)

    item.reset_handlers(CLICK)

    assert node.listener_count(CLICK) == 0
    assert not item.has_handlers(CLICK)
    assert item.registry(CLICK).entry_point is not old_token


def test_reset_handlers_creates_missing_registry():
    item = Dispatchable(MemoryNode())
    item.reset_handlers(CLICK)
    assert item.has_registry(CLICK)
    assert not item.has_handlers(CLICK)


def test_reset_of_attached_registry_is_refused():
    item = Dispatchable(MemoryNode())
    item.add_handler(CLICK, print)
    item.activate_listener(CLICK)

    with pytest.raises(ListenerStillActive):
        item.registry(CLICK).reset()


def test_unpublish_drops_every_subscription():
    document = Document()
    node = document.create_element("div")
    document.body.append(node)
    item = Dispatchable(node, document=document)
    for kind in (CLICK, "hover"):
        item.add_handler(kind, print)
        item.activate_listener(kind)
    assert item.active_kinds == (CLICK, "hover")

    item.unpublish()

    assert item.active_kinds == ()
    assert node.listener_count(CLICK) == 0
    assert node.listener_count("hover") == 0
    assert node.parent is None


def test_replacing_node_drops_subscriptions_on_old_node():
    old_node = MemoryNode()
    item = Dispatchable(old_node)
    item.add_handler(CLICK, print)
    item.activate_listener(CLICK)

    item.node = MemoryNode()

    assert old_node.listener_count(CLICK) == 0
    assert not item.is_listener_active(CLICK)


def test_presentation_helpers():
    document = Document()
    item = Dispatchable(document=document)
    item.create("section", "main", ("a", "b"), (("--size", "3"),))

    assert item.tag_name == "section"
    assert item.id == "main"
    assert item.has_class("a") and item.has_class("b")

    item.add_class("bad name")
    assert not item.has_class("bad name")

    item.remove_style(("--size", "4"))
    assert item.node.style("--size") == "3"
    item.remove_style(("--size", "3"))
    assert item.node.style("--size") is None

    item.publish(document.body)
    assert document.query_selector("#main") is item.node


def test_create_with_invalid_tag_clears_node():
    item = Dispatchable(MemoryNode())
    item.create("1nvalid")
    assert item.node is None


def test_clickable_toggles_class_and_listener():
    log: list = []
    node = MemoryNode()
    item = Clickable(node, "is-clickable")
    item.add_click_handler(spec(log, "clicked"))

    item.activate_click()
    assert item.is_clickable
    assert node.has_class("is-clickable")
    node.fire(CLICK)

    item.deactivate_click()
    assert not item.is_clickable
    assert not node.has_class("is-clickable")
    node.fire(CLICK)
    item.click()

    assert log == ["clicked"]


def test_clickable_after_click_handler():
    log: list = []
    item = Clickable(MemoryNode())
    item.add_click_handler(spec(log, "h1"))
    item.add_click_handler(spec(log, "h2"))
    item.set_after_click_handler(spec(log, "after"))
    item.activate_click()

    item.click()

    assert log == ["h1", "after", "h2", "after"]
