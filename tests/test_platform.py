from boardforge.platform import Document, MemoryNode, NodeEvent


def test_duplicate_listener_is_registered_once():
    node = MemoryNode()

    def listener(event):
        pass

    node.add_event_listener("click", listener)
    node.add_event_listener("click", listener)

    assert node.listener_count("click") == 1


def test_fire_delivers_node_event_by_default():
    node = MemoryNode("button")
    received: list = []
    node.add_event_listener("click", received.append)

    assert node.fire("click") == 1
    event = received[0]
    assert isinstance(event, NodeEvent)
    assert event.kind == "click"
    assert event.target is node

    node.fire("click", {"x": 1})
    assert received[1] == {"x": 1}


def test_listener_removed_during_delivery_is_skipped():
    node = MemoryNode()
    log: list = []

    def second(event):
        log.append("second")

    def first(event):
        log.append("first")
        node.remove_event_listener("click", second)

    node.add_event_listener("click", first)
    node.add_event_listener("click", second)

    assert node.fire("click") == 1
    assert log == ["first"]


def test_remove_unknown_listener_is_noop():
    node = MemoryNode()
    node.remove_event_listener("click", print)
    assert node.listener_count("click") == 0


def test_query_selector_by_id_class_and_tag():
    document = Document()
    section = document.create_element("section", id="board", classes=("grid",))
    cell = document.create_element("div", classes=("cell",))
    section.append(cell)
    document.body.append(section)

    assert document.query_selector("#board") is section
    assert document.query_selector(".cell") is cell
    assert document.query_selector("DIV") is cell
    assert document.query_selector("body") is document.body
    assert document.query_selector("#nothing") is None


def test_append_moves_node_between_parents():
    first, second, child = MemoryNode(), MemoryNode(), MemoryNode()
    first.append(child)
    second.append(child)

    assert child.parent is second
    assert first.children == []
    child.remove()
    assert child.parent is None
    assert second.children == []
