"""Tests for the intrusive circular doubly-linked list primitives."""

import pytest

from circqueue.errors import PreconditionViolation
from circqueue.linkedlist import (
    Element,
    ListNode,
    first_entry,
    init_list_head,
    insert_after,
    insert_before,
    is_empty,
    is_singular,
    iter_nodes,
    iter_nodes_reverse,
    iter_nodes_safe,
    last_entry,
    move_after,
    move_to,
    unlink,
)
from conftest import assert_circular


def _new_list() -> ListNode:
    head = ListNode()
    init_list_head(head)
    return head


def _order(head: ListNode) -> list[bytes]:
    return [node.value for node in iter_nodes(head)]


def test_node_creation() -> None:
    """Test creating a detached element."""
    node = Element(b"a")
    assert node.value == b"a"
    assert node.prev is None
    assert node.next is None
    assert not node.linked
    assert not node.released


def test_element_create_copies_payload() -> None:
    """Test that element payloads never alias the caller's buffer."""
    buf = bytearray(b"hello")
    node = Element.create(buf)
    buf[0] = ord("j")
    assert node.value == b"hello"
    assert isinstance(node.value, bytes)


def test_element_create_encodes_str() -> None:
    """Test that str payloads are encoded."""
    assert Element.create("héllo").value == "héllo".encode("utf-8")
    assert Element.create("héllo", "latin-1").value == b"h\xe9llo"


def test_empty_list() -> None:
    """Test empty list behavior."""
    head = _new_list()
    assert head.next is head
    assert head.prev is head
    assert is_empty(head)
    assert not is_singular(head)
    assert first_entry(head) is None
    assert last_entry(head) is None
    assert list(iter_nodes(head)) == []


def test_insert_after_head() -> None:
    """Test inserting at the front."""
    head = _new_list()
    node1 = Element(b"a")
    node2 = Element(b"b")

    insert_after(head, node1)
    assert is_singular(head)
    insert_after(head, node2)

    assert _order(head) == [b"b", b"a"]
    assert first_entry(head) is node2
    assert last_entry(head) is node1
    assert assert_circular(head) == 2


def test_insert_before_head() -> None:
    """Test inserting at the back."""
    head = _new_list()
    node1 = Element(b"a")
    node2 = Element(b"b")

    insert_before(head, node1)
    insert_before(head, node2)

    assert _order(head) == [b"a", b"b"]
    assert not is_singular(head)
    assert assert_circular(head) == 2


def test_insert_between_elements() -> None:
    """Test inserting adjacent to a non-sentinel anchor."""
    head = _new_list()
    a, b, c = Element(b"a"), Element(b"b"), Element(b"c")
    insert_before(head, a)
    insert_before(head, c)

    insert_after(a, b)
    assert _order(head) == [b"a", b"b", b"c"]

    d = Element(b"d")
    insert_before(c, d)
    assert _order(head) == [b"a", b"b", b"d", b"c"]
    assert_circular(head)


def test_insert_linked_node_rejected() -> None:
    """Test that a node cannot be linked twice."""
    head = _new_list()
    node = Element(b"a")
    insert_before(head, node)

    with pytest.raises(PreconditionViolation):
        insert_after(head, node)
    with pytest.raises(PreconditionViolation):
        insert_before(head, node)
    assert assert_circular(head) == 1


def test_unlink() -> None:
    """Test unlinking nodes."""
    head = _new_list()
    nodes = [Element(v) for v in (b"a", b"b", b"c")]
    for node in nodes:
        insert_before(head, node)

    unlink(nodes[1])
    assert _order(head) == [b"a", b"c"]
    assert nodes[1].prev is None
    assert nodes[1].next is None
    assert nodes[1].value == b"b"

    unlink(nodes[0])
    unlink(nodes[2])
    assert is_empty(head)
    assert_circular(head)


def test_unlink_detached_rejected() -> None:
    """Test that unlinking a detached node is refused."""
    with pytest.raises(PreconditionViolation):
        unlink(Element(b"a"))


def test_move_to() -> None:
    """Test moving a node in front of an anchor."""
    head = _new_list()
    nodes = [Element(v) for v in (b"a", b"b", b"c")]
    for node in nodes:
        insert_before(head, node)

    move_to(nodes[2], nodes[0])
    assert _order(head) == [b"c", b"a", b"b"]

    move_to(nodes[2], head)
    assert _order(head) == [b"a", b"b", b"c"]
    assert_circular(head)


def test_move_after() -> None:
    """Test moving a node behind an anchor."""
    head = _new_list()
    nodes = [Element(v) for v in (b"a", b"b", b"c")]
    for node in nodes:
        insert_before(head, node)

    move_after(nodes[2], head)
    assert _order(head) == [b"c", b"a", b"b"]

    move_after(nodes[2], nodes[1])
    assert _order(head) == [b"a", b"b", b"c"]
    assert_circular(head)


def test_iter_nodes_safe_allows_unlink() -> None:
    """Test that the safe iterator tolerates unlinking the current node."""
    head = _new_list()
    for value in (b"a", b"b", b"c", b"d"):
        insert_before(head, Element(value))

    for node in iter_nodes_safe(head):
        if node.value in (b"a", b"c"):
            unlink(node)

    assert _order(head) == [b"b", b"d"]
    assert_circular(head)


def test_iter_nodes_reverse() -> None:
    """Test walking the list backwards."""
    head = _new_list()
    for value in (b"a", b"b", b"c"):
        insert_before(head, Element(value))

    assert [node.value for node in iter_nodes_reverse(head)] == [b"c", b"b", b"a"]


def test_stress_mixed_operations() -> None:
    """Test many interleaved link operations keep the list consistent."""
    head = _new_list()
    nodes = [Element(f"key{i}".encode()) for i in range(50)]

    for i in range(30):
        if i % 2 == 0:
            insert_before(head, nodes[i])
        else:
            insert_after(head, nodes[i])
    assert assert_circular(head) == 30

    for i in range(0, 30, 3):
        unlink(nodes[i])
    assert assert_circular(head) == 20

    for i in range(30, 50):
        insert_before(head, nodes[i])
    assert assert_circular(head) == 40

    for i in range(31, 50, 2):
        move_after(nodes[i], head)
    assert assert_circular(head) == 40
    assert first_entry(head) is nodes[49]


def test_element_create_rejects_non_buffers() -> None:
    """Test ints and iterables of ints are not accepted as payloads."""
    with pytest.raises(PreconditionViolation):
        Element.create(3)  # type: ignore[arg-type]
    with pytest.raises(PreconditionViolation):
        Element.create([104, 105])  # type: ignore[arg-type]
