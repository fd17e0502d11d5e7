"""Shared helpers for circqueue tests."""

from collections.abc import Iterable

import pytest

from circqueue import ListNode, q_insert_tail, q_new
from circqueue.linkedlist import iter_nodes


def assert_circular(head: ListNode) -> int:
    """Assert the doubly-linked circular invariants and return the element count."""
    count = 0
    node = head.next
    while node is not head:
        assert node is not None
        assert node.prev.next is node
        assert node.next.prev is node
        count += 1
        node = node.next
    # Walking back the same number of steps lands on the sentinel again
    node = head
    for _ in range(count + 1):
        node = node.prev
    assert node is head
    return count


def payloads(head: ListNode) -> list[bytes]:
    return [element.value for element in iter_nodes(head)]


def make_queue(items: Iterable[str | bytes]) -> ListNode:
    head = q_new()
    assert head is not None
    for item in items:
        assert q_insert_tail(head, item)
    return head


@pytest.fixture
def head() -> ListNode:
    """An empty queue handle."""
    queue = q_new()
    assert queue is not None
    return queue
