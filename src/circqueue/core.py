"""Main StringQueue implementation."""

from collections.abc import Iterator

from circqueue import queue as q
from circqueue.errors import (
    AllocationError,
    CorruptedListError,
    PreconditionViolation,
    QueueClosedError,
)
from circqueue.linkedlist import Element, ListNode, iter_nodes, iter_nodes_reverse
from circqueue.types import Payload, SortKey


class StringQueue:
    """
    Double-ended queue of owned byte strings on a circular doubly-linked list.

    Owns a single queue handle and exposes the handle-based operations as
    methods. Payloads are stored as bytes; str input is encoded on insert.
    A StringQueue has one owner and is not thread-safe.
    """

    def __init__(self, *, encoding: str = "utf-8", key: SortKey | None = None) -> None:
        """
        Initialize the queue.

        Args:
            encoding: Encoding used for str payloads on insert and for
                values(decode=True).
            key: Ordering key applied to payloads by sort() and
                delete_dup(). Defaults to plain byte comparison.

        Raises:
            AllocationError: If the queue sentinel cannot be allocated
        """
        head = q.q_new()
        if head is None:
            raise AllocationError("Could not allocate queue")
        self._head: ListNode | None = head
        self._encoding = encoding
        self._key = key

    @property
    def closed(self) -> bool:
        return self._head is None

    def _handle(self) -> ListNode:
        if self._head is None:
            raise QueueClosedError("Queue is closed")
        return self._head

    def close(self) -> None:
        """Release every element and the sentinel. Safe to call twice."""
        if self._head is None:
            return
        q.q_free(self._head)
        self._head = None

    def __enter__(self) -> "StringQueue":
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()

    def insert_head(self, s: Payload) -> bool:
        """Insert a copy of s at the head. Returns False if allocation failed."""
        return q.q_insert_head(self._handle(), s, encoding=self._encoding)

    def insert_tail(self, s: Payload) -> bool:
        """Insert a copy of s at the tail. Returns False if allocation failed."""
        return q.q_insert_tail(self._handle(), s, encoding=self._encoding)

    def pop_head_element(self) -> Element | None:
        """Unlink and return the head element; the caller must release it."""
        return q.q_remove_head(self._handle())

    def pop_tail_element(self) -> Element | None:
        """Unlink and return the tail element; the caller must release it."""
        return q.q_remove_tail(self._handle())

    def remove_head(self) -> bytes | None:
        """Remove the head element and return its payload, or None if empty."""
        return self._consume(self.pop_head_element())

    def remove_tail(self) -> bytes | None:
        """Remove the tail element and return its payload, or None if empty."""
        return self._consume(self.pop_tail_element())

    @staticmethod
    def _consume(element: Element | None) -> bytes | None:
        if element is None:
            return None
        value = element.value
        q.q_release_element(element)
        return value

    def delete_mid(self) -> bool:
        """Delete the middle element (the lower middle for even lengths)."""
        return q.q_delete_mid(self._handle())

    def delete_dup(self, *, strict: bool = False) -> bool:
        """
        Delete every element that has an equal neighbour.

        The queue is expected to be sorted. Unsorted input leaves non-adjacent
        duplicates in place, unless strict is set.

        Args:
            strict: Check that the queue is sorted before touching it

        Raises:
            PreconditionViolation: If strict is set and the queue is not sorted
        """
        head = self._handle()
        if strict and not self.is_sorted():
            raise PreconditionViolation("delete_dup() requires a sorted queue")
        return q.q_delete_dup(head, self._key)

    def swap(self) -> None:
        """Swap every two adjacent elements."""
        q.q_swap(self._handle())

    def reverse(self) -> None:
        """Reverse the element order in place."""
        q.q_reverse(self._handle())

    def sort(self) -> None:
        """Sort ascending (stable) by the queue's key."""
        q.q_sort(self._handle(), self._key)

    def is_sorted(self) -> bool:
        """Return True if payloads are non-decreasing under the queue's key."""
        head = self._handle()
        key = self._key
        for element in iter_nodes(head):
            successor = element.next
            if successor is head:
                break
            if key is None:
                out_of_order = successor.value < element.value  # type: ignore[union-attr, operator]
            else:
                out_of_order = key(successor.value) < key(element.value)  # type: ignore[union-attr, arg-type]
            if out_of_order:
                return False
        return True

    def values(self, *, decode: bool = False) -> list[bytes] | list[str]:
        """Return a snapshot of all payloads from head to tail."""
        if decode:
            return [value.decode(self._encoding) for value in self]
        return list(self)

    def check_integrity(self) -> None:
        """
        Verify the circular doubly-linked invariants.

        Walks forward by next and backward by prev, checking that every
        neighbour points back and that both walks see the same number of
        elements before returning to the sentinel.

        Raises:
            CorruptedListError: If any link is inconsistent
        """
        head = self._handle()
        forward = 0
        node = head
        while True:
            nxt = node.next
            if nxt is None or nxt.prev is not node:
                raise CorruptedListError(f"Broken next link after element {forward}")
            node = nxt
            if node is head:
                break
            forward += 1
        backward = 0
        while True:
            prv = node.prev
            if prv is None or prv.next is not node:
                raise CorruptedListError(f"Broken prev link before element {backward}")
            node = prv
            if node is head:
                break
            backward += 1
        if forward != backward:
            raise CorruptedListError(
                f"Forward walk saw {forward} elements, backward walk saw {backward}"
            )

    def __len__(self) -> int:
        """Return the number of elements (O(n) traversal)."""
        return q.q_size(self._head)

    def __bool__(self) -> bool:
        """Return True if the queue is open and non-empty."""
        return self._head is not None and self._head.next is not self._head

    def __iter__(self) -> Iterator[bytes]:
        """Iterate over payloads from head to tail."""
        for element in iter_nodes(self._handle()):
            yield element.value  # type: ignore[misc]

    def __reversed__(self) -> Iterator[bytes]:
        """Iterate over payloads from tail to head."""
        for element in iter_nodes_reverse(self._handle()):
            yield element.value  # type: ignore[misc]

    def __repr__(self) -> str:
        if self._head is None:
            return f"<{self.__class__.__name__} closed>"
        return f"<{self.__class__.__name__} {list(self)!r}>"
