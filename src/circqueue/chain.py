"""Acyclic next-only chains used while a queue is being merge sorted.

A chain is a run of elements linked by ``next`` only and terminated by
``None``. Splitting and merging never touch ``prev``, so inside a chain those
links keep the pre-sort order; restore_chain() relies on that to undo an
aborted sort. Chains exist only between detach_chain() and attach_chain() or
restore_chain(); outside that window every queue is circular and doubly
linked.
"""

from circqueue.errors import PreconditionViolation
from circqueue.linkedlist import Element, ListNode, init_list_head, is_empty
from circqueue.types import SortKey


def _identity(value: bytes) -> bytes:
    return value


def detach_chain(head: ListNode) -> Element | None:
    """Break the queue at head into a chain and return its first element.

    The last element's next link is cut and head is left as an empty list.
    Returns None for an empty queue.
    """
    if is_empty(head):
        return None
    first = head.next
    head.prev.next = None  # type: ignore[union-attr]
    init_list_head(head)
    return first  # type: ignore[return-value]


def attach_chain(head: ListNode, first: Element | None) -> None:
    """Link the chain starting at first back into the empty queue at head.

    Every prev link is rebuilt and both ends are reattached to head.
    """
    if not is_empty(head):
        raise PreconditionViolation("attach_chain() needs an empty queue head")
    tail: ListNode = head
    tail.next = first
    while tail.next is not None:
        tail.next.prev = tail
        tail = tail.next
    tail.next = head
    head.prev = tail


def restore_chain(head: ListNode, last: Element) -> None:
    """Relink a detached queue in its original order after an aborted sort.

    Splitting and merging only ever write ``next``, so the ``prev`` links
    still describe the order the queue had before detach_chain(). They are
    walked back from last to rebuild every ``next`` link and both sentinel
    links.
    """
    node: ListNode = last
    node.next = head
    while node.prev is not head:
        node.prev.next = node  # type: ignore[union-attr]
        node = node.prev  # type: ignore[assignment]
    head.next = node
    head.prev = last


def chain_midpoint(first: ListNode) -> ListNode:
    """Return the last node of the first half of the chain.

    Uses a fast/slow walk: fast moves two links per step, slow one. For a
    chain of n nodes the result is node (n - 1) // 2, so the first half holds
    ceil(n / 2) nodes and the second half the rest.
    """
    slow = first
    fast = first.next
    while fast is not None and fast.next is not None:
        slow = slow.next  # type: ignore[assignment]
        fast = fast.next.next
    return slow


def merge_chains(
    left: Element | None, right: Element | None, key: SortKey | None = None
) -> Element | None:
    """Merge two ascending chains into one ascending chain.

    Ties go to the left chain, which keeps the merge stable.
    """
    if key is None:
        key = _identity
    dummy = ListNode()
    tail = dummy
    while left is not None and right is not None:
        if key(right.value) < key(left.value):  # type: ignore[arg-type]
            tail.next = right
            right = right.next  # type: ignore[assignment]
        else:
            tail.next = left
            left = left.next  # type: ignore[assignment]
        tail = tail.next
    # Whatever is left over is already sorted and None-terminated
    tail.next = left if left is not None else right
    return dummy.next  # type: ignore[return-value]


def merge_sort_chain(first: Element | None, key: SortKey | None = None) -> Element | None:
    """Sort a chain by recursive split and merge. Returns the new first node."""
    if first is None or first.next is None:
        return first
    mid = chain_midpoint(first)
    second = mid.next
    mid.next = None
    return merge_chains(
        merge_sort_chain(first, key),
        merge_sort_chain(second, key),  # type: ignore[arg-type]
        key,
    )
