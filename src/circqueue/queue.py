"""Handle-based queue operations over a circular doubly-linked list.

A queue handle is the sentinel ListNode returned by q_new(). Passing None as
a handle stands for a queue that was never created; every operation treats it
as a no-op or failure and reports that through its return value.

A queue has exactly one owner, and operations on the same queue must not be
called concurrently. Nothing here locks.
"""

import logging

from circqueue.chain import attach_chain, detach_chain, merge_sort_chain, restore_chain
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
    iter_nodes_safe,
    last_entry,
    move_after,
    move_to,
    unlink,
)
from circqueue.types import Payload, SortKey

logger = logging.getLogger(__name__)


def _identity(value: bytes) -> bytes:
    return value


def q_new() -> ListNode | None:
    """Create an empty queue. Returns None if the sentinel cannot be allocated."""
    try:
        head = ListNode()
    except MemoryError:
        logger.warning("Could not allocate queue sentinel")
        return None
    init_list_head(head)
    return head


def q_free(head: ListNode | None) -> None:
    """Release every element and tear down the sentinel."""
    if head is None:
        return
    count = 0
    for element in iter_nodes_safe(head):
        _delete(element)
        count += 1
    head.next = None
    head.prev = None
    logger.debug("Freed queue with %d elements", count)


def _new_element(payload: Payload, encoding: str) -> Element | None:
    try:
        return Element.create(payload, encoding)
    except MemoryError:
        logger.warning("Could not allocate element of %d bytes", len(payload))
        return None
    except UnicodeEncodeError as exc:
        logger.warning("Could not encode payload as %s: %s", encoding, exc.reason)
        return None


def q_insert_head(head: ListNode | None, s: Payload, *, encoding: str = "utf-8") -> bool:
    """
    Insert a copy of s at the head of the queue.

    Returns:
        True on success, False if head is None, the element could not be
        allocated or a str payload could not be encoded. The queue is
        untouched on failure.

    Raises:
        PreconditionViolation: If s is not str, bytes, bytearray or memoryview
    """
    if head is None:
        return False
    element = _new_element(s, encoding)
    if element is None:
        return False
    insert_after(head, element)
    return True


def q_insert_tail(head: ListNode | None, s: Payload, *, encoding: str = "utf-8") -> bool:
    """Insert a copy of s at the tail of the queue. Same contract as q_insert_head()."""
    if head is None:
        return False
    element = _new_element(s, encoding)
    if element is None:
        return False
    insert_before(head, element)
    return True


def _take(element: Element, sp: bytearray | None, bufsize: int | None) -> Element:
    if sp is not None:
        if bufsize is None:
            bufsize = len(sp)
        if bufsize > len(sp):
            raise PreconditionViolation(
                f"bufsize {bufsize} exceeds the {len(sp)}-byte output buffer"
            )
        if bufsize > 0:
            # strncpy semantics: zero padded, always terminated
            n = bufsize - 1
            sp[:n] = element.value[:n].ljust(n, b"\0")  # type: ignore[index]
            sp[n] = 0
    unlink(element)
    return element


def q_remove_head(
    head: ListNode | None,
    sp: bytearray | None = None,
    bufsize: int | None = None,
) -> Element | None:
    """
    Unlink and return the first element. The caller owns the result.

    Args:
        head: Queue handle
        sp: Optional output buffer; receives up to bufsize - 1 bytes of the
            payload followed by a zero byte
        bufsize: Usable size of sp (defaults to len(sp))

    Returns:
        The detached element, or None if head is None or the queue is empty.

    Raises:
        PreconditionViolation: If bufsize is larger than sp
    """
    if head is None:
        return None
    element = first_entry(head)
    if element is None:
        return None
    return _take(element, sp, bufsize)


def q_remove_tail(
    head: ListNode | None,
    sp: bytearray | None = None,
    bufsize: int | None = None,
) -> Element | None:
    """Unlink and return the last element. Same contract as q_remove_head()."""
    if head is None:
        return None
    element = last_entry(head)
    if element is None:
        return None
    return _take(element, sp, bufsize)


def q_release_element(element: Element) -> None:
    """Release a detached element and its payload.

    Raises:
        PreconditionViolation: If the element is still linked into a list
    """
    if element.linked:
        raise PreconditionViolation(f"{element!r} is still linked; remove it first")
    element.value = None


def _delete(element: Element) -> None:
    unlink(element)
    q_release_element(element)


def q_size(head: ListNode | None) -> int:
    """Count the elements by walking the whole list. O(n)."""
    if head is None or is_empty(head):
        return 0
    count = 0
    for _ in iter_nodes(head):
        count += 1
    return count


def q_delete_mid(head: ListNode | None) -> bool:
    """Delete the middle element, zero-based index (n - 1) // 2.

    Odd lengths lose the exact middle (index n // 2); even lengths lose the
    lower of the two middle elements, so for six elements the third one
    (index 2) is deleted.
    Returns False if head is None or the queue is empty.
    """
    if head is None or is_empty(head):
        return False
    fast = slow = head.next
    # Also stopping when fast.next.next is the sentinel ends one step earlier
    # than a plain fast/slow walk on even lengths (which would land on n // 2)
    while fast.next is not head and fast.next.next is not head:  # type: ignore[union-attr]
        fast = fast.next.next  # type: ignore[union-attr]
        slow = slow.next  # type: ignore[union-attr]
    _delete(slow)  # type: ignore[arg-type]
    return True


def q_delete_dup(head: ListNode | None, key: SortKey | None = None) -> bool:
    """
    Delete every element whose payload occurs more than once in a run.

    The queue must already be sorted ascending (under the same key); only
    adjacent duplicates are detected and the result on unsorted input is
    unspecified. Elements are compared with key(payload) when key is given.

    Returns:
        True, or False if head is None.
    """
    if head is None:
        return False
    if is_empty(head) or is_singular(head):
        return True
    if key is None:
        key = _identity
    dup = False
    deleted = 0
    for element in iter_nodes_safe(head):
        successor = element.next
        if successor is not head and key(element.value) == key(successor.value):  # type: ignore
            _delete(element)
            dup = True
            deleted += 1
        elif dup:
            _delete(element)
            dup = False
            deleted += 1
    logger.debug("delete_dup removed %d elements", deleted)
    return True


def q_swap(head: ListNode | None) -> None:
    """Swap every two adjacent elements; an odd last element stays put."""
    if head is None or is_empty(head) or is_singular(head):
        return
    node = head.next
    while node is not head and node.next is not head:  # type: ignore[union-attr]
        move_to(node.next, node)  # type: ignore[union-attr, arg-type]
        # node is now the second of its pair
        node = node.next  # type: ignore[union-attr]


def q_reverse(head: ListNode | None) -> None:
    """Reverse the queue in place. Nothing is allocated or released."""
    if head is None or is_empty(head) or is_singular(head):
        return
    for node in iter_nodes_safe(head):
        move_after(node, head)


def q_sort(head: ListNode | None, key: SortKey | None = None) -> None:
    """
    Sort the queue ascending by payload with a stable merge sort.

    Only links are rewritten. The list is broken into an acyclic chain for
    the duration of the sort and is circular again on return.
    If key raises or produces keys that cannot be compared, the queue is
    relinked in its original order before the exception propagates.
    """
    if head is None or is_empty(head) or is_singular(head):
        return
    last: Element = head.prev  # type: ignore[assignment]
    first = detach_chain(head)
    try:
        ordered = merge_sort_chain(first, key)
    except BaseException:
        restore_chain(head, last)
        logger.warning("Sort aborted; queue %#x left in its original order", id(head))
        raise
    attach_chain(head, ordered)
    logger.debug("Sorted queue %#x", id(head))
