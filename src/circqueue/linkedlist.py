"""Intrusive circular doubly-linked list primitives with a sentinel head."""

from collections.abc import Iterator

from circqueue.errors import PreconditionViolation
from circqueue.types import Payload


class ListNode:
    """A link record. A bare ListNode acts as the sentinel of a queue."""

    __slots__ = ("prev", "next")

    def __init__(self) -> None:
        self.prev: ListNode | None = None
        self.next: ListNode | None = None

    @property
    def linked(self) -> bool:
        """Return True if the node is currently part of a list."""
        return self.next is not None


class Element(ListNode):
    """A list node that owns a byte-string payload."""

    __slots__ = ("value",)

    def __init__(self, value: bytes) -> None:
        super().__init__()
        self.value: bytes | None = value

    @classmethod
    def create(cls, payload: Payload, encoding: str = "utf-8") -> "Element":
        """Create a detached element holding a private copy of payload.

        Raises:
            PreconditionViolation: If payload is not str or a bytes-like
                buffer (ints and arbitrary iterables are refused)
        """
        if isinstance(payload, str):
            return cls(payload.encode(encoding))
        if not isinstance(payload, (bytes, bytearray, memoryview)):
            raise PreconditionViolation(
                f"Payload must be str, bytes, bytearray or memoryview, not {type(payload).__name__}"
            )
        return cls(bytes(payload))

    @property
    def released(self) -> bool:
        return self.value is None

    def __repr__(self) -> str:
        return f"<Element {self.value!r}>"


def init_list_head(head: ListNode) -> None:
    """Make head an empty circular list. O(1)."""
    head.next = head
    head.prev = head


def _splice(node: ListNode, before: ListNode, after: ListNode) -> None:
    if node.linked:
        raise PreconditionViolation(f"{node!r} is already linked into a list")
    after.prev = node
    node.next = after
    node.prev = before
    before.next = node


def insert_after(anchor: ListNode, node: ListNode) -> None:
    """Link a detached node immediately after anchor. O(1)."""
    _splice(node, anchor, anchor.next)  # type: ignore[arg-type]


def insert_before(anchor: ListNode, node: ListNode) -> None:
    """Link a detached node immediately before anchor. O(1)."""
    _splice(node, anchor.prev, anchor)  # type: ignore[arg-type]


def unlink(node: ListNode) -> None:
    """Remove node from its list without releasing it. O(1).

    The node's own links are cleared, leaving it detached.
    """
    before, after = node.prev, node.next
    if before is None or after is None:
        raise PreconditionViolation(f"{node!r} is not linked into a list")
    before.next = after
    after.prev = before
    node.prev = None
    node.next = None


def move_to(node: ListNode, anchor: ListNode) -> None:
    """Unlink node and relink it immediately before anchor."""
    unlink(node)
    insert_before(anchor, node)


def move_after(node: ListNode, anchor: ListNode) -> None:
    """Unlink node and relink it immediately after anchor."""
    unlink(node)
    insert_after(anchor, node)


def is_empty(head: ListNode) -> bool:
    return head.next is head


def is_singular(head: ListNode) -> bool:
    """Return True if the list holds exactly one element."""
    return head.next is not head and head.next is head.prev


def first_entry(head: ListNode) -> Element | None:
    if is_empty(head):
        return None
    return head.next  # type: ignore[return-value]


def last_entry(head: ListNode) -> Element | None:
    if is_empty(head):
        return None
    return head.prev  # type: ignore[return-value]


def iter_nodes(head: ListNode) -> Iterator[Element]:
    """Iterate over the elements from first to last.

    The loop body must not unlink or move the yielded node; use
    iter_nodes_safe() for that.
    """
    node = head.next
    while node is not head:
        yield node  # type: ignore[misc]
        node = node.next  # type: ignore[union-attr]


def iter_nodes_safe(head: ListNode) -> Iterator[Element]:
    """Iterate over the elements, tolerating removal of the yielded node.

    The successor is captured before each node is yielded, so the caller may
    unlink, release or move the current node (but not its successor).
    """
    node = head.next
    while node is not head:
        safe = node.next  # type: ignore[union-attr]
        yield node  # type: ignore[misc]
        node = safe


def iter_nodes_reverse(head: ListNode) -> Iterator[Element]:
    """Iterate over the elements from last to first by following prev links."""
    node = head.prev
    while node is not head:
        yield node  # type: ignore[misc]
        node = node.prev  # type: ignore[union-attr]
