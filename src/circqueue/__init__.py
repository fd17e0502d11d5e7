"""circqueue - Circular doubly-linked string queue with in-place list algorithms."""

from circqueue.core import StringQueue
from circqueue.errors import (
    AllocationError,
    CircQueueError,
    CorruptedListError,
    PreconditionViolation,
    QueueClosedError,
)
from circqueue.linkedlist import Element, ListNode
from circqueue.queue import (
    q_delete_dup,
    q_delete_mid,
    q_free,
    q_insert_head,
    q_insert_tail,
    q_new,
    q_release_element,
    q_remove_head,
    q_remove_tail,
    q_reverse,
    q_size,
    q_sort,
    q_swap,
)

__version__ = "0.0.1"

__all__ = [
    "StringQueue",
    "Element",
    "ListNode",
    "CircQueueError",
    "AllocationError",
    "PreconditionViolation",
    "CorruptedListError",
    "QueueClosedError",
    "q_new",
    "q_free",
    "q_insert_head",
    "q_insert_tail",
    "q_remove_head",
    "q_remove_tail",
    "q_release_element",
    "q_size",
    "q_delete_mid",
    "q_delete_dup",
    "q_swap",
    "q_reverse",
    "q_sort",
]
