"""Exception classes for circqueue."""


class CircQueueError(Exception):
    """Base exception for all circqueue errors."""


class AllocationError(CircQueueError, MemoryError):
    """Raised when a queue sentinel, element or payload copy cannot be allocated."""


class PreconditionViolation(CircQueueError):
    """Raised when a documented precondition of a list operation does not hold."""


class CorruptedListError(CircQueueError):
    """Raised when the circular doubly-linked invariants are found broken."""


class QueueClosedError(CircQueueError):
    """Raised when operations are attempted on a closed queue."""
