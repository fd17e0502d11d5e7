"""Basic usage example for circqueue."""

import logging

from circqueue import (
    StringQueue,
    q_free,
    q_insert_tail,
    q_new,
    q_release_element,
    q_remove_head,
)


def facade_demo() -> None:
    """Demonstrate the StringQueue object interface."""
    print("=== StringQueue ===\n")

    with StringQueue() as queue:
        for word in ("pear", "apple", "fig", "apple", "kiwi", "fig"):
            queue.insert_tail(word)
        print(f"Inserted:      {queue.values(decode=True)}")

        queue.sort()
        print(f"Sorted:        {queue.values(decode=True)}")

        queue.delete_dup()
        print(f"Deduplicated:  {queue.values(decode=True)}")

        queue.insert_head("banana")
        queue.swap()
        print(f"Pairs swapped: {queue.values(decode=True)}")

        queue.reverse()
        print(f"Reversed:      {queue.values(decode=True)}")

        queue.delete_mid()
        print(f"Middle gone:   {queue.values(decode=True)}")

        print(f"Head removed:  {queue.remove_head()!r}")
        print(f"Final size:    {len(queue)}\n")


def handle_demo() -> None:
    """Demonstrate the handle-based interface with a bounded copy-out buffer."""
    print("=== Handle API ===\n")

    head = q_new()
    q_insert_tail(head, "a fairly long payload")

    buf = bytearray(8)
    element = q_remove_head(head, buf)
    print(f"Copied out:    {bytes(buf)!r}")
    print(f"Element owns:  {element.value!r}")

    # Removal hands the element over; releasing it is the caller's job
    q_release_element(element)
    q_free(head)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    facade_demo()
    handle_demo()
