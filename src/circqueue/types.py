"""Type definitions for circqueue."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Anything an element payload may be copied from
Payload: TypeAlias = str | bytes | bytearray | memoryview

# Ordering key applied to payloads by sort and delete_dup
SortKey: TypeAlias = Callable[[bytes], Any]
