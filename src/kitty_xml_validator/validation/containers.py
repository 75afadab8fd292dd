"""Stack and queue of tag records.

Empty containers are signalled by ``None`` from ``pop``/``peek``/``dequeue``;
callers are expected to guard with ``is_empty()``.
"""

from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional

from kitty_xml_validator.validation.records import TagRecord


class TagStack:
    """LIFO stack of tag records."""

    def __init__(self, records: Optional[Iterable[TagRecord]] = None) -> None:
        self._items: List[TagRecord] = list(records or ())

    def push(self, record: TagRecord) -> None:
        self._items.append(record)

    def pop(self) -> Optional[TagRecord]:
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> Optional[TagRecord]:
        if not self._items:
            return None
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def search(self, name: str) -> int:
        """Return the 1-based distance of ``name`` from the top, or -1."""
        for distance, record in enumerate(self, start=1):
            if record.has_name(name):
                return distance
        return -1

    def to_list(self) -> List[TagRecord]:
        """Records from bottom to top."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TagRecord]:
        """Iterate from top to bottom."""
        return reversed(self._items)

    def __repr__(self) -> str:
        return f"TagStack({[record.name for record in self._items]!r})"


class TagQueue:
    """FIFO queue of tag records."""

    def __init__(self, records: Optional[Iterable[TagRecord]] = None) -> None:
        self._items: Deque[TagRecord] = deque(records or ())

    def enqueue(self, record: TagRecord) -> None:
        self._items.append(record)

    def dequeue(self) -> Optional[TagRecord]:
        if not self._items:
            return None
        return self._items.popleft()

    def peek(self) -> Optional[TagRecord]:
        if not self._items:
            return None
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def to_list(self) -> List[TagRecord]:
        """Records from front to back."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TagRecord]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"TagQueue({[record.name for record in self._items]!r})"
