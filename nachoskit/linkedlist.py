"""A last-in-first-out list of integers with insertion and removal at the front."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator


class IntList:
    """A list of integers where items are added to and taken from the front."""

    def __init__(self, items: Iterable[int] = ()) -> None:
        self._items: deque[int] = deque()
        for item in items:
            self.prepend(item)

    def prepend(self, value: int) -> None:
        """Put ``value`` at the beginning of the list."""
        self._items.appendleft(value)

    def remove(self) -> int:
        """Take the first item off the list and return it.

        Raises IndexError if the list is empty.
        """
        if not self._items:
            raise IndexError("remove from an empty list")
        return self._items.popleft()

    def empty(self) -> bool:
        """Return True if the list holds no items."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        """Iterate from the front of the list to the back."""
        return iter(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"