"""A fixed-capacity last-in-first-out stack of integers."""

from __future__ import annotations

import sys
from typing import Iterable, TextIO


class StackFullError(OverflowError):
    """Raised when pushing onto a stack that has no more room."""


class StackEmptyError(IndexError):
    """Raised when popping from a stack that holds nothing."""


def run_self_test(stack, values: Iterable, out: TextIO | None = None) -> None:
    """Push each of ``values`` onto ``stack``, then pop until it is empty,
    reporting every step to ``out``.

    Raises StackFullError if the stack fills up before all values are pushed.
    """
    out = sys.stdout if out is None else out
    for value in values:
        if stack.full():
            raise StackFullError("stack filled up during self test")
        out.write(f"pushing {value}\n")
        stack.push(value)
    while not stack.empty():
        out.write(f"popping {stack.pop()}\n")


class BoundedStack:
    """A stack holding at most ``size`` items."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"stack size must be at least 1, got {size}")
        self.size = size
        self._items: list = []

    def push(self, value) -> None:
        """Put ``value`` on top of the stack; raise StackFullError on overflow."""
        if self.full():
            raise StackFullError(f"stack of size {self.size} is full")
        self._items.append(value)

    def pop(self):
        """Remove and return the top value; raise StackEmptyError if empty."""
        if self.empty():
            raise StackEmptyError("pop from an empty stack")
        return self._items.pop()

    def full(self) -> bool:
        """Return True if the stack has no more room."""
        return len(self._items) == self.size

    def empty(self) -> bool:
        """Return True if the stack has nothing on it."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def self_test(self, out: TextIO | None = None) -> None:
        """Fill the stack with counting numbers from 17, then pop them all."""
        run_self_test(self, range(17, 17 + self.size - len(self)), out)


def main(argv: list[str] | None = None) -> int:
    """Run the stack self test on a stack of ten integers."""
    BoundedStack(10).self_test()
    return 0


if __name__ == "__main__":
    sys.exit(main())