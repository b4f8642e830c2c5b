"""Two interchangeable stacks of integers sharing one abstract interface."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from nachoskit.arraystack import BoundedStack, StackEmptyError, run_self_test
from nachoskit.linkedlist import IntList


class Stack(ABC):
    """An abstract last-in-first-out stack of integers."""

    @abstractmethod
    def push(self, value: int) -> None:
        """Put ``value`` on top of the stack."""

    @abstractmethod
    def pop(self) -> int:
        """Remove and return the top value."""

    @abstractmethod
    def full(self) -> bool:
        """Return True if the stack has no more room."""

    @abstractmethod
    def empty(self) -> bool:
        """Return True if the stack has nothing on it."""

    def self_test(self, num_to_push: int, out: TextIO | None = None) -> None:
        """Push ``num_to_push`` counting numbers from 17, then pop them all.

        Raises StackFullError if the stack fills up before all are pushed.
        """
        run_self_test(self, range(17, 17 + num_to_push), out)


class ArrayStack(Stack):
    """A stack holding at most ``size`` integers."""

    def __init__(self, size: int) -> None:
        self._stack = BoundedStack(size)

    @property
    def size(self) -> int:
        return self._stack.size

    def push(self, value: int) -> None:
        self._stack.push(value)

    def pop(self) -> int:
        return self._stack.pop()

    def full(self) -> bool:
        return self._stack.full()

    def empty(self) -> bool:
        return self._stack.empty()

    def __len__(self) -> int:
        return len(self._stack)


class ListStack(Stack):
    """A stack backed by a linked list; it never overflows."""

    def __init__(self) -> None:
        self._list = IntList()

    def push(self, value: int) -> None:
        self._list.prepend(value)

    def pop(self) -> int:
        if self._list.empty():
            raise StackEmptyError("pop from an empty stack")
        return self._list.remove()

    def full(self) -> bool:
        return False

    def empty(self) -> bool:
        return self._list.empty()

    def __len__(self) -> int:
        return len(self._list)


def main(argv: list[str] | None = None) -> int:
    """Run the shared self test on both stack implementations."""
    for stack in (ArrayStack(10), ListStack()):
        print(f"Testing {type(stack).__name__}")
        stack.self_test(10)
    return 0


if __name__ == "__main__":
    sys.exit(main())