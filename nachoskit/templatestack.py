"""A fixed-capacity last-in-first-out stack of values of any one type."""

from __future__ import annotations

import sys
from itertools import islice
from typing import Generic, Iterator, TextIO, TypeVar

from nachoskit.arraystack import BoundedStack, run_self_test

T = TypeVar("T")


def successor(value):
    """Return the value after ``value``: the next integer, or the next
    character for a one-character string."""
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("successor of a string needs a single character")
        return chr(ord(value) + 1)
    return value + 1


def _successors(start) -> Iterator:
    value = start
    while True:
        yield value
        value = successor(value)


class GenericStack(BoundedStack, Generic[T]):
    """A stack holding at most ``size`` values of any type."""

    def push(self, value: T) -> None:
        """Put ``value`` on top of the stack; raise if the stack is full."""
        super().push(value)

    def pop(self) -> T:
        """Remove and return the top value; raise if the stack is empty."""
        return super().pop()

    def full(self) -> bool:
        """Return True if the stack has no more room."""
        return super().full()

    def empty(self) -> bool:
        """Return True if the stack holds nothing."""
        return super().empty()

    def self_test(self, start: T, out: TextIO | None = None) -> None:  # type: ignore[override]
        """Fill the stack with successive values from ``start``, then pop
        them all, reporting each step to ``out``."""
        run_self_test(self, islice(_successors(start), self.size - len(self)), out)


def main(argv: list[str] | None = None) -> int:
    """Run the self test on an integer stack and a character stack."""
    for label, start in (("int", 17), ("char", "a")):
        print(f"Testing Stack<{label}>")
        GenericStack(10).self_test(start)
    return 0


if __name__ == "__main__":
    sys.exit(main())