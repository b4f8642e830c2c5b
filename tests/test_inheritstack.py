import io

import pytest

from nachoskit.arraystack import StackEmptyError, StackFullError
from nachoskit.inheritstack import ArrayStack, ListStack, Stack, main

TEN_LINES = (
    [f"pushing {n}" for n in range(17, 27)]
    + [f"popping {n}" for n in range(26, 16, -1)]
)

KINDS = ["array", "list"]


def make_stack(kind):
    if kind == "array":
        return ArrayStack(10)
    return ListStack()


@pytest.mark.parametrize("kind", KINDS)
def test_self_test_output(kind):
    out = io.StringIO()
    stack = ArrayStack(10) if kind == "array" else ListStack()
    stack.self_test(10, out)
    assert out.getvalue().splitlines() == TEN_LINES
    assert stack.empty()


@pytest.mark.parametrize("kind", KINDS)
def test_lifo_then_underflow(kind):
    stack = ArrayStack(10) if kind == "array" else ListStack()
    for value in (1, 2, 3):
        stack.push(value)
    assert [stack.pop(), stack.pop(), stack.pop()] == [3, 2, 1]
    assert stack.empty()
    with pytest.raises(StackEmptyError):
        stack.pop()


def test_array_stack_capacity():
    stack = ArrayStack(2)
    stack.push(1)
    assert not stack.full()
    stack.push(2)
    assert stack.full()
    assert stack.size == 2
    with pytest.raises(StackFullError):
        stack.push(3)


def test_array_stack_rejects_bad_size():
    with pytest.raises(ValueError):
        ArrayStack(0)


def test_list_stack_never_full():
    stack = ListStack()
    for value in range(1000):
        stack.push(value)
    assert not stack.full()
    assert len(stack) == 1000


def test_self_test_overflow():
    with pytest.raises(StackFullError):
        ArrayStack(3).self_test(5, io.StringIO())


def test_stack_is_abstract():
    with pytest.raises(TypeError):
        Stack()


def test_main_output(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Testing ArrayStack"] + TEN_LINES + ["Testing ListStack"] + TEN_LINES