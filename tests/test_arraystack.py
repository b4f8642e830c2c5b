import io

import pytest

from nachoskit.arraystack import (
    BoundedStack,
    StackEmptyError,
    StackFullError,
    main,
    run_self_test,
)


@pytest.mark.parametrize("size", [0, -1])
def test_size_must_be_positive(size):
    with pytest.raises(ValueError):
        BoundedStack(size)


def test_fills_then_drains_in_reverse():
    stack = BoundedStack(5)
    values = [3, 1, 4, 1, 5]
    for position, value in enumerate(values, start=1):
        assert stack.full() is False
        stack.push(value)
        assert len(stack) == position
    assert stack.full() is True
    assert [stack.pop() for _ in values] == [5, 1, 4, 1, 3]
    assert stack.empty() is True


@pytest.mark.parametrize("error", [StackEmptyError, IndexError])
def test_underflow(error):
    with pytest.raises(error):
        BoundedStack(1).pop()


@pytest.mark.parametrize("error", [StackFullError, OverflowError])
def test_overflow(error):
    stack = BoundedStack(1)
    stack.push(0)
    with pytest.raises(error):
        stack.push(1)


def test_self_test_lines():
    out = io.StringIO()
    stack = BoundedStack(10)
    stack.self_test(out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 20
    assert (lines[0], lines[9]) == ("pushing 17", "pushing 26")
    assert (lines[10], lines[19]) == ("popping 26", "popping 17")
    assert stack.empty() is True


def test_self_test_on_partly_filled_stack():
    out = io.StringIO()
    stack = BoundedStack(3)
    stack.push(99)
    stack.self_test(out)
    assert out.getvalue().splitlines() == [
        "pushing 17", "pushing 18", "popping 18", "popping 17", "popping 99",
    ]


def test_run_self_test_stops_at_capacity():
    with pytest.raises(StackFullError):
        run_self_test(BoundedStack(2), [1, 2, 3], io.StringIO())


def test_main_prints_self_test(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 20
    assert lines[0] == "pushing 17"