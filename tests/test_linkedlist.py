import pytest

from nachoskit.linkedlist import IntList


@pytest.mark.parametrize("values", [[], [0], [5], [-1, 0, 1], list(range(50))])
def test_prepend_then_remove_reverses(values):
    lst = IntList()
    for value in values:
        lst.prepend(value)
    assert len(lst) == len(values)
    assert lst.empty() == (not values)
    assert list(lst) == values[::-1]
    assert [lst.remove() for _ in values] == values[::-1]
    assert lst.empty()


def test_constructor_prepends_each_item():
    lst = IntList([4, 5, 6])
    assert list(lst) == [6, 5, 4]
    assert len(lst) == 3


@pytest.mark.parametrize("seed", [[], [7], [1, 2]])
def test_remove_past_the_end_raises(seed):
    lst = IntList(seed)
    for _ in seed:
        lst.remove()
    with pytest.raises(IndexError):
        lst.remove()