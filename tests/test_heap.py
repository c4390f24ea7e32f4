import pytest

from betnow.heap import Heap


def min_heap():
    return Heap(lambda a, b: a < b)


def drain(heap):
    out = []
    while len(heap):
        out.append(heap.pop())
    return out


def test_min_heap_pops_in_ascending_order():
    values = [5, 3, 9, 1, 7, 3, 8, 2]
    heap = min_heap()
    for v in values:
        heap.push(v)
    assert drain(heap) == sorted(values)


def test_max_heap_pops_in_descending_order():
    values = [4, 10, 1, 6, 6, 2]
    heap = Heap(lambda a, b: a > b)
    for v in values:
        heap.push(v)
    assert drain(heap) == sorted(values, reverse=True)


def test_peek_returns_top_without_removing():
    heap = min_heap()
    for v in [4, 2, 6]:
        heap.push(v)
    assert heap.peek() == 2
    assert len(heap) == 3


def test_empty_heap_peek_and_pop_raise():
    heap = min_heap()
    with pytest.raises(IndexError):
        heap.peek()
    with pytest.raises(IndexError):
        heap.pop()


def test_remove_keeps_heap_order():
    values = [5, 3, 9, 1, 7, 8, 2]
    heap = min_heap()
    for v in values:
        heap.push(v)
    assert heap.remove(7) == 7
    remaining = [v for v in values if v != 7]
    assert drain(heap) == sorted(remaining)


def test_remove_missing_raises():
    heap = min_heap()
    heap.push(1)
    with pytest.raises(ValueError):
        heap.remove(42)
    assert len(heap) == 1


def test_items_is_a_copy_with_all_elements():
    values = [3, 1, 2]
    heap = min_heap()
    for v in values:
        heap.push(v)
    items = heap.items()
    items.clear()
    assert sorted(heap.items()) == sorted(values)
    assert heap.items()[0] == min(values)