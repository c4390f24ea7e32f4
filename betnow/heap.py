"""A binary heap ordered by a caller-supplied comparison."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Heap(Generic[T]):
    """Binary heap where ``less(a, b)`` decides which item sits nearer the top."""

    def __init__(self, less: Callable[[T, T], bool]) -> None:
        self._data: list[T] = []
        self._less = less

    def __len__(self) -> int:
        return len(self._data)

    def peek(self) -> T:
        """Return the top item without removing it."""
        if not self._data:
            raise IndexError("peek from an empty heap")
        return self._data[0]

    def push(self, item: T) -> None:
        self._data.append(item)
        self._sift_up(len(self._data) - 1)

    def pop(self) -> T:
        """Remove and return the top item."""
        if not self._data:
            raise IndexError("pop from an empty heap")
        top = self._data[0]
        last = self._data.pop()
        if self._data:
            self._data[0] = last
            self._sift_down(0)
        return top

    def remove(self, item: T) -> T:
        """Remove the first stored item equal to ``item`` and return it."""
        try:
            index = self._data.index(item)
        except ValueError:
            raise ValueError("item not in heap") from None
        removed = self._data[index]
        last = self._data.pop()
        if index < len(self._data):
            self._data[index] = last
            self._sift_up(index)
            self._sift_down(index)
        return removed

    def items(self) -> list[T]:
        """Return the stored items in heap order."""
        return list(self._data)

    def _sift_up(self, i: int) -> None:
        data = self._data
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(data[i], data[parent]):
                break
            data[i], data[parent] = data[parent], data[i]
            i = parent

    def _sift_down(self, i: int) -> None:
        data = self._data
        n = len(data)
        while True:
            best = i
            for child in (2 * i + 1, 2 * i + 2):
                if child < n and self._less(data[child], data[best]):
                    best = child
            if best == i:
                return
            data[i], data[best] = data[best], data[i]
            i = best