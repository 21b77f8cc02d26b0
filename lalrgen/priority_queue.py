"""Ordered queue that keeps its items sorted by a key, stable for ties."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """A sorted sequence; the item with the smallest key comes first.

    A newly inserted item goes after every item whose key is not greater,
    so items with equal keys keep their order of insertion. Without a key
    function the items themselves are compared.
    """

    def __init__(self, key: Callable[[T], Any] | None = None) -> None:
        self._key = key
        self._items: list[T] = []
        self._keys: list[Any] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def insert(self, item: T) -> int:
        """Insert ``item`` in key order and return the position it took."""
        key = item if self._key is None else self._key(item)
        position = bisect_right(self._keys, key)
        self._keys.insert(position, key)
        self._items.insert(position, item)
        return position

    def pop_top(self) -> T:
        """Remove and return the first item; IndexError if the queue is empty."""
        if not self._items:
            raise IndexError("pop from an empty priority queue")
        del self._keys[0]
        return self._items.pop(0)

    def peek(self) -> T:
        """Return the first item without removing it."""
        if not self._items:
            raise IndexError("peek at an empty priority queue")
        return self._items[0]

    def remove_at(self, index: int) -> T:
        """Remove and return the item at ``index``."""
        item = self._items.pop(index)
        del self._keys[index]
        return item

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()
        self._keys.clear()