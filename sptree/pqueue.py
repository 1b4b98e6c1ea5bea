"""Adaptable priority queue used by the engine."""

from __future__ import annotations

from typing import Any, Generic, List, Tuple, TypeVar

V = TypeVar("V")


class Locator(Generic[V]):
    """Handle to a queue entry, valid until the entry leaves the queue.

    The locator records its current slot in the heap array so the queue can
    find the entry in O(1) for ``update`` and ``remove``.
    """

    __slots__ = ("key", "value", "_index", "_seq")

    def __init__(self, key: Any, value: V, index: int, seq: int) -> None:
        self.key = key
        self.value = value
        self._index = index
        self._seq = seq

    def _rank(self) -> Tuple[Any, int]:
        return (self.key, self._seq)

    def __repr__(self) -> str:
        return f"Locator(key={self.key!r}, value={self.value!r})"


class HeapAdaptablePriorityQueue(Generic[V]):
    """Binary min-heap over ``(key, value)`` pairs with locator handles.

    Equal keys leave the queue in insertion order.

    Examples:
        ```python
        >>> pq = HeapAdaptablePriorityQueue()
        >>> loc = pq.insert(5, "a")
        >>> _ = pq.insert(3, "b")
        >>> pq.decrease_key(loc, 1)
        >>> pq.remove_min()
        (1, 'a')
        ```
    """

    def __init__(self) -> None:
        self._data: List[Locator[V]] = []
        self._counter = 0

    # ---- heap internals -------------------------------------------------

    def _less(self, i: int, j: int) -> bool:
        return self._data[i]._rank() < self._data[j]._rank()

    def _swap(self, i: int, j: int) -> None:
        data = self._data
        data[i], data[j] = data[j], data[i]
        data[i]._index = i
        data[j]._index = j

    def _upheap(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if not self._less(j, parent):
                break
            self._swap(j, parent)
            j = parent

    def _downheap(self, j: int) -> None:
        n = len(self._data)
        while True:
            left = 2 * j + 1
            if left >= n:
                return
            small = left
            right = left + 1
            if right < n and self._less(right, left):
                small = right
            if not self._less(small, j):
                return
            self._swap(j, small)
            j = small

    def _bubble(self, j: int) -> None:
        if j > 0 and self._less(j, (j - 1) // 2):
            self._upheap(j)
        else:
            self._downheap(j)

    def _validate(self, loc: Locator[V]) -> int:
        if not isinstance(loc, Locator):
            raise ValueError("invalid locator type")
        j = loc._index
        if not (0 <= j < len(self._data) and self._data[j] is loc):
            raise ValueError("invalid locator")
        return j

    # ---- public API -----------------------------------------------------

    def __len__(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return not self._data

    def insert(self, key: Any, value: V) -> Locator[V]:
        """Add ``(key, value)`` and return a locator for later updates."""
        loc = Locator(key, value, len(self._data), self._counter)
        self._counter += 1
        self._data.append(loc)
        self._upheap(len(self._data) - 1)
        return loc

    def min(self) -> Tuple[Any, V]:
        """Return the minimum ``(key, value)`` without removing it.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._data:
            raise IndexError("priority queue is empty")
        loc = self._data[0]
        return loc.key, loc.value

    def remove_min(self) -> Tuple[Any, V]:
        """Remove and return the minimum ``(key, value)``.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._data:
            raise IndexError("priority queue is empty")
        return self._pop_at(0)

    def update(self, loc: Locator[V], key: Any) -> None:
        """Replace the key of the entry behind ``loc`` and restore heap order."""
        j = self._validate(loc)
        loc.key = key
        self._bubble(j)

    def decrease_key(self, loc: Locator[V], key: Any) -> None:
        """Lower the key of the entry behind ``loc``.

        Raises:
            ValueError: If ``key`` is larger than the current key or the
                locator is no longer valid.
        """
        j = self._validate(loc)
        if loc.key < key:
            raise ValueError(f"new key {key!r} is larger than current key {loc.key!r}")
        loc.key = key
        self._upheap(j)

    def remove(self, loc: Locator[V]) -> Tuple[Any, V]:
        """Remove the entry behind ``loc`` and return its ``(key, value)``."""
        j = self._validate(loc)
        return self._pop_at(j)

    def _pop_at(self, j: int) -> Tuple[Any, V]:
        last = len(self._data) - 1
        if j != last:
            self._swap(j, last)
        loc = self._data.pop()
        loc._index = -1
        if j != last:
            self._bubble(j)
        return loc.key, loc.value


__all__ = ["Locator", "HeapAdaptablePriorityQueue"]
