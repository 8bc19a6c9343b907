from __future__ import annotations

import heapq
import itertools
from typing import Callable, Generic, List, Tuple, TypeVar

T = TypeVar("T")


class MinHeap(Generic[T]):
    """Binary min-heap ordered by an explicit key function.

    Items themselves are never compared, only their keys. Entries with equal
    keys come out in an unspecified order; callers must not rely on insertion
    order as a tiebreak.

    Usage:
        h = MinHeap(key=lambda ev: ev.time)
        h.push(ev)
        first = h.pop()
    """

    def __init__(self, key: Callable[[T], int]) -> None:
        self._key = key
        self._items: List[Tuple[int, int, T]] = []
        # Only used so heapq never has to compare two T instances.
        self._counter = itertools.count()

    def push(self, item: T) -> None:
        heapq.heappush(self._items, (self._key(item), next(self._counter), item))

    def pop(self) -> T:
        """Remove and return the item with the smallest key.

        Raises IndexError when the heap is empty.
        """
        if not self._items:
            raise IndexError("pop from empty MinHeap")
        return heapq.heappop(self._items)[2]

    def peek(self) -> T:
        if not self._items:
            raise IndexError("peek at empty MinHeap")
        return self._items[0][2]

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
