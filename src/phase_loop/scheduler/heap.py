# src/phase_loop/scheduler/heap.py

from __future__ import annotations

"""
Bounded priority queue.

A binary min-heap over a dense list:
- parent(i) = (i - 1) // 2, children 2i + 1 and 2i + 2
- push appends then sifts up while the parent's key is strictly greater
- pop swaps the root with the last item, shrinks, then sifts down

Capacity is a strict bound: a queue of capacity c holds at most c items,
the (c + 1)-th push raises CapacityExceeded.
"""

import operator
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..errors import CapacityExceeded, EmptyQueue

T = TypeVar("T")

_default_key = operator.attrgetter("key")


class BoundedPriorityQueue(Generic[T]):
    def __init__(self, capacity: int, *, key: Callable[[T], Any] = _default_key) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be a positive integer")
        self._capacity = int(capacity)
        self._key = key
        self._heap: list[T] = []

    # ---- observers ----

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def has_items(self) -> bool:
        return bool(self._heap)

    def snapshot(self) -> list[T]:
        """Copy of the backing list in heap (array) order."""
        return list(self._heap)

    # ---- operations ----

    def push(self, item: T) -> None:
        if len(self._heap) >= self._capacity:
            raise CapacityExceeded(self._capacity)
        self._heap.append(item)
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> T:
        heap = self._heap
        if not heap:
            raise EmptyQueue("pop")
        last = len(heap) - 1
        if last > 0:
            heap[0], heap[last] = heap[last], heap[0]
        item = heap.pop()
        if heap:
            self._sift_down(0)
        return item

    def peek(self) -> T:
        if not self._heap:
            raise EmptyQueue("peek")
        return self._heap[0]

    # ---- heap helpers ----

    def _sift_up(self, i: int) -> None:
        heap, key = self._heap, self._key
        while i > 0:
            parent = (i - 1) // 2
            if key(heap[parent]) > key(heap[i]):
                heap[parent], heap[i] = heap[i], heap[parent]
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        heap, key = self._heap, self._key
        n = len(heap)
        while True:
            left = 2 * i + 1
            if left >= n:
                return
            smaller = left
            right = left + 1
            # Right child wins only when strictly smaller.
            if right < n and key(heap[right]) < key(heap[left]):
                smaller = right
            if key(heap[i]) <= key(heap[smaller]):
                return
            heap[i], heap[smaller] = heap[smaller], heap[i]
            i = smaller
