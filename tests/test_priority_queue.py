# tests/test_priority_queue.py

from __future__ import annotations

import random

import pytest

from phase_loop.errors import CapacityExceeded, EmptyQueue
from phase_loop.scheduler.heap import BoundedPriorityQueue
from phase_loop.scheduler.models import Task


def _task(key: float) -> Task:
    return Task(action=lambda: None, key=key)


def _assert_heap(queue: BoundedPriorityQueue[Task]) -> None:
    items = queue.snapshot()
    for i in range(1, len(items)):
        assert items[(i - 1) // 2].key <= items[i].key, f"heap violated at index {i}"


def test_pop_yields_keys_in_ascending_order() -> None:
    q: BoundedPriorityQueue[Task] = BoundedPriorityQueue(10)
    for k in (5, 3, 8, 1, 4):
        q.push(_task(k))

    assert [q.pop().key for _ in range(5)] == [1, 3, 4, 5, 8]
    assert q.is_empty()


def test_heap_invariant_holds_after_mixed_operations() -> None:
    rng = random.Random(7)
    q: BoundedPriorityQueue[Task] = BoundedPriorityQueue(64)
    popped: list[float] = []

    for _ in range(200):
        if q.size < q.capacity and (q.is_empty() or rng.random() < 0.6):
            q.push(_task(rng.randint(0, 50)))
        else:
            popped.append(q.pop().key)
        _assert_heap(q)

    while q.has_items():
        popped.append(q.pop().key)
    assert len(popped) > 0


def test_drain_is_sorted_for_random_input() -> None:
    rng = random.Random(3)
    keys = [rng.randint(0, 1000) for _ in range(100)]
    q: BoundedPriorityQueue[Task] = BoundedPriorityQueue(100)
    for k in keys:
        q.push(_task(k))

    out = [q.pop().key for _ in range(len(keys))]
    assert out == sorted(keys)


def test_peek_returns_min_without_removing() -> None:
    q: BoundedPriorityQueue[Task] = BoundedPriorityQueue(4)
    q.push(_task(9))
    q.push(_task(2))

    assert q.peek().key == 2
    assert q.size == 2
    assert len(q) == 2


def test_capacity_is_a_strict_bound() -> None:
    q: BoundedPriorityQueue[Task] = BoundedPriorityQueue(3)
    for k in (1, 2, 3):
        q.push(_task(k))

    with pytest.raises(CapacityExceeded) as ei:
        q.push(_task(4))
    assert ei.value.capacity == 3
    assert q.size == 3

    # Net of pops: freeing a slot allows exactly one more push.
    q.pop()
    q.push(_task(4))
    with pytest.raises(CapacityExceeded):
        q.push(_task(5))


def test_empty_queue_errors() -> None:
    q: BoundedPriorityQueue[Task] = BoundedPriorityQueue(2)
    with pytest.raises(EmptyQueue):
        q.pop()
    with pytest.raises(EmptyQueue):
        q.peek()

    q.push(_task(1))
    q.pop()
    with pytest.raises(EmptyQueue):
        q.pop()


def test_equal_keys_are_all_returned() -> None:
    q: BoundedPriorityQueue[Task] = BoundedPriorityQueue(5)
    names = ["a", "b", "c"]
    for n in names:
        q.push(Task(action=lambda: None, key=1, name=n))

    assert sorted(q.pop().name for _ in names) == names


def test_custom_key_and_invalid_capacity() -> None:
    q: BoundedPriorityQueue[tuple[int, str]] = BoundedPriorityQueue(3, key=lambda t: t[0])
    q.push((2, "b"))
    q.push((1, "a"))
    assert q.pop() == (1, "a")

    with pytest.raises(ValueError):
        BoundedPriorityQueue(0)
