# tests/test_producer.py

from __future__ import annotations

import asyncio
import random

import pytest

from phase_loop.core.events import EventKind
from phase_loop.demo.producer import plan_tasks, produce_tasks
from phase_loop.errors import CapacityExceeded, InvalidRange
from phase_loop.scheduler.loop import PhaseScheduler
from phase_loop.scheduler.models import Phase

from .fakes import RecordingSink


@pytest.mark.asyncio
async def test_inverted_range_fails_before_anything_is_scheduled(make_scheduler) -> None:
    scheduler = make_scheduler()

    with pytest.raises(InvalidRange):
        await produce_tasks(scheduler, min_delay_ms=800, max_delay_ms=100, quantity=5)

    assert scheduler.is_idle()


def test_negative_bounds_and_quantity_rejected() -> None:
    with pytest.raises(InvalidRange):
        plan_tasks(min_delay_ms=-1, max_delay_ms=10, quantity=1)
    with pytest.raises(ValueError):
        plan_tasks(min_delay_ms=0, max_delay_ms=10, quantity=-1)


def test_plan_is_reproducible_and_within_closed_range() -> None:
    a = plan_tasks(min_delay_ms=10, max_delay_ms=12, quantity=50, rng=random.Random(42))
    b = plan_tasks(min_delay_ms=10, max_delay_ms=12, quantity=50, rng=random.Random(42))

    assert a == b
    assert [p.index for p in a] == list(range(1, 51))
    assert all(10 <= p.delay_ms <= 12 for p in a)
    assert {p.phase for p in a} <= set(Phase)


def test_degenerate_range_gives_constant_delay() -> None:
    plan = plan_tasks(min_delay_ms=7, max_delay_ms=7, quantity=3, rng=random.Random(1))
    assert [p.delay_ms for p in plan] == [7, 7, 7]


@pytest.mark.asyncio
@pytest.mark.parametrize("sequential", [True, False])
async def test_produced_tasks_all_run(sequential: bool) -> None:
    sink = RecordingSink()
    scheduler = PhaseScheduler(sink=sink)

    production = await produce_tasks(
        scheduler,
        min_delay_ms=0,
        max_delay_ms=5,
        quantity=6,
        rng=random.Random(5),
        sequential=sequential,
    )
    await asyncio.wait_for(scheduler.run(), timeout=5.0)
    await production.wait_landed()

    assert len(production.planned) == 6
    assert len(production.handles) == 6
    assert len(sink.of(EventKind.TASK_COMPLETED)) == 6
    # Each demo action narrates its start and its completion.
    assert len(sink.of(EventKind.MESSAGE)) == 12
    assert scheduler.is_idle()


@pytest.mark.asyncio
async def test_fire_and_forget_landing_failure_reaches_the_caller() -> None:
    sink = RecordingSink()
    scheduler = PhaseScheduler(capacity=1, sink=sink)

    production = await produce_tasks(
        scheduler,
        min_delay_ms=0,
        max_delay_ms=0,
        quantity=6,
        rng=random.Random(2),
        sequential=False,
    )
    await asyncio.wait_for(scheduler.run(), timeout=5.0)

    with pytest.raises(CapacityExceeded):
        await production.wait_landed()
    assert len(sink.of(EventKind.TASK_COMPLETED)) < 6


@pytest.mark.asyncio
async def test_sequential_landing_failure_raises_from_produce() -> None:
    scheduler = PhaseScheduler(capacity=1, sink=RecordingSink())

    with pytest.raises(CapacityExceeded):
        await produce_tasks(
            scheduler,
            min_delay_ms=0,
            max_delay_ms=0,
            quantity=4,
            rng=random.Random(3),
            sequential=True,
        )
