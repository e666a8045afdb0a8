# src/phase_loop/demo/producer.py

from __future__ import annotations

"""
Randomized task producer used by the CLI demo.

Each generated task simulates a typical piece of browser work:
- immediate: a network request (sleeps for its delay)
- background: a synchronous computation
- frame: a DOM manipulation (sleeps for its delay)

Every action narrates its start and completion through the sink.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field

from ..core.events import EventKind, LoopEvent
from ..core.ports import Action, EventSink
from ..errors import InvalidRange
from ..scheduler.loop import PhaseScheduler
from ..scheduler.models import Phase

logger = logging.getLogger(__name__)

COMPUTATION_SIZE = 1_000_000


@dataclass(slots=True, frozen=True)
class PlannedTask:
    index: int
    phase: Phase
    delay_ms: int


def _say(sink: EventSink, phase: Phase, text: str) -> None:
    sink.notify(LoopEvent(kind=EventKind.MESSAGE, phase=phase, text=text))


def _network_request(sink: EventSink, index: int, ms: int) -> Action:
    async def action() -> None:
        _say(sink, Phase.IMMEDIATE, f"[{index}] Immediate task started: making network request...")
        await asyncio.sleep(ms / 1000.0)
        _say(sink, Phase.IMMEDIATE, f"[{index}] Immediate task completed after {ms} ms.")

    return action


def _computation(sink: EventSink, index: int, size: int = COMPUTATION_SIZE) -> Action:
    def action() -> None:
        _say(sink, Phase.BACKGROUND, f"[{index}] Background task started: performing computation...")
        result = sum(range(size))
        _say(sink, Phase.BACKGROUND, f"[{index}] Background task completed: result is {result}.")

    return action


def _dom_manipulation(sink: EventSink, index: int, ms: int) -> Action:
    async def action() -> None:
        _say(sink, Phase.FRAME, f"[{index}] Frame task started: manipulating DOM...")
        await asyncio.sleep(ms / 1000.0)
        _say(sink, Phase.FRAME, f"[{index}] Frame task completed after {ms} ms.")

    return action


def build_action(phase: Phase, sink: EventSink, index: int, delay_ms: int) -> Action:
    if phase == Phase.IMMEDIATE:
        return _network_request(sink, index, delay_ms)
    if phase == Phase.BACKGROUND:
        return _computation(sink, index)
    return _dom_manipulation(sink, index, delay_ms)


def plan_tasks(
    *,
    min_delay_ms: int,
    max_delay_ms: int,
    quantity: int,
    rng: random.Random | None = None,
) -> list[PlannedTask]:
    """
    Draw `quantity` (phase, delay) pairs.

    Delays are uniform over the closed range [min_delay_ms, max_delay_ms].
    Raises InvalidRange / ValueError before drawing anything.
    """
    if min_delay_ms < 0 or max_delay_ms < 0 or min_delay_ms > max_delay_ms:
        raise InvalidRange(min_delay_ms, max_delay_ms)
    if quantity < 0:
        raise ValueError("quantity must be >= 0")

    rng = rng or random.Random()
    phases = list(Phase)
    return [
        PlannedTask(
            index=i,
            phase=rng.choice(phases),
            delay_ms=rng.randint(min_delay_ms, max_delay_ms),
        )
        for i in range(1, quantity + 1)
    ]


@dataclass(slots=True)
class Production:
    """
    Result of produce_tasks.

    `handles` are the scheduler's landing tasks, one per planned task. In
    fire-and-forget mode a landing can still fail (CapacityExceeded);
    `wait_landed()` re-raises the first such failure.
    """

    planned: list[PlannedTask]
    handles: list[asyncio.Task[None]] = field(default_factory=list)

    async def wait_landed(self) -> None:
        await asyncio.gather(*self.handles)


async def produce_tasks(
    scheduler: PhaseScheduler,
    *,
    min_delay_ms: int,
    max_delay_ms: int,
    quantity: int,
    rng: random.Random | None = None,
    sink: EventSink | None = None,
    sequential: bool = True,
) -> Production:
    """
    Feed randomized tasks into `scheduler`.

    sequential=True waits for each item to land before scheduling the next one;
    a failed landing raises here.
    sequential=False schedules everything at once; the scheduler's in-flight
    tracking keeps run() alive until every item has landed, and the caller
    collects landing failures with Production.wait_landed().
    """
    planned = plan_tasks(
        min_delay_ms=min_delay_ms,
        max_delay_ms=max_delay_ms,
        quantity=quantity,
        rng=rng,
    )
    sink = sink or scheduler.sink
    production = Production(planned=planned)

    for p in planned:
        handle = scheduler.enqueue(
            p.phase,
            build_action(p.phase, sink, p.index, p.delay_ms),
            p.delay_ms,
            name=f"{p.phase.value}-{p.index}",
        )
        production.handles.append(handle)
        if sequential:
            await handle

    logger.info("Produced %d tasks (sequential=%s)", len(planned), sequential)
    return production
