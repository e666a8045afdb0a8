# src/phase_loop/scheduler/loop.py

from __future__ import annotations

"""
Phase scheduler.

A small draining loop that:
- owns one bounded priority queue per phase (immediate, background, frame),
- accepts delayed enqueues (an item lands in its queue once its delay elapses),
- runs tasks one at a time, following a fixed phase order,
- fires a repaint notification each time the paint gate opens.

Everything runs on a single asyncio event loop: delayed landings and loop pops
never interleave mid-operation, so the queues need no locking.

Reporting (printing, logging) belongs to the injected sink, not the scheduler.
"""

import asyncio
import contextlib
import inspect
import logging
import math

from ..connectors.sinks import LoggingSink
from ..core.events import EventKind, LoopEvent
from ..core.ports import Action, Clock, EventSink
from ..errors import InvalidDelay
from .gate import DEFAULT_PAINT_INTERVAL_MS, PaintGate
from .heap import BoundedPriorityQueue
from .models import Phase, Task

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_CAPACITY = 1024


class PhaseScheduler:
    def __init__(
        self,
        *,
        capacity: int = DEFAULT_QUEUE_CAPACITY,
        sink: EventSink | None = None,
        gate: PaintGate | None = None,
        clock: Clock | None = None,
        paint_interval_ms: float = DEFAULT_PAINT_INTERVAL_MS,
    ) -> None:
        self._queues: dict[Phase, BoundedPriorityQueue[Task]] = {
            phase: BoundedPriorityQueue(capacity) for phase in Phase
        }
        self._in_flight: dict[Phase, int] = {phase: 0 for phase in Phase}
        self._landings: set[asyncio.Task[None]] = set()
        self._landed = asyncio.Event()
        self._sink: EventSink = sink or LoggingSink()
        self._gate = gate or PaintGate(interval_ms=paint_interval_ms, clock=clock)

    # ---- observers ----

    @property
    def gate(self) -> PaintGate:
        return self._gate

    @property
    def sink(self) -> EventSink:
        return self._sink

    def size(self, phase: Phase) -> int:
        return self._queues[phase].size

    def has_visible_work(self) -> bool:
        return any(q.has_items() for q in self._queues.values())

    def in_flight(self, phase: Phase | None = None) -> int:
        """Number of delayed enqueues that have not landed yet."""
        if phase is None:
            return sum(self._in_flight.values())
        return self._in_flight[phase]

    def is_idle(self) -> bool:
        return not self.has_visible_work() and self.in_flight() == 0

    def pending_landings(self) -> frozenset[asyncio.Task[None]]:
        """Landing tasks that have not completed yet."""
        return frozenset(self._landings)

    # ---- enqueue API ----

    def enqueue(
        self,
        phase: Phase,
        action: Action,
        delay_ms: float = 0,
        *,
        name: str | None = None,
    ) -> asyncio.Task[None]:
        """
        Schedule `action` to land in the `phase` queue after `delay_ms`.

        Returns an asyncio task that completes once the item is in the queue
        (or fails with CapacityExceeded if the queue is full at landing time).
        The delay also becomes the task's priority key.

        Must be called from a running event loop.
        """
        phase = Phase(phase)
        if isinstance(delay_ms, bool) or not isinstance(delay_ms, (int, float)):
            raise InvalidDelay(delay_ms)
        if not math.isfinite(delay_ms) or delay_ms < 0:
            raise InvalidDelay(delay_ms)

        task = Task(action=action, key=delay_ms, name=name)
        handle = asyncio.get_running_loop().create_task(self._land(phase, task, delay_ms))
        # The event loop only keeps weak references to tasks.
        self._landings.add(handle)
        handle.add_done_callback(self._landings.discard)
        self._in_flight[phase] += 1
        logger.debug("Enqueue %s task=%s delay_ms=%s", phase.value, task.describe(), delay_ms)
        return handle

    def enqueue_immediate(self, action: Action, delay_ms: float = 0, *, name: str | None = None) -> asyncio.Task[None]:
        return self.enqueue(Phase.IMMEDIATE, action, delay_ms, name=name)

    def enqueue_background(self, action: Action, delay_ms: float = 0, *, name: str | None = None) -> asyncio.Task[None]:
        return self.enqueue(Phase.BACKGROUND, action, delay_ms, name=name)

    def enqueue_frame(self, action: Action, delay_ms: float = 0, *, name: str | None = None) -> asyncio.Task[None]:
        return self.enqueue(Phase.FRAME, action, delay_ms, name=name)

    async def _land(self, phase: Phase, task: Task, delay_ms: float) -> None:
        try:
            await asyncio.sleep(delay_ms / 1000.0)
            self._queues[phase].push(task)
            logger.debug("Landed %s task=%s size=%d", phase.value, task.describe(), self._queues[phase].size)
        except Exception:
            logger.exception("Enqueue failed phase=%s task=%s", phase.value, task.describe())
            raise
        finally:
            self._in_flight[phase] -= 1
            self._landed.set()

    # ---- loop ----

    async def run(self) -> None:
        """
        Drain all three queues.

        Per iteration:
        - immediate: pop and run exactly one task (if any)
        - background: run tasks until the queue is empty (re-checked after each task)
        - frame: if the paint gate is open, run all frame tasks, close the gate, repaint

        Returns once every queue is empty and no delayed enqueue is in flight.
        An exception raised by an action propagates immediately; remaining tasks stay queued.
        """
        self._notify(EventKind.LOOP_STARTED, text="[Event loop]: Started.")
        while True:
            if not self.has_visible_work():
                if self.in_flight() == 0:
                    break
                # Visible queues are empty but enqueues are still pending: wait for one to land.
                await self._wait_for_landing(timeout=None)
                continue

            if not await self.run_once():
                # Only frame tasks behind a closed gate: sleep until it opens or new work lands.
                await self._wait_for_landing(timeout=self._gate.remaining_ms() / 1000.0)

        self._notify(EventKind.LOOP_FINISHED, text="[Event loop]: Call stack empty, finished.")

    async def run_once(self) -> bool:
        """Run one iteration of the phase policy. Returns True if a task ran or the gate fired."""
        progressed = False

        immediate = self._queues[Phase.IMMEDIATE]
        if immediate.has_items():
            await self._execute(Phase.IMMEDIATE, immediate.pop())
            progressed = True

        background = self._queues[Phase.BACKGROUND]
        while background.has_items():
            await self._execute(Phase.BACKGROUND, background.pop())
            progressed = True

        if self._gate.is_open():
            frame = self._queues[Phase.FRAME]
            while frame.has_items():
                await self._execute(Phase.FRAME, frame.pop())
            self._gate.close()
            self._notify(EventKind.REPAINT, text="[Render engine]: Rendering page changes...")
            progressed = True

        return progressed

    async def _execute(self, phase: Phase, task: Task) -> None:
        self._notify(EventKind.TASK_STARTED, phase=phase, task=task)
        try:
            result = task.action()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            self._notify(EventKind.TASK_FAILED, phase=phase, task=task, text=str(exc), error=exc)
            raise
        self._notify(EventKind.TASK_COMPLETED, phase=phase, task=task)

    async def _wait_for_landing(self, *, timeout: float | None) -> None:
        self._landed.clear()
        if timeout is None:
            await self._landed.wait()
            return
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self._landed.wait(), timeout=timeout)

    def _notify(
        self,
        kind: EventKind,
        *,
        phase: Phase | None = None,
        task: Task | None = None,
        text: str = "",
        error: BaseException | None = None,
    ) -> None:
        self._sink.notify(
            LoopEvent(
                kind=kind,
                phase=phase,
                key=None if task is None else task.key,
                name=None if task is None else task.describe(),
                text=text,
                error=error,
            )
        )
