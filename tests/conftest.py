# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable

import pytest

from phase_loop.scheduler.gate import PaintGate
from phase_loop.scheduler.loop import PhaseScheduler

from .fakes import FakeClock, RecordingSink


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def make_scheduler(clock: FakeClock, sink: RecordingSink) -> Callable[..., PhaseScheduler]:
    """
    Build a scheduler on the fake clock.

    `gate_age_ms` sets how long ago the gate last closed:
    0 keeps it closed, >= 16 makes it open on the next check.
    """

    def factory(*, capacity: int = 16, gate_age_ms: float = 0.0) -> PhaseScheduler:
        gate = PaintGate(clock=clock, last_gate_time=clock() - gate_age_ms)
        return PhaseScheduler(capacity=capacity, sink=sink, gate=gate)

    return factory
