# src/phase_loop/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the scheduler.

The scheduler depends on Protocols instead of concrete implementations.
This keeps output sinks and clocks swappable and makes testing easier.
"""

import time
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol

if TYPE_CHECKING:
    from .events import LoopEvent

Action = Callable[[], "Awaitable[Any] | Any"]
# Zero-argument unit of work. If it returns an awaitable, the loop awaits it.

Clock = Callable[[], float]
# Current time in milliseconds. Only differences between readings matter.


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class EventSink(Protocol):
    """
    Where the scheduler reports what it does.

    Implementations decide what to do with an event:
    print it, log it, record it for assertions, etc.
    """

    def notify(self, event: LoopEvent) -> None: ...
