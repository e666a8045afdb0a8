# src/phase_loop/errors.py

"""Error taxonomy shared by the scheduler, its queues and the demo producer."""

from __future__ import annotations

from typing import Any


class PhaseLoopError(Exception):
    """Base exception for all phase_loop errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CapacityExceeded(PhaseLoopError):
    """Push into a queue that already holds `capacity` items."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Queue capacity exceeded (capacity={capacity})", {"capacity": capacity})
        self.capacity = capacity


class EmptyQueue(PhaseLoopError):
    """pop()/peek() on an empty queue. The loop never does this; seeing it means a bug."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation}() on an empty queue", {"operation": operation})
        self.operation = operation


class InvalidDelay(PhaseLoopError, ValueError):
    """Enqueue delay is negative or not a finite number."""

    def __init__(self, delay_ms: Any) -> None:
        super().__init__(f"Invalid delay: {delay_ms!r} (must be a finite number >= 0)", {"delay_ms": delay_ms})
        self.delay_ms = delay_ms


class InvalidRange(PhaseLoopError, ValueError):
    """Producer delay range is misconfigured (min > max, or negative bounds)."""

    def __init__(self, min_delay_ms: int, max_delay_ms: int) -> None:
        super().__init__(
            f"Invalid options: min_delay_ms={min_delay_ms}, max_delay_ms={max_delay_ms}",
            {"min_delay_ms": min_delay_ms, "max_delay_ms": max_delay_ms},
        )
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
