# src/phase_loop/scheduler/gate.py

from __future__ import annotations

from ..core.ports import Clock, monotonic_ms

DEFAULT_PAINT_INTERVAL_MS = 16.0  # ~60 Hz


class PaintGate:
    """
    Time-based predicate for the frame phase.

    The gate is open once `interval_ms` have passed since it was last closed.
    Closing it records the current time; `last_gate_time` never goes backwards.
    """

    def __init__(
        self,
        *,
        interval_ms: float = DEFAULT_PAINT_INTERVAL_MS,
        clock: Clock | None = None,
        last_gate_time: float | None = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._interval_ms = float(interval_ms)
        self._clock = clock or monotonic_ms
        self._last_gate_time = self._clock() if last_gate_time is None else float(last_gate_time)

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def last_gate_time(self) -> float:
        return self._last_gate_time

    def is_open(self) -> bool:
        return self._clock() - self._last_gate_time >= self._interval_ms

    def remaining_ms(self) -> float:
        """Milliseconds until the gate opens (0.0 if it is already open)."""
        return max(0.0, self._interval_ms - (self._clock() - self._last_gate_time))

    def close(self) -> None:
        self._last_gate_time = max(self._last_gate_time, self._clock())
