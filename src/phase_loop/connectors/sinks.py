# src/phase_loop/connectors/sinks.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from datetime import datetime
from typing import TextIO

from ..core.events import EventKind, LoopEvent
from ..core.ports import EventSink

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_event(event: LoopEvent) -> str:
    """Human-readable one-liner for an event."""
    if event.text and event.kind in (
        EventKind.LOOP_STARTED,
        EventKind.LOOP_FINISHED,
        EventKind.REPAINT,
        EventKind.MESSAGE,
    ):
        return event.text

    phase = event.phase.value if event.phase is not None else "-"
    label = event.name or "task"
    if event.kind == EventKind.TASK_STARTED:
        return f"[{phase}] {label} started (key={event.key})."
    if event.kind == EventKind.TASK_COMPLETED:
        return f"[{phase}] {label} completed."
    if event.kind == EventKind.TASK_FAILED:
        return f"[{phase}] {label} failed: {event.text or repr(event.error)}"
    return event.text or event.kind.value


class ConsoleSink:
    """
    Prints events as timestamped lines.

    Task start/complete lines are noisy next to the narration the demo actions
    emit themselves, so they are only printed when `verbose` is set.
    """

    def __init__(self, stream: TextIO | None = None, *, verbose: bool = False) -> None:
        self._stream = stream
        self._verbose = verbose

    def notify(self, event: LoopEvent) -> None:
        if not self._verbose and event.kind in (EventKind.TASK_STARTED, EventKind.TASK_COMPLETED):
            return
        stream = self._stream or sys.stdout
        print(f"[{_ts_local()}] {format_event(event)}", file=stream, flush=True)


class LoggingSink:
    """
    Forwards events to the logging module.

    - task failures: ERROR
    - task steps and repaints: DEBUG
    - narration and loop lifecycle: `narration_level` (INFO by default)

    When a ConsoleSink already prints the narration, pass
    narration_level=logging.DEBUG so the terminal does not show it twice.
    """

    def __init__(self, log: logging.Logger | None = None, *, narration_level: int = logging.INFO) -> None:
        self._log = log or logger
        self._narration_level = narration_level

    @property
    def narration_level(self) -> int:
        return self._narration_level

    def notify(self, event: LoopEvent) -> None:
        if event.kind == EventKind.TASK_FAILED:
            self._log.error("%s", format_event(event))
        elif event.kind in (EventKind.TASK_STARTED, EventKind.TASK_COMPLETED, EventKind.REPAINT):
            self._log.debug("%s", format_event(event))
        else:
            self._log.log(self._narration_level, "%s", format_event(event))


class FanOutSink:
    """Delivers every event to each sink, in order."""

    def __init__(self, sinks: Iterable[EventSink]) -> None:
        self._sinks = list(sinks)

    @property
    def sinks(self) -> list[EventSink]:
        return list(self._sinks)

    def notify(self, event: LoopEvent) -> None:
        for sink in self._sinks:
            sink.notify(event)
