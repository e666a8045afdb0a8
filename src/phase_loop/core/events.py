# src/phase_loop/core/events.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..scheduler.models import Phase


class EventKind(StrEnum):
    LOOP_STARTED = "loop_started"
    TASK_STARTED = "task_started"
    TASK_COMPLETED = "task_completed"
    TASK_FAILED = "task_failed"
    REPAINT = "repaint"
    LOOP_FINISHED = "loop_finished"
    MESSAGE = "message"  # free-form narration emitted by actions


@dataclass(slots=True, frozen=True)
class LoopEvent:
    """
    One observable step of the loop.

    Only the kind and the relative order of events are meaningful;
    `text` is diagnostic and may change freely.
    """

    kind: EventKind
    phase: Phase | None = None
    key: float | None = None
    name: str | None = None
    text: str = ""
    error: BaseException | None = None
