# src/phase_loop/scheduler/models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..core.ports import Action


class Phase(StrEnum):
    """
    Work classes, in the order the loop visits them.

    - immediate: at most one task per loop iteration
    - background: drained to exhaustion every iteration
    - frame: drained only when the paint gate is open
    """

    IMMEDIATE = "immediate"
    BACKGROUND = "background"
    FRAME = "frame"


@dataclass(slots=True, frozen=True)
class Task:
    action: Action
    key: float  # lower runs sooner; the enqueue delay in ms
    name: str | None = None

    def describe(self) -> str:
        return self.name or getattr(self.action, "__qualname__", None) or repr(self.action)
