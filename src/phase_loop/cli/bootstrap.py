# src/phase_loop/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the event sinks and the scheduler together.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..connectors.sinks import ConsoleSink, FanOutSink, LoggingSink
from ..core.ports import EventSink
from ..scheduler.loop import PhaseScheduler

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def build_sink(settings: Settings) -> EventSink:
    if settings.console_events:
        # Console prints the narration; keep the log copy out of the terminal.
        return FanOutSink([ConsoleSink(), LoggingSink(narration_level=logging.DEBUG)])
    return LoggingSink()


def create_scheduler(*, settings: Settings | None = None, sink: EventSink | None = None) -> PhaseScheduler:
    """
    Create a PhaseScheduler from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    scheduler = PhaseScheduler(
        capacity=settings.queue_capacity,
        sink=sink or build_sink(settings),
        paint_interval_ms=settings.paint_interval_ms,
    )
    logger.info(
        "Scheduler ready capacity=%s paint_interval_ms=%s",
        settings.queue_capacity,
        settings.paint_interval_ms,
    )
    return scheduler
