# src/phase_loop/logging_setup.py

from __future__ import annotations

"""
Logging configuration for the CLI.

Three destinations:
- stderr: operational messages only (startup, failures, "Bye.")
- phase_loop.log: everything else the app logs, for debugging a run afterwards
- scheduler.log: per-task trace of the scheduler (enqueue, landing, phase steps)

Per-task scheduler chatter never reaches the terminal: the loop runs a task every
few milliseconds and would drown the console narration printed by ConsoleSink.
"""

import logging
import sys
from pathlib import Path

SCHEDULER_LOGGER = "phase_loop.scheduler"
SINK_LOGGER = "phase_loop.connectors.sinks"

_FMT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _is_under(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + ".")


class _ConsoleFilter(logging.Filter):
    """
    Decide what the terminal shows.

    - scheduler trace: only WARNING+ (the rest goes to scheduler.log)
    - LoggingSink copies of loop events: dropped when `narration_on_stdout`,
      since ConsoleSink already printed the same line
    - other phase_loop logs: pass
    - everything else (asyncio, py.warnings, ...): ERROR+ only
    """

    def __init__(self, *, narration_on_stdout: bool) -> None:
        super().__init__()
        self.narration_on_stdout = narration_on_stdout

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if _is_under(name, SCHEDULER_LOGGER):
            return record.levelno >= logging.WARNING
        if _is_under(name, SINK_LOGGER):
            return not self.narration_on_stdout
        if _is_under(name, "phase_loop"):
            return True
        # asyncio reports "Task exception was never retrieved" at ERROR; keep it.
        return record.levelno >= logging.ERROR


class _SchedulerTraceFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return _is_under(record.name, SCHEDULER_LOGGER)


class _AppFileFilter(logging.Filter):
    """Scheduler detail below WARNING lives in scheduler.log only."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not _is_under(record.name, SCHEDULER_LOGGER) or record.levelno >= logging.WARNING


def setup_logging(
    *,
    log_dir: str | Path = ".local/phase_loop",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    scheduler_trace_level: int = logging.DEBUG,
    narration_on_stdout: bool = False,
) -> Path:
    """
    Install the console, app-file and scheduler-trace handlers on the root logger.

    Replaces any handlers already installed, so calling it twice does not duplicate output.
    Returns the directory holding the log files.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level, scheduler_trace_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=_FMT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleFilter(narration_on_stdout=narration_on_stdout))
    root.addHandler(console)

    app_file = logging.FileHandler(str(log_dir / "phase_loop.log"), encoding="utf-8")
    app_file.setLevel(file_level)
    app_file.setFormatter(fmt)
    app_file.addFilter(_AppFileFilter())
    root.addHandler(app_file)

    trace = logging.FileHandler(str(log_dir / "scheduler.log"), encoding="utf-8")
    trace.setLevel(scheduler_trace_level)
    trace.setFormatter(fmt)
    trace.addFilter(_SchedulerTraceFilter())
    root.addHandler(trace)

    logging.captureWarnings(True)
    return log_dir
