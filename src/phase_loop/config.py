# src/phase_loop/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Malformed values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "PHASELOOP"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_opt_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Scheduler ----
    queue_capacity: int
    paint_interval_ms: float
    console_events: bool

    # ---- Demo producer ----
    demo_min_delay_ms: int
    demo_max_delay_ms: int
    demo_quantity: int
    demo_seed: int | None
    demo_sequential: bool

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "phase-loop"),
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/phase_loop")),
            queue_capacity=_env_int(_k("QUEUE_CAPACITY"), 1024),
            paint_interval_ms=_env_float(_k("PAINT_INTERVAL_MS"), 16.0),
            console_events=_env_bool(_k("CONSOLE_EVENTS"), True),
            demo_min_delay_ms=_env_int(_k("DEMO_MIN_DELAY_MS"), 500),
            demo_max_delay_ms=_env_int(_k("DEMO_MAX_DELAY_MS"), 1000),
            demo_quantity=_env_int(_k("DEMO_QUANTITY"), 8),
            demo_seed=_env_opt_int(_k("DEMO_SEED")),
            demo_sequential=_env_bool(_k("DEMO_SEQUENTIAL"), True),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
