# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "PHASELOOP_APP_NAME": "App display name (default: phase-loop).",
    "PHASELOOP_LOG_LEVEL": "Console logging level (default: INFO).",
    "PHASELOOP_DATA_DIR": "Local directory for the log file (default: .local/phase_loop).",
    # Scheduler
    "PHASELOOP_QUEUE_CAPACITY": "Max items per phase queue (default: 1024).",
    "PHASELOOP_PAINT_INTERVAL_MS": "Paint gate interval in ms (default: 16).",
    "PHASELOOP_CONSOLE_EVENTS": "Print loop events to stdout (true/false, default: true).",
    # Demo producer
    "PHASELOOP_DEMO_MIN_DELAY_MS": "Smallest random enqueue delay (default: 500).",
    "PHASELOOP_DEMO_MAX_DELAY_MS": "Largest random enqueue delay (default: 1000).",
    "PHASELOOP_DEMO_QUANTITY": "Number of demo tasks (default: 8).",
    "PHASELOOP_DEMO_SEED": "Random seed for a reproducible demo (default: unset).",
    "PHASELOOP_DEMO_SEQUENTIAL": "Wait for each task to land before scheduling the next (default: true).",
}
