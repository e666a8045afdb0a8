# src/phase_loop/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the scheduler, feeds it demo tasks and drains it.
"""

from __future__ import annotations

import asyncio
import logging
import random
import sys

from ..cli.bootstrap import create_scheduler
from ..config import Settings, get_settings
from ..demo.producer import produce_tasks
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def run_demo(settings: Settings) -> None:
    scheduler = create_scheduler(settings=settings)
    rng = random.Random(settings.demo_seed)

    production = await produce_tasks(
        scheduler,
        min_delay_ms=settings.demo_min_delay_ms,
        max_delay_ms=settings.demo_max_delay_ms,
        quantity=settings.demo_quantity,
        rng=rng,
        sequential=settings.demo_sequential,
    )
    await scheduler.run()
    # Landing failures in fire-and-forget mode surface here.
    await production.wait_landed()


def main() -> int:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        narration_on_stdout=settings.console_events,
    )

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(run_demo(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting.")
        return 130
    except Exception as exc:
        logger.error("Run failed: %s", exc, exc_info=True)
        return 1

    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
