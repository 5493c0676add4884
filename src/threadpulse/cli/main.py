# src/threadpulse/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds a Threads scheduler on the asyncio timer service,
registers a few demo counting threads and runs until all of them finished.
Handy for eyeballing how strategy and tier change the interleaving.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Generator
from typing import Any

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..threads.thread_models import THREADS_PRIORITIES, ThreadsType
from ..threads.threads import Threads
from ..timers.asyncio_timers import AsyncioTimerService

logger = logging.getLogger(__name__)


def _counter(threads: Threads, name: str, steps: int) -> Generator[None, Any, None]:
    for i in range(1, steps + 1):
        logger.info("%s step %s/%s", name, i, steps)
        yield
    logger.info("%s done", name)


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="threadpulse", description="Run demo threads through the scheduler.")
    parser.add_argument("--type", default=settings.default_type, choices=[t.value for t in ThreadsType])
    parser.add_argument("--priority", default=settings.default_priority, choices=list(THREADS_PRIORITIES))
    parser.add_argument("--units", type=int, default=3, help="number of demo threads")
    parser.add_argument("--steps", type=int, default=5, help="yields per demo thread")
    return parser


async def run_demo(threads_type: str, priority: str, units: int, steps: int) -> None:
    timers = AsyncioTimerService()
    threads = Threads(threads_type, priority, timers=timers)
    try:
        for n in range(1, max(0, units) + 1):
            # Later units get higher priority so the priority strategy is visible.
            threads.register(_counter, {"priority": min(10, n)}, f"unit-{n}", max(0, steps))

        while len(threads):
            await asyncio.sleep(0.01)
    finally:
        threads.clear()
        await timers.aclose()


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir if settings.log_to_file else None, console_level=console_level)

    args = _build_parser(settings).parse_args(argv)
    logger.info("Starting %s type=%s priority=%s", settings.app_name, args.type, args.priority)

    try:
        asyncio.run(run_demo(args.type, args.priority, args.units, args.steps))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
