# src/threadpulse/timers/asyncio_timers.py

from __future__ import annotations

import asyncio
import logging

from ..core.ports import PulseCallback

logger = logging.getLogger(__name__)


class AsyncioTimerService:
    """
    Periodic callbacks on the running asyncio loop.

    Each timer is one asyncio.Task:
    - sleep for the interval (interval 0 just yields to the loop)
    - call the callback synchronously
    - log and keep going if the callback raises

    To stop a timer, cancel() it; aclose() cancels and awaits all of them.
    start() must be called while an event loop is running.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def start(self, callback: PulseCallback, interval_ms: float) -> asyncio.Task[None]:
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        task = asyncio.get_running_loop().create_task(self._run(callback, interval_ms / 1000.0))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel(self, handle: asyncio.Task[None]) -> None:
        handle.cancel()

    def is_active(self, handle: asyncio.Task[None]) -> bool:
        return not handle.done() and not handle.cancelling()

    async def aclose(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass

    @staticmethod
    async def _run(callback: PulseCallback, interval_s: float) -> None:
        while True:
            await asyncio.sleep(interval_s)
            try:
                callback()
            except Exception:
                logger.exception("periodic callback failed")
