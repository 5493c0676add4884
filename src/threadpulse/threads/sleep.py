# src/threadpulse/threads/sleep.py

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from ..core.ports import TickSource


def sleep(milliseconds: object, clock: TickSource) -> Generator[None, Any, None]:
    """
    Suspend the calling thread until `milliseconds` have elapsed on `clock`.

    Use it from inside a thread body:

        def worker(threads):
            yield from sleep(250, threads.clock)

    Anything that is not a number, or is below 1, yields exactly once.
    """
    try:
        ms = 0.0 if isinstance(milliseconds, bool) else float(milliseconds)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        ms = 0.0

    if ms != ms or ms < 1:  # NaN counts as "not a number"
        yield
        return

    started = clock.now_ms()
    while True:
        yield
        if clock.now_ms() - started >= ms:
            return
