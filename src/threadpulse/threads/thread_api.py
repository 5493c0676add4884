# src/threadpulse/threads/thread_api.py

from __future__ import annotations

"""
Convenience loops built on top of Threads.

Each helper registers one thread that walks a collection, calls `func` for
every item and sleeps `interval` ms in between, so big loops are spread over
many pulses instead of blocking the host. When the loop is done, the optional
callback receives the elapsed time in ms.
"""

import logging
from collections.abc import Callable, Generator, Iterable, Mapping, Sequence
from typing import Any

from .threads import Threads
from .thread_models import ThreadsType

logger = logging.getLogger(__name__)

ElapsedCallback = Callable[[float], Any]


class AsyncIterators:
    def __init__(self, interval: float = 100, threads: Threads | None = None) -> None:
        self.tasks = threads if threads is not None else Threads(ThreadsType.CONCURRENT, "normal")
        self.interval: float = 100
        self.set_interval(interval)

    @classmethod
    def from_settings(cls, settings: Any, threads: Threads | None = None) -> AsyncIterators:
        return cls(getattr(settings, "iterator_interval_ms", 100), threads=threads)

    def _spawn(self, items: Iterable[tuple[Any, ...]], func: Callable[..., Any], callback: ElapsedCallback | None) -> int:
        clock = self.tasks.clock

        def body(threads: Threads) -> Generator[None, Any, None]:
            tick = clock.now_ms()
            for item in items:
                func(*item)
                yield from threads.sleep(self.interval)

            if callable(callback):
                callback(clock.now_ms() - tick)

        return self.tasks.register(body)

    def map(self, array: Sequence[Any], func: Callable[[Any, int], Any], callback: ElapsedCallback | None = None) -> int:
        """Call func(value, index) for every element; indexes start at 1."""
        return self._spawn(((value, index) for index, value in enumerate(array, start=1)), func, callback)

    def iterate(
        self,
        start: float,
        stop: float,
        step: float,
        func: Callable[[float], Any],
        callback: ElapsedCallback | None = None,
    ) -> int:
        """Numeric for-loop over [start, stop], both ends inclusive."""
        if step == 0:
            raise ValueError("step must not be 0")

        def values() -> Iterable[tuple[float]]:
            i = start
            while (i <= stop) if step > 0 else (i >= stop):
                yield (i,)
                i += step

        return self._spawn(values(), func, callback)

    def foreach(self, mapping: Mapping[Any, Any], func: Callable[[Any, Any], Any], callback: ElapsedCallback | None = None) -> int:
        """Call func(value, key) for every entry."""
        return self._spawn(((value, key) for key, value in mapping.items()), func, callback)

    def get_interval(self) -> float:
        return self.interval

    def set_interval(self, interval: object) -> bool:
        try:
            value = float(interval)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False
        if isinstance(interval, bool) or value != value or value < 1 or value == self.get_interval():
            return False

        self.interval = int(value) if value.is_integer() else value
        logger.debug("iterator interval -> %sms", self.interval)
        return True
