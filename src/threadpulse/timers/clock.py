# src/threadpulse/timers/clock.py

from __future__ import annotations

import time


class MonotonicClock:
    """Wall-independent tick source backed by time.monotonic(), in milliseconds."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """
    Tick source that only moves when told to.

    Used by hosts that own their own simulation time (fixed-step game loops)
    and by tests.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = float(start_ms)

    def now_ms(self) -> float:
        return self._now_ms

    def advance(self, delta_ms: float) -> float:
        if delta_ms < 0:
            raise ValueError("delta_ms must be >= 0")
        self._now_ms += float(delta_ms)
        return self._now_ms

    def set(self, now_ms: float) -> None:
        if now_ms < self._now_ms:
            raise ValueError("clock cannot move backwards")
        self._now_ms = float(now_ms)
