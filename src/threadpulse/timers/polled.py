# src/threadpulse/timers/polled.py

"""
Frame-polled timer service.

The host calls poll() once per frame of its own main loop. Every active timer
whose deadline has passed fires once and is rescheduled one interval later.
Interval 0 timers fire on every poll.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

from ..core.ports import PulseCallback, TickSource
from .clock import ManualClock, MonotonicClock

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Timer:
    timer_id: int
    callback: PulseCallback
    interval_ms: float
    due_ms: float
    cancelled: bool = False


class PolledTimerService:
    def __init__(self, clock: TickSource | None = None) -> None:
        self._clock: TickSource = clock if clock is not None else MonotonicClock()
        self._ids = itertools.count(1)
        self._timers: dict[int, _Timer] = {}

    @property
    def clock(self) -> TickSource:
        return self._clock

    @property
    def active_count(self) -> int:
        return sum(1 for t in self._timers.values() if not t.cancelled)

    def start(self, callback: PulseCallback, interval_ms: float) -> int:
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        timer_id = next(self._ids)
        now = self._clock.now_ms()
        self._timers[timer_id] = _Timer(
            timer_id=timer_id,
            callback=callback,
            interval_ms=float(interval_ms),
            due_ms=now + float(interval_ms),
        )
        logger.debug("timer %s started interval=%sms", timer_id, interval_ms)
        return timer_id

    def cancel(self, handle: int) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.cancelled = True
            logger.debug("timer %s cancelled", handle)

    def is_active(self, handle: int) -> bool:
        timer = self._timers.get(handle)
        return timer is not None and not timer.cancelled

    def poll(self) -> int:
        """Fire every due timer once. Returns how many callbacks ran."""
        now = self._clock.now_ms()
        fired = 0
        # Callbacks may start/cancel timers while we iterate.
        for timer in list(self._timers.values()):
            if timer.cancelled or timer.due_ms > now:
                continue
            try:
                timer.callback()
            except Exception:
                logger.exception("timer %s callback failed", timer.timer_id)
            fired += 1
            if not timer.cancelled:
                timer.due_ms = now + timer.interval_ms
        return fired

    def advance(self, delta_ms: float) -> int:
        """Move a ManualClock forward and poll once."""
        if not isinstance(self._clock, ManualClock):
            raise TypeError("advance() needs a ManualClock; call poll() for real clocks")
        self._clock.advance(delta_ms)
        return self.poll()
