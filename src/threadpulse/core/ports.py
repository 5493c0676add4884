# src/threadpulse/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) the scheduler needs from its host.

The scheduler depends on Protocols instead of concrete timers or clocks.
This keeps host integration swappable (frame loop, asyncio, game engine timers)
and lets tests drive pulses deterministically.
"""

from typing import Any, Callable, Hashable, Protocol

PulseCallback = Callable[[], Any]


class TickSource(Protocol):
    """Monotonically increasing tick counter, in milliseconds."""

    def now_ms(self) -> float: ...


class TimerService(Protocol):
    """
    Host-side periodic callback facility.

    interval_ms == 0 means "as fast as the host's own frame cadence allows".
    The returned handle is opaque to the caller; it is only passed back to
    cancel() / is_active().
    """

    def start(self, callback: PulseCallback, interval_ms: float) -> Hashable: ...

    def cancel(self, handle: Hashable) -> None: ...

    def is_active(self, handle: Hashable) -> bool: ...


class ErrorSink(Protocol):
    """Fire-and-forget report of a failure inside a thread's computation."""

    def __call__(self, thread_id: int, exc: BaseException) -> None: ...
