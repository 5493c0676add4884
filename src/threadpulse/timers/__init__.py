"""
Host adapters for the scheduler ports.

Components:
- clock.py: MonotonicClock (real time), ManualClock (simulation/test time)
- polled.py: PolledTimerService driven by the host's frame loop
- asyncio_timers.py: AsyncioTimerService for hosts running an event loop
"""

from .asyncio_timers import AsyncioTimerService
from .clock import ManualClock, MonotonicClock
from .polled import PolledTimerService

__all__ = ["AsyncioTimerService", "ManualClock", "MonotonicClock", "PolledTimerService"]
