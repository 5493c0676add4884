# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from threadpulse.threads.threads import Threads
from threadpulse.timers.clock import ManualClock

from .fakes import FakeTimerService, RecordingErrorSink


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with Threads.from_settings.

    A SimpleNamespace keeps tests independent from the real environment.
    """
    return SimpleNamespace(
        default_type="sequential",
        default_priority="high",
        iterator_interval_ms=10,
    )


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def timers() -> FakeTimerService:
    return FakeTimerService()


@pytest.fixture()
def errors() -> RecordingErrorSink:
    return RecordingErrorSink()


@pytest.fixture()
def make_threads(timers: FakeTimerService, clock: ManualClock, errors: RecordingErrorSink):
    """Factory for schedulers wired with deterministic fakes."""

    def _make(type: str = "concurrent", priority: str = "normal") -> Threads:
        return Threads(type, priority, timers=timers, clock=clock, error_sink=errors)

    return _make
