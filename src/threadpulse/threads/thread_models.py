# src/threadpulse/threads/thread_models.py

from __future__ import annotations

import numbers
from collections.abc import Callable, Generator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Final

PRIORITY_MIN: Final = 1
PRIORITY_MAX: Final = 10
PRIORITY_DEFAULT: Final = 5
PRIORITY_UNSET: Final = -1


class ThreadsType(StrEnum):
    """
    Dispatch strategy of a Threads scheduler.

    - concurrent: one step per thread per pulse, round-robin
    - sequential: drain one thread at a time
    - priority: like concurrent, higher thread priority visited first
    """

    CONCURRENT = "concurrent"
    SEQUENTIAL = "sequential"
    PRIORITY = "priority"

    @classmethod
    def parse(cls, raw: object) -> ThreadsType | None:
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


@dataclass(slots=True, frozen=True)
class PriorityProfile:
    pulsing: int  # pulse interval, ms (0 = every host frame)
    frame: int  # resumption steps per pulse


THREADS_PRIORITIES: Final[Mapping[str, PriorityProfile]] = {
    "low": PriorityProfile(pulsing=250, frame=8),
    "normal": PriorityProfile(pulsing=100, frame=15),
    "high": PriorityProfile(pulsing=50, frame=25),
    "extreme": PriorityProfile(pulsing=0, frame=50),
}


def parse_tier(raw: object) -> str | None:
    """Return the normalized tier name, or None if it is not in the table."""
    if not isinstance(raw, str):
        return None
    name = raw.strip().lower()
    return name if name in THREADS_PRIORITIES else None


def coerce_priority(raw: object) -> int | None:
    """
    Accept ints, integral floats and numeric strings in [1, 10].
    Bools are not priorities.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        try:
            raw = float(raw.strip())
        except ValueError:
            return None
    if not isinstance(raw, numbers.Real):
        return None
    # Range first: huge ints do not fit in a float.
    if not PRIORITY_MIN <= raw <= PRIORITY_MAX:
        return None
    value = float(raw)
    if not value.is_integer():
        return None
    return int(value)


@dataclass(slots=True, frozen=True)
class ThreadOptions:
    priority: int | None = None

    @classmethod
    def from_any(cls, raw: ThreadOptions | Mapping[str, Any] | None) -> ThreadOptions:
        if raw is None:
            return cls()
        if isinstance(raw, ThreadOptions):
            return cls(priority=coerce_priority(raw.priority))
        if isinstance(raw, Mapping):
            return cls(priority=coerce_priority(raw.get("priority")))
        return cls()


@dataclass(slots=True, eq=False)
class Thread:
    """
    One resumable computation owned by a Threads scheduler.

    `func` is called as func(threads, *arguments) on the first resumption;
    the generator it returns becomes `routine` and is advanced on later pulses.
    """

    id: int
    func: Callable[..., Any]
    arguments: tuple[Any, ...] = ()

    paused: bool = False
    started: bool = False
    priority: int = PRIORITY_UNSET

    routine: Generator[Any, Any, Any] | None = field(default=None, repr=False)

    def get(self) -> int:
        return self.priority

    def set(self, priority: object) -> bool:
        value = coerce_priority(priority)
        if value is None or value == self.priority:
            return False
        self.priority = value
        return True
