# src/threadpulse/threads/threads.py

from __future__ import annotations

"""
Cooperative thread scheduler.

Host code registers generator functions ("threads"). A periodic pulse from the
host's timer service calls process(), which resumes registered threads a few
steps at a time so no single thread can stall the host loop:

- concurrent: one step per thread, round-robin, until the tier's budget is spent
- priority:   same, but threads with a higher priority are visited first
- sequential: one thread at a time, drained until it finishes

Threads yield to give control back. Every `yield` evaluates to the scheduler,
and `yield from threads.sleep(ms)` waits without blocking the host.

The pulse only exists while some thread can make progress; it is torn down
when everything finished or is paused, and recreated by register/resume.
"""

import inspect
import logging
from collections.abc import Callable, Generator, Hashable, Mapping
from typing import Any

from ..core.ports import ErrorSink, TickSource, TimerService
from ..timers.clock import MonotonicClock
from ..timers.polled import PolledTimerService
from .sleep import sleep as _sleep
from .thread_models import (
    PRIORITY_DEFAULT,
    PRIORITY_UNSET,
    THREADS_PRIORITIES,
    PriorityProfile,
    Thread,
    ThreadOptions,
    ThreadsType,
    parse_tier,
)

logger = logging.getLogger(__name__)

NO_THREAD = -1


def log_thread_error(thread_id: int, exc: BaseException) -> None:
    """Default error sink: report through logging, never raise."""
    logger.error("[Threads] Thread ID %s error: %s", thread_id, exc, exc_info=exc)


class _Finished(Exception):
    """Internal marker: the thread's computation reached its end."""


class Threads:
    def __init__(
        self,
        type: str = ThreadsType.CONCURRENT,
        priority: str = "normal",
        *,
        timers: TimerService | None = None,
        clock: TickSource | None = None,
        error_sink: ErrorSink | Callable[[int, BaseException], None] | None = None,
    ) -> None:
        self._threads: dict[int, Thread] = {}

        self._next_id = 0
        self._current_id = NO_THREAD
        self._running_id: int | None = None

        self._type = ThreadsType.CONCURRENT
        self._priority = "normal"

        if clock is None:
            clock = getattr(timers, "clock", None) or MonotonicClock()
        self._clock: TickSource = clock
        self._timers: TimerService = timers if timers is not None else PolledTimerService(self._clock)
        self._error_sink = error_sink if error_sink is not None else log_thread_error
        self._timer: Hashable | None = None

        # Invalid values keep the defaults above.
        self.set_type(type)
        self.set_priority(priority)

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> Threads:
        return cls(
            getattr(settings, "default_type", ThreadsType.CONCURRENT),
            getattr(settings, "default_priority", "normal"),
            **kwargs,
        )

    # ---- introspection ----

    def __len__(self) -> int:
        return len(self._threads)

    def __contains__(self, thread_id: object) -> bool:
        return thread_id in self._threads

    def __repr__(self) -> str:
        return (
            f"Threads(type={self._type.value!r}, priority={self._priority!r}, "
            f"threads={len(self._threads)}, pulsing={self.is_pulsing})"
        )

    def ids(self) -> list[int]:
        return list(self._threads)

    def get_thread(self, thread_id: int) -> Thread | None:
        return self._threads.get(thread_id)

    @property
    def clock(self) -> TickSource:
        return self._clock

    @property
    def timers(self) -> TimerService:
        return self._timers

    @property
    def current_id(self) -> int:
        """Sequential-mode cursor (-1 when no thread is selected)."""
        return self._current_id

    @property
    def running_id(self) -> int | None:
        """Id of the thread being resumed right now, if any."""
        return self._running_id

    @property
    def is_pulsing(self) -> bool:
        return self._timer is not None and self._timers.is_active(self._timer)

    @property
    def profile(self) -> PriorityProfile:
        return THREADS_PRIORITIES[self._priority]

    # ---- registry ----

    def register(
        self,
        func: Callable[..., Any],
        options: ThreadOptions | Mapping[str, Any] | None = None,
        *args: Any,
    ) -> int:
        """
        Register `func` as a new thread and make sure the pulse is running.

        `func` is called as func(threads, *args) on its first resumption.
        Returns the new thread id.
        """
        opts = ThreadOptions.from_any(options)
        if opts.priority is not None:
            priority = opts.priority
        elif self._type == ThreadsType.PRIORITY:
            priority = PRIORITY_DEFAULT
        else:
            priority = PRIORITY_UNSET

        self._next_id += 1
        thread_id = self._next_id
        self._threads[thread_id] = Thread(
            id=thread_id,
            func=func,
            arguments=tuple(args),
            priority=priority,
        )
        logger.debug("thread %s registered priority=%s", thread_id, priority)

        self.start()
        return thread_id

    def remove(self, thread_id: int) -> bool:
        thread = self._threads.pop(thread_id, None)
        if thread is None:
            return False

        if self._current_id == thread_id:
            self._current_id = NO_THREAD

        self._dispose(thread)
        logger.debug("thread %s removed", thread_id)
        return True

    def clear(self) -> bool:
        if not self._threads:
            return False

        threads = list(self._threads.values())
        self._threads = {}
        self._current_id = NO_THREAD
        self.stop()

        for thread in threads:
            self._dispose(thread)
        logger.debug("cleared %s threads", len(threads))
        return True

    def _dispose(self, thread: Thread) -> None:
        """Close a suspended generator so its finally blocks run."""
        # A thread removing itself is still executing; _step() closes it afterwards.
        if thread.id == self._running_id:
            return
        routine, thread.routine = thread.routine, None
        if routine is None:
            return
        try:
            routine.close()
        except Exception:
            logger.exception("thread %s did not close cleanly", thread.id)

    # ---- pulse ----

    def start(self) -> bool:
        if self.is_pulsing:
            return False

        interval = self.profile.pulsing
        self._timer = self._timers.start(self.process, interval)
        logger.debug("pulse started priority=%s interval=%sms", self._priority, interval)
        return True

    def stop(self) -> bool:
        if self._timer is None:
            return False

        timer, self._timer = self._timer, None
        active = self._timers.is_active(timer)
        if active:
            self._timers.cancel(timer)
            logger.debug("pulse stopped")
        return active

    # ---- per-thread state ----

    def pause(self, thread_id: int) -> bool:
        thread = self._threads.get(thread_id)
        if thread is None or thread.paused:
            return False
        thread.paused = True
        return True

    def resume(self, thread_id: int) -> bool:
        thread = self._threads.get(thread_id)
        if thread is None or not thread.paused:
            return False
        thread.paused = False

        self.start()
        return True

    def is_paused(self, thread_id: int) -> bool:
        thread = self._threads.get(thread_id)
        return thread is not None and thread.paused

    def is_started(self, thread_id: int) -> bool:
        thread = self._threads.get(thread_id)
        return thread is not None and thread.started

    # ---- configuration ----

    def get_type(self) -> ThreadsType:
        return self._type

    def set_type(self, style: object) -> bool:
        parsed = ThreadsType.parse(style)
        if parsed is None or parsed == self._type:
            return False

        self._type = parsed
        logger.debug("dispatch type -> %s", parsed.value)
        return True

    def get_priority(self) -> str:
        return self._priority

    def set_priority(self, priority: object) -> bool:
        tier = parse_tier(priority)
        if tier is None or tier == self._priority:
            return False

        self._priority = tier
        self.stop()
        if self._threads:
            self.start()
        logger.debug("priority tier -> %s", tier)
        return True

    def sleep(self, milliseconds: object) -> Generator[None, Any, None]:
        """`yield from threads.sleep(ms)` inside a thread body."""
        return _sleep(milliseconds, self._clock)

    # ---- dispatch ----

    def process(self) -> int:
        """
        Run one pulse. Returns how many resumptions consumed budget.

        Called by the timer service; hosts and tests may call it directly.
        """
        if self._running_id is not None:
            # Called from inside a thread; nothing to do.
            return 0

        if self._type == ThreadsType.SEQUENTIAL:
            return self._process_sequential()
        return self._process_round_robin()

    def _process_round_robin(self) -> int:
        budget = self.profile.frame
        frames = 0
        active = False

        order = list(self._threads.values())
        if self._type == ThreadsType.PRIORITY:
            # sort() is stable: equal priorities keep round-robin order.
            order.sort(key=lambda t: t.priority, reverse=True)

        for thread in order:
            if frames >= budget:
                active = True
                break
            if self._threads.get(thread.id) is not thread or thread.paused:
                continue

            active = True
            if self._step(thread):
                frames += 1
                # Rotate: whoever ran goes to the back of the queue.
                if self._threads.get(thread.id) is thread:
                    self._threads[thread.id] = self._threads.pop(thread.id)

        if not active:
            self.stop()
        return frames

    def _process_sequential(self) -> int:
        thread = self._threads.get(self._current_id)
        if thread is None:
            self._current_id = NO_THREAD
            # Round-robin rotation reorders the dict; ids keep registration order.
            thread = min((t for t in self._threads.values() if not t.paused), key=lambda t: t.id, default=None)
            if thread is None:
                self.stop()
                return 0
            self._current_id = thread.id

        if thread.paused:
            return 0

        budget = self.profile.frame
        frames = 0
        while frames < budget:
            if not self._step(thread):
                break
            frames += 1
            # The thread may have paused or removed itself.
            if thread.paused or self._threads.get(thread.id) is not thread:
                break
        return frames

    def _step(self, thread: Thread) -> bool:
        """
        Resume `thread` once.

        Returns True if the thread yielded (a budget-consuming step). On
        completion or failure the thread is removed and False is returned.
        """
        error: Exception | None = None
        finished = False

        self._running_id = thread.id
        try:
            self._resume(thread)
        except _Finished:
            finished = True
        except Exception as exc:
            finished, error = True, exc
        finally:
            self._running_id = None

        if error is not None:
            self._report(thread.id, error)
        if finished:
            self.remove(thread.id)
            return False

        if self._threads.get(thread.id) is not thread:
            # Removed itself (or cleared the scheduler) while running.
            self._dispose(thread)
        return True

    def _resume(self, thread: Thread) -> None:
        if not thread.started:
            thread.started = True
            result = thread.func(self, *thread.arguments)
            if not inspect.isgenerator(result):
                # Plain callables finish in a single step.
                raise _Finished
            thread.routine = result
            try:
                next(result)
            except StopIteration:
                raise _Finished from None
            return

        routine = thread.routine
        if routine is None:
            raise _Finished
        try:
            routine.send(self)
        except StopIteration:
            raise _Finished from None

    def _report(self, thread_id: int, exc: Exception) -> None:
        try:
            self._error_sink(thread_id, exc)
        except Exception:
            logger.exception("error sink failed for thread %s", thread_id)
