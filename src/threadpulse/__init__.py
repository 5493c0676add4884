"""
threadpulse: cooperative, time-sliced threads for tick-driven hosts.

    from threadpulse import Threads

    threads = Threads("concurrent", "normal")

    def worker(threads, n):
        for i in range(n):
            ...
            yield

    threads.register(worker, None, 10)
"""

from .threads.sleep import sleep
from .threads.thread_api import AsyncIterators
from .threads.thread_models import THREADS_PRIORITIES, PriorityProfile, Thread, ThreadOptions, ThreadsType
from .threads.threads import Threads, log_thread_error

__all__ = [
    "AsyncIterators",
    "PriorityProfile",
    "THREADS_PRIORITIES",
    "Thread",
    "ThreadOptions",
    "Threads",
    "ThreadsType",
    "log_thread_error",
    "sleep",
]
