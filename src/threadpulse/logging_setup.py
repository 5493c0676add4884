# src/threadpulse/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _PulseNoiseFilter(logging.Filter):
    """Console: timer chatter only at WARNING+, third-party only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("threadpulse.timers."):
            return record.levelno >= logging.WARNING
        if record.name.startswith("threadpulse."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path | None = ".local/threadpulse",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Filtered stderr handler, plus threadpulse.log under log_dir unless it is None.

    Replaces any handlers already on the root logger; call it once at startup.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_PulseNoiseFilter())
    root.addHandler(console)

    if log_dir is None:
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_path / "threadpulse.log"), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
