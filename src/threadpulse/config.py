# src/threadpulse/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Bad values never break import: every parser falls back to its default.
- Scheduler defaults (strategy, tier) are validated by the scheduler itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "THREADPULSE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path
    log_to_file: bool

    # ---- Scheduler defaults ----
    default_type: str
    default_priority: str

    # ---- Iteration helpers ----
    iterator_interval_ms: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "threadpulse").strip() or "threadpulse"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/threadpulse"))
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        default_type = _env(_k("DEFAULT_TYPE"), "concurrent").strip().lower()
        default_priority = _env(_k("DEFAULT_PRIORITY"), "normal").strip().lower()

        iterator_interval_ms = max(1, _env_int(_k("ITERATOR_INTERVAL_MS"), 100))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            log_to_file=log_to_file,
            default_type=default_type,
            default_priority=default_priority,
            iterator_interval_ms=iterator_interval_ms,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
try:
    import config_local as _config_local  # type: ignore
except ModuleNotFoundError:
    _config_local = None

if _config_local is not None:
    # Keep it explicit: only scheduler defaults can be overridden here.
    if hasattr(_config_local, "DEFAULT_TYPE"):
        object.__setattr__(SETTINGS, "default_type", str(_config_local.DEFAULT_TYPE).lower())  # type: ignore[misc]
    if hasattr(_config_local, "DEFAULT_PRIORITY"):
        object.__setattr__(SETTINGS, "default_priority", str(_config_local.DEFAULT_PRIORITY).lower())  # type: ignore[misc]


def get_settings() -> Settings:
    return SETTINGS
