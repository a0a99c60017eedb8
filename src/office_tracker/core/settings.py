from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Any

from ..common.datetime_utils import parse_hhmm
from .constants import (
    DEFAULT_BASE_BREAK_MINUTES,
    DEFAULT_OFFICE_START,
    DEFAULT_REQUIRED_WORK_HOURS,
    DEFAULT_ROLLOVER_CHECK_SECONDS,
)
from .exceptions import ValidationError

STORAGE_BACKENDS = ("memory", "json", "mysql")


@dataclass(frozen=True)
class TrackerSettings:
    """Typed view over a settings module (config.development, config.testing, ...)."""

    secret_key: str = "dev-secret-key"
    debug: bool = False
    storage_backend: str = "memory"
    state_file: str = ""
    db_config: dict = field(default_factory=dict)
    office_start: time = DEFAULT_OFFICE_START
    base_break_minutes: int = DEFAULT_BASE_BREAK_MINUTES
    required_work_hours: int = DEFAULT_REQUIRED_WORK_HOURS
    rollover_check_seconds: int = DEFAULT_ROLLOVER_CHECK_SECONDS
    start_scheduler: bool = False
    log_level: str = "INFO"
    log_file: str = ""

    @property
    def required_minutes(self) -> int:
        return self.required_work_hours * 60

    @classmethod
    def from_module(cls, settings: Any) -> "TrackerSettings":
        backend = str(getattr(settings, "STORAGE_BACKEND", "memory")).lower()
        if backend not in STORAGE_BACKENDS:
            raise ValidationError(f"Unknown STORAGE_BACKEND {backend!r}, expected one of {STORAGE_BACKENDS}")

        office_start = getattr(settings, "OFFICE_START", DEFAULT_OFFICE_START)
        if isinstance(office_start, str):
            office_start = parse_hhmm(office_start)

        return cls(
            secret_key=str(getattr(settings, "SECRET_KEY", "dev-secret-key")),
            debug=bool(getattr(settings, "DEBUG", False)),
            storage_backend=backend,
            state_file=str(getattr(settings, "STATE_FILE", "") or ""),
            db_config=dict(getattr(settings, "DB_CONFIG", {}) or {}),
            office_start=office_start,
            base_break_minutes=int(getattr(settings, "BASE_BREAK_MINUTES", DEFAULT_BASE_BREAK_MINUTES)),
            required_work_hours=int(getattr(settings, "REQUIRED_WORK_HOURS", DEFAULT_REQUIRED_WORK_HOURS)),
            rollover_check_seconds=int(getattr(settings, "ROLLOVER_CHECK_SECONDS", DEFAULT_ROLLOVER_CHECK_SECONDS)),
            start_scheduler=bool(getattr(settings, "START_SCHEDULER", False)),
            log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
            log_file=str(getattr(settings, "LOG_FILE", "") or ""),
        )
