"""Minute-granularity duration arithmetic and calendar-day identity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .datetime_utils import localize


def minutes_between(a: Optional[datetime], b: Optional[datetime]) -> int:
    """Whole minutes from a to b, floored; reversed or missing inputs give 0."""
    if a is None or b is None:
        return 0
    seconds = (b - a).total_seconds()
    return max(0, int(seconds // 60))


def format_duration(minutes: int) -> str:
    """'1h 5m' when there are hours, else '5m'."""
    minutes = max(0, int(minutes))
    hrs, mins = divmod(minutes, 60)
    if hrs > 0:
        return f"{hrs}h {mins}m"
    return f"{mins}m"


def format_clock(value: Optional[datetime]) -> str:
    """'09:15 AM' in local time, '--:--' when unset."""
    if value is None:
        return "--:--"
    return localize(value).strftime("%I:%M %p")


def day_key(value: datetime) -> str:
    """Local calendar-day identifier (YYYY-MM-DD) used as the rollover marker."""
    return localize(value).date().isoformat()


def same_day(a: datetime, b: datetime) -> bool:
    return day_key(a) == day_key(b)
