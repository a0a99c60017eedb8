from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from .datetime_utils import localize, now_local


class Clock(Protocol):
    """Supplies the current instant for every 'now' lookup."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return now_local()


class FixedClock:
    """Manually driven clock for tests and replays."""

    def __init__(self, start: datetime):
        self._now = localize(start)

    def now(self) -> datetime:
        return self._now

    def set(self, value: datetime) -> None:
        self._now = localize(value)

    def advance(self, *, minutes: int = 0, seconds: int = 0) -> datetime:
        self._now = self._now + timedelta(minutes=minutes, seconds=seconds)
        return self._now
