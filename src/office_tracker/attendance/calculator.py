from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from ..common.duration import minutes_between
from ..core.constants import DEFAULT_REQUIRED_WORK_HOURS
from .model import BreakSession, DaySummary


class SummaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for the daily summary)."""

    def __init__(self, required_minutes: int = DEFAULT_REQUIRED_WORK_HOURS * 60):
        self.required_minutes = int(required_minutes)

    @abstractmethod
    def compute(
        self,
        punch_in: Optional[datetime],
        punch_out: Optional[datetime],
        breaks: Iterable[BreakSession],
    ) -> Optional[DaySummary]:
        raise NotImplementedError


class StandardSummaryCalculator(SummaryCalculator):
    """Standard rule: (out - in) - every break minute, not below 0.

    Over-limit break minutes are subtracted in full, not capped at the allowance.
    """

    def compute(
        self,
        punch_in: Optional[datetime],
        punch_out: Optional[datetime],
        breaks: Iterable[BreakSession],
    ) -> Optional[DaySummary]:
        if punch_in is None or punch_out is None:
            return None

        total_office = minutes_between(punch_in, punch_out)
        break_minutes = sum(int(b.minutes or 0) for b in breaks)
        return DaySummary(
            total_office_minutes=total_office,
            break_minutes=break_minutes,
            work_minutes=max(0, total_office - break_minutes),
            required_minutes=self.required_minutes,
        )
