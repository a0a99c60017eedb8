from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from ..common.duration import minutes_between
from ..core.enums import TrackerState


@dataclass(frozen=True)
class BreakSession:
    """A closed break. Edits replace the session instead of mutating it."""

    start: Optional[datetime]
    end: Optional[datetime]
    minutes: int

    @classmethod
    def between(cls, start: Optional[datetime], end: Optional[datetime]) -> "BreakSession":
        minutes = minutes_between(start, end) if start and end else 0
        return cls(start=start, end=end, minutes=minutes)


@dataclass
class DayRecord:
    """The single live record for 'today', owned by AttendanceService."""

    punch_in: Optional[datetime] = None
    punch_out: Optional[datetime] = None
    breaks: List[BreakSession] = field(default_factory=list)
    on_break: bool = False
    break_start: Optional[datetime] = None

    @property
    def state(self) -> TrackerState:
        if self.punch_in is None:
            return TrackerState.NOT_STARTED
        if self.punch_out is not None:
            return TrackerState.COMPLETED
        if self.on_break:
            return TrackerState.ON_BREAK
        return TrackerState.WORKING

    @property
    def committed_break_minutes(self) -> int:
        return sum(b.minutes for b in self.breaks)

    def is_empty(self) -> bool:
        return self.punch_in is None and self.punch_out is None and not self.breaks

    def reset(self) -> None:
        self.punch_in = None
        self.punch_out = None
        self.breaks = []
        self.on_break = False
        self.break_start = None

    def copy(self) -> "DayRecord":
        return DayRecord(
            punch_in=self.punch_in,
            punch_out=self.punch_out,
            breaks=list(self.breaks),
            on_break=self.on_break,
            break_start=self.break_start,
        )


@dataclass(frozen=True)
class DaySummary:
    """Derived totals for a day with both punches; never stored on its own."""

    total_office_minutes: int
    break_minutes: int
    work_minutes: int
    required_minutes: int

    @property
    def is_compliant(self) -> bool:
        return self.work_minutes >= self.required_minutes

    @property
    def shortfall_minutes(self) -> int:
        return max(0, self.required_minutes - self.work_minutes)

    @property
    def overtime_minutes(self) -> int:
        return max(0, self.work_minutes - self.required_minutes)


@dataclass(frozen=True)
class HistoryEntry:
    """Frozen copy of a past day, tagged with that day's calendar identifier."""

    date: str
    punch_in: Optional[datetime]
    punch_out: Optional[datetime]
    breaks: Tuple[BreakSession, ...]
    summary: Optional[DaySummary]


@dataclass(frozen=True)
class BreakStatus:
    """Read-model: break allowance versus usage at a given instant."""

    allowed_minutes: int
    early_arrival_minutes: int
    used_minutes: int
    remaining_minutes: int
    is_exceeded: bool
    exceeded_minutes: int


@dataclass(frozen=True)
class WorkProgress:
    """Read-model: how far the open day is from the required work time."""

    office_minutes_so_far: int
    break_minutes_so_far: int
    work_minutes_so_far: int
    remaining_minutes: int
    estimated_punch_out: datetime


@dataclass(frozen=True)
class TrackerSnapshot:
    """Everything an outer surface needs to render the current day."""

    now: datetime
    state: TrackerState
    record: DayRecord
    summary: Optional[DaySummary]
    break_status: BreakStatus
    progress: Optional[WorkProgress]
