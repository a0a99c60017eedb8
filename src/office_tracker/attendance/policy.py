from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..common.datetime_utils import at_local_time, localize
from ..common.duration import minutes_between
from ..core.constants import DEFAULT_BASE_BREAK_MINUTES, DEFAULT_OFFICE_START


@dataclass(frozen=True)
class BreakAllowancePolicy:
    """Base break allowance plus one minute per minute of arrival before office start.

    Stateless: always evaluated from the punch-in it is given, never cached.
    """

    office_start: time = DEFAULT_OFFICE_START
    base_break_minutes: int = DEFAULT_BASE_BREAK_MINUTES

    def office_start_for(self, punch_in: datetime) -> datetime:
        local = localize(punch_in)
        return at_local_time(local.date(), self.office_start.hour, self.office_start.minute)

    def early_arrival_minutes(self, punch_in: Optional[datetime]) -> int:
        if punch_in is None:
            return 0
        office_start = self.office_start_for(punch_in)
        if punch_in >= office_start:
            return 0
        return minutes_between(punch_in, office_start)

    def total_allowed(self, punch_in: Optional[datetime]) -> int:
        return self.base_break_minutes + self.early_arrival_minutes(punch_in)
