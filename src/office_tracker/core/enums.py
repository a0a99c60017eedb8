from __future__ import annotations

from enum import Enum


class TrackerState(str, Enum):
    """Where the current day stands in the punch/break cycle."""

    NOT_STARTED = "NOT_STARTED"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    COMPLETED = "COMPLETED"


class EditField(str, Enum):
    """Time fields that can be corrected after the fact."""

    PUNCH_IN = "punch_in"
    PUNCH_OUT = "punch_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
