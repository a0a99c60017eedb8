"""JSON-ready dict layout of the persisted slots.

Instants are written as absolute UTC timestamps. Decoders raise
MalformedPersistedData for anything they cannot read.
"""

from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import from_timestamp, to_timestamp
from ..core.exceptions import MalformedPersistedData
from .model import BreakSession, DayRecord, DaySummary, HistoryEntry


def _break_to_dict(b: BreakSession) -> dict:
    return {"start": to_timestamp(b.start), "end": to_timestamp(b.end), "minutes": int(b.minutes)}


def _break_from_dict(data: dict) -> BreakSession:
    minutes = int(data.get("minutes") or 0)
    return BreakSession(
        start=from_timestamp(data.get("start")),
        end=from_timestamp(data.get("end")),
        minutes=max(0, minutes),
    )


def _summary_to_dict(s: Optional[DaySummary]) -> Optional[dict]:
    if s is None:
        return None
    return {
        "total_office_minutes": s.total_office_minutes,
        "break_minutes": s.break_minutes,
        "work_minutes": s.work_minutes,
        "required_minutes": s.required_minutes,
    }


def _summary_from_dict(data: Optional[dict]) -> Optional[DaySummary]:
    if data is None:
        return None
    return DaySummary(
        total_office_minutes=int(data["total_office_minutes"]),
        break_minutes=int(data["break_minutes"]),
        work_minutes=int(data["work_minutes"]),
        required_minutes=int(data["required_minutes"]),
    )


def day_record_to_dict(record: DayRecord) -> dict:
    return {
        "punch_in": to_timestamp(record.punch_in),
        "punch_out": to_timestamp(record.punch_out),
        "breaks": [_break_to_dict(b) for b in record.breaks],
        "on_break": bool(record.on_break),
        "break_start": to_timestamp(record.break_start),
    }


def day_record_from_dict(data: Any) -> DayRecord:
    if not isinstance(data, dict):
        raise MalformedPersistedData(f"Day record must be an object, got {type(data).__name__}")
    try:
        record = DayRecord(
            punch_in=from_timestamp(data.get("punch_in")),
            punch_out=from_timestamp(data.get("punch_out")),
            breaks=[_break_from_dict(b) for b in (data.get("breaks") or [])],
            on_break=data.get("on_break") is True,
            break_start=from_timestamp(data.get("break_start")),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise MalformedPersistedData(f"Invalid day record: {e}") from e

    # An open break needs a start and an open day
    if record.on_break and (record.break_start is None or record.punch_out is not None):
        record.on_break = False
        record.break_start = None
    if not record.on_break:
        record.break_start = None
    return record


def history_entry_to_dict(entry: HistoryEntry) -> dict:
    return {
        "date": entry.date,
        "punch_in": to_timestamp(entry.punch_in),
        "punch_out": to_timestamp(entry.punch_out),
        "breaks": [_break_to_dict(b) for b in entry.breaks],
        "summary": _summary_to_dict(entry.summary),
    }


def history_entry_from_dict(data: Any) -> HistoryEntry:
    if not isinstance(data, dict):
        raise MalformedPersistedData(f"History entry must be an object, got {type(data).__name__}")
    try:
        return HistoryEntry(
            date=str(data["date"]),
            punch_in=from_timestamp(data.get("punch_in")),
            punch_out=from_timestamp(data.get("punch_out")),
            breaks=tuple(_break_from_dict(b) for b in (data.get("breaks") or [])),
            summary=_summary_from_dict(data.get("summary")),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise MalformedPersistedData(f"Invalid history entry: {e}") from e
