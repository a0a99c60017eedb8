"""Read-models shaped for the JSON API and the CLI."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from ..common.datetime_utils import localize
from ..common.duration import format_clock, format_duration
from ..core.enums import TrackerState
from .model import BreakSession, DaySummary, HistoryEntry, TrackerSnapshot

STATE_LABELS = {
    TrackerState.NOT_STARTED: "Not Started",
    TrackerState.WORKING: "Working",
    TrackerState.ON_BREAK: "On Break",
    TrackerState.COMPLETED: "Day Complete",
}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return localize(value).isoformat() if value else None


def break_to_dict(b: BreakSession) -> dict:
    return {
        "start": _iso(b.start),
        "end": _iso(b.end),
        "minutes": b.minutes,
        "duration": format_duration(b.minutes),
    }


def summary_to_dict(s: Optional[DaySummary]) -> Optional[dict]:
    if s is None:
        return None
    return {
        "total_office_minutes": s.total_office_minutes,
        "break_minutes": s.break_minutes,
        "work_minutes": s.work_minutes,
        "required_minutes": s.required_minutes,
        "is_compliant": s.is_compliant,
        "shortfall_minutes": s.shortfall_minutes,
        "overtime_minutes": s.overtime_minutes,
    }


def snapshot_to_dict(snap: TrackerSnapshot) -> dict:
    r = snap.record
    b = snap.break_status
    p = snap.progress
    return {
        "now": _iso(snap.now),
        "state": snap.state.value,
        "state_label": STATE_LABELS[snap.state],
        "record": {
            "punch_in": _iso(r.punch_in),
            "punch_out": _iso(r.punch_out),
            "breaks": [break_to_dict(x) for x in r.breaks],
            "on_break": r.on_break,
            "break_start": _iso(r.break_start),
        },
        "summary": summary_to_dict(snap.summary),
        "break_status": {
            "allowed_minutes": b.allowed_minutes,
            "early_arrival_minutes": b.early_arrival_minutes,
            "used_minutes": b.used_minutes,
            "remaining_minutes": b.remaining_minutes,
            "is_exceeded": b.is_exceeded,
            "exceeded_minutes": b.exceeded_minutes,
        },
        "progress": None
        if p is None
        else {
            "office_minutes_so_far": p.office_minutes_so_far,
            "break_minutes_so_far": p.break_minutes_so_far,
            "work_minutes_so_far": p.work_minutes_so_far,
            "remaining_minutes": p.remaining_minutes,
            "estimated_punch_out": _iso(p.estimated_punch_out),
        },
    }


def history_to_list(entries: Iterable[HistoryEntry]) -> List[dict]:
    return [
        {
            "date": h.date,
            "punch_in": _iso(h.punch_in),
            "punch_out": _iso(h.punch_out),
            "breaks": [break_to_dict(x) for x in h.breaks],
            "summary": summary_to_dict(h.summary),
        }
        for h in entries
    ]


def status_lines(snap: TrackerSnapshot) -> List[str]:
    r = snap.record
    b = snap.break_status
    lines = [
        f"Status:     {STATE_LABELS[snap.state]}",
        f"Punch in:   {format_clock(r.punch_in)}",
        f"Punch out:  {format_clock(r.punch_out)}",
        f"Break:      {format_duration(b.used_minutes)} used / {format_duration(b.allowed_minutes)} allowed"
        f" ({format_duration(b.remaining_minutes)} left)",
    ]
    if b.early_arrival_minutes:
        lines.append(f"Early bonus: +{format_duration(b.early_arrival_minutes)}")
    if b.is_exceeded:
        lines.append(f"Break exceeded by {format_duration(b.exceeded_minutes)}")
    for i, x in enumerate(r.breaks):
        lines.append(f"  #{i} {format_clock(x.start)} - {format_clock(x.end)}  {format_duration(x.minutes)}")
    if r.on_break:
        lines.append(f"  on break since {format_clock(r.break_start)}")
    if snap.progress:
        p = snap.progress
        lines.append(
            f"Worked:     {format_duration(p.work_minutes_so_far)}, "
            f"{format_duration(p.remaining_minutes)} to go (est. out {format_clock(p.estimated_punch_out)})"
        )
    if snap.summary:
        s = snap.summary
        verdict = "target met" if s.is_compliant else f"short by {format_duration(s.shortfall_minutes)}"
        lines.append(
            f"Summary:    office {format_duration(s.total_office_minutes)}, "
            f"breaks {format_duration(s.break_minutes)}, work {format_duration(s.work_minutes)} ({verdict})"
        )
    return lines


def history_lines(entries: Iterable[HistoryEntry]) -> List[str]:
    lines = []
    for h in entries:
        if h.summary:
            mark = "OK " if h.summary.is_compliant else "LOW"
            work = format_duration(h.summary.work_minutes)
        else:
            mark, work = "---", "incomplete"
        lines.append(f"{h.date}  {mark}  {format_clock(h.punch_in)} - {format_clock(h.punch_out)}  {work}")
    return lines
