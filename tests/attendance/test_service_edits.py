from __future__ import annotations

from datetime import datetime

import pytest

from office_tracker.attendance.model import BreakSession, HistoryEntry
from office_tracker.attendance.service import AttendanceService
from office_tracker.core.enums import EditField, TrackerState
from office_tracker.core.exceptions import InvalidTimeInput, InvalidTransition, OperationCancelled, ValidationError


def _at(hh, mm, day=2):
    return datetime(2026, 2, day, hh, mm).astimezone()


def yes(message: str) -> bool:
    return True


def no(message: str) -> bool:
    return False


@pytest.fixture
def finished_day(service, clock):
    clock.set(_at(9, 30))
    service.punch_in()
    clock.set(_at(11, 0))
    service.break_in()
    clock.set(_at(11, 30))
    service.break_out()
    clock.set(_at(17, 30))
    service.punch_out()
    return service


def test_edit_punch_in_recomputes_summary_and_allowance(finished_day):
    snap = finished_day.edit_time(EditField.PUNCH_IN, "08:30")

    assert snap.record.punch_in == _at(8, 30)
    assert snap.summary.total_office_minutes == 540
    assert snap.summary.work_minutes == 510
    # allowance follows the corrected punch-in
    assert snap.break_status.allowed_minutes == 120


def test_edit_punch_out_recomputes_summary(finished_day):
    snap = finished_day.edit_time("punch_out", "16:00")

    assert snap.record.punch_out == _at(16, 0)
    assert snap.summary.work_minutes == 360
    assert not snap.summary.is_compliant


def test_edit_zeroes_seconds_and_keeps_calendar_day(service, clock):
    clock.set(datetime(2026, 2, 2, 9, 41, 27).astimezone())
    service.punch_in()

    snap = service.edit_time(EditField.PUNCH_IN, "09:05")
    assert snap.record.punch_in == _at(9, 5)
    assert snap.record.punch_in.second == 0


def test_edit_unset_punch_in_uses_today(service, clock):
    snap = service.edit_time(EditField.PUNCH_IN, "08:00")

    assert snap.record.punch_in == _at(8, 0)
    assert snap.state == TrackerState.WORKING


def test_edit_break_start_after_end_gives_zero_minutes(finished_day):
    snap = finished_day.edit_time(EditField.BREAK_START, "12:00", index=0)

    session = snap.record.breaks[0]
    assert session.start == _at(12, 0)
    assert session.end == _at(11, 30)
    assert session.minutes == 0
    assert snap.summary.break_minutes == 0


def test_edit_break_end_can_exceed_allowance(finished_day):
    snap = finished_day.edit_time(EditField.BREAK_END, "13:00", index=0)

    assert snap.record.breaks[0].minutes == 120
    assert snap.break_status.is_exceeded
    assert snap.break_status.exceeded_minutes == 60
    assert snap.summary.work_minutes == 360


def test_edit_break_with_one_endpoint_has_zero_minutes(service, store, clock):
    service.punch_in()
    record = service.record()
    record.breaks.append(BreakSession(start=_at(10, 0), end=None, minutes=0))
    store.save_day(record)

    reloaded = AttendanceService(store, clock=clock)
    snap = reloaded.edit_time(EditField.BREAK_START, "10:30", index=0)
    assert snap.record.breaks[0].start == _at(10, 30)
    assert snap.record.breaks[0].minutes == 0


def test_unparsable_edit_keeps_previous_value(finished_day):
    before = finished_day.record()

    with pytest.raises(InvalidTimeInput):
        finished_day.edit_time(EditField.PUNCH_IN, "nine")

    assert finished_day.record() == before


def test_edit_unknown_break_index(finished_day):
    with pytest.raises(ValidationError):
        finished_day.edit_time(EditField.BREAK_END, "12:00", index=3)
    with pytest.raises(ValidationError):
        finished_day.edit_time(EditField.BREAK_END, "12:00")


def test_edit_punch_out_needs_punch_in_and_no_open_break(service):
    with pytest.raises(InvalidTransition):
        service.edit_time(EditField.PUNCH_OUT, "17:00")

    service.punch_in()
    service.break_in()
    with pytest.raises(InvalidTransition):
        service.edit_time(EditField.PUNCH_OUT, "17:00")


def test_delete_break_requires_confirmation(finished_day):
    with pytest.raises(OperationCancelled):
        finished_day.delete_break(0, confirm=no)
    assert len(finished_day.record().breaks) == 1

    snap = finished_day.delete_break(0, confirm=yes)
    assert snap.record.breaks == []
    assert snap.summary.work_minutes == 480


def test_clear_today_keeps_history(finished_day, store):
    entry = HistoryEntry(date="2026-02-01", punch_in=None, punch_out=None, breaks=(), summary=None)
    store.commit(history=[entry])

    with pytest.raises(OperationCancelled):
        finished_day.clear_today(confirm=no)
    assert finished_day.state() == TrackerState.COMPLETED

    snap = finished_day.clear_today(confirm=yes)
    assert snap.state == TrackerState.NOT_STARTED
    assert store.load_day().is_empty()
    assert finished_day.history() == [entry]


def test_clear_all_wipes_everything(finished_day, store):
    store.commit(history=[HistoryEntry(date="2026-02-01", punch_in=None, punch_out=None, breaks=(), summary=None)])

    finished_day.clear_all(confirm=yes)

    assert finished_day.state() == TrackerState.NOT_STARTED
    assert finished_day.history() == []
    assert store.load_day_marker() is None
