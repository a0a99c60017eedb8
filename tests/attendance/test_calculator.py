from datetime import datetime

from office_tracker.attendance.calculator import StandardSummaryCalculator
from office_tracker.attendance.model import BreakSession


def _at(hh, mm):
    return datetime(2026, 2, 2, hh, mm).astimezone()


def test_summary_subtracts_breaks():
    calc = StandardSummaryCalculator(required_minutes=420)
    summary = calc.compute(_at(9, 15), _at(17, 15), [BreakSession.between(_at(11, 0), _at(11, 40))])

    assert summary.total_office_minutes == 480
    assert summary.break_minutes == 40
    assert summary.work_minutes == 440
    assert summary.required_minutes == 420
    assert summary.is_compliant
    assert summary.overtime_minutes == 20
    assert summary.shortfall_minutes == 0


def test_summary_is_none_without_both_punches():
    calc = StandardSummaryCalculator()

    assert calc.compute(_at(9, 0), None, []) is None
    assert calc.compute(None, _at(17, 0), []) is None


def test_summary_work_time_never_negative():
    calc = StandardSummaryCalculator(required_minutes=420)
    summary = calc.compute(_at(9, 0), _at(9, 30), [BreakSession(start=None, end=None, minutes=90)])

    assert summary.work_minutes == 0
    assert not summary.is_compliant
    assert summary.shortfall_minutes == 420
