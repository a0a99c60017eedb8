from datetime import datetime, time

from office_tracker.attendance.policy import BreakAllowancePolicy


def _at(hh, mm, ss=0):
    return datetime(2026, 2, 2, hh, mm, ss).astimezone()


def test_early_arrival_adds_to_base_break():
    policy = BreakAllowancePolicy()

    assert policy.early_arrival_minutes(_at(9, 15)) == 15
    assert policy.total_allowed(_at(9, 15)) == 75


def test_on_time_or_late_arrival_gets_base_only():
    policy = BreakAllowancePolicy()

    assert policy.total_allowed(_at(9, 30)) == 60
    assert policy.total_allowed(_at(10, 45)) == 60


def test_early_arrival_floors_partial_minutes():
    policy = BreakAllowancePolicy()

    # 09:14:30 -> 15.5 minutes early -> 15
    assert policy.early_arrival_minutes(_at(9, 14, 30)) == 15


def test_no_punch_in_means_base_allowance():
    assert BreakAllowancePolicy().total_allowed(None) == 60


def test_configured_office_start_and_base():
    policy = BreakAllowancePolicy(office_start=time(8, 0), base_break_minutes=30)

    assert policy.total_allowed(_at(7, 0)) == 90
    assert policy.office_start_for(_at(7, 0)) == _at(8, 0)
