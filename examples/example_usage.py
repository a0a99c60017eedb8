"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the punch/break rules live in AttendanceService.
"""

from datetime import datetime

from office_tracker.attendance.presenter import status_lines
from office_tracker.common.clock import FixedClock
from office_tracker.container import build_container
from office_tracker.core.settings import TrackerSettings


def main():
    clock = FixedClock(datetime(2026, 2, 2, 9, 15))
    container = build_container(TrackerSettings(storage_backend="memory"), clock=clock)
    svc = container.attendance_service

    svc.punch_in()
    clock.advance(minutes=105)
    svc.break_in()
    clock.advance(minutes=40)
    svc.break_out()
    clock.set(datetime(2026, 2, 2, 17, 15))
    snapshot = svc.punch_out()

    print("\n".join(status_lines(snapshot)))


if __name__ == "__main__":
    main()
