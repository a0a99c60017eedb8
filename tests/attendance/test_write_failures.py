from __future__ import annotations

from datetime import datetime

import pytest

from office_tracker.attendance.rollover import RolloverScheduler
from office_tracker.attendance.store import TrackerStore
from office_tracker.core.enums import EditField, TrackerState
from office_tracker.storage.memory import InMemoryKeyValueStore


def _at(hh, mm, day=2):
    return datetime(2026, 2, day, hh, mm).astimezone()


def yes(message: str) -> bool:
    return True


class FlakyKeyValueStore(InMemoryKeyValueStore):
    """Memory slots whose next write can be made to fail."""

    def __init__(self):
        super().__init__()
        self.fail_next = False

    def write(self, updates):
        if self.fail_next:
            self.fail_next = False
            raise OSError("disk full")
        super().write(updates)


@pytest.fixture
def kv():
    return FlakyKeyValueStore()


def test_failed_punch_in_leaves_service_unchanged(service, store, kv):
    kv.fail_next = True

    with pytest.raises(OSError):
        service.punch_in()

    assert service.state() == TrackerState.NOT_STARTED
    assert store.load_day().punch_in is None


def test_failed_write_is_not_carried_into_the_next_one(service, store, kv, clock):
    service.punch_in()
    clock.set(_at(11, 0))
    kv.fail_next = True
    with pytest.raises(OSError):
        service.break_in()

    clock.set(_at(11, 5))
    service.edit_time(EditField.PUNCH_IN, "09:00")

    stored = store.load_day()
    assert stored.on_break is False
    assert stored.break_start is None
    assert service.record() == stored


@pytest.mark.parametrize(
    "action",
    [
        lambda s: s.punch_out(),
        lambda s: s.break_in(),
        lambda s: s.delete_break(0, confirm=yes),
        lambda s: s.clear_today(confirm=yes),
        lambda s: s.clear_all(confirm=yes),
    ],
    ids=["punch_out", "break_in", "delete_break", "clear_today", "clear_all"],
)
def test_every_operation_keeps_memory_and_store_in_step(service, store, kv, clock, action):
    service.punch_in()
    clock.set(_at(10, 0))
    service.break_in()
    clock.set(_at(10, 20))
    service.break_out()
    before = service.record()

    clock.set(_at(12, 0))
    kv.fail_next = True
    with pytest.raises(OSError):
        action(service)

    assert service.record() == before
    assert store.load_day() == before


def test_failed_rollover_keeps_the_day_for_the_next_check(service, store, kv, clock):
    service.punch_in()
    clock.set(_at(17, 15))
    service.punch_out()

    clock.set(_at(8, 0, day=3))
    kv.fail_next = True
    with pytest.raises(OSError):
        service.check_rollover()

    assert service.state() == TrackerState.COMPLETED
    assert store.load_day_marker() == "2026-02-02"

    entry = service.check_rollover()
    assert entry.date == "2026-02-02"
    assert [h.date for h in service.history()] == ["2026-02-02"]
    assert service.state() == TrackerState.NOT_STARTED


def test_failed_rollover_from_scheduler_is_retried(make_service, kv, clock):
    service = make_service()
    service.punch_in()
    clock.set(_at(9, 0, day=3))
    scheduler = RolloverScheduler(service.check_rollover)

    kv.fail_next = True
    scheduler.tick()
    scheduler.tick()

    assert [h.date for h in TrackerStore(kv).load_history()] == ["2026-02-02"]
