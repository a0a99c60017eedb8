from __future__ import annotations

from datetime import datetime

import pytest

from office_tracker.attendance.calculator import StandardSummaryCalculator
from office_tracker.attendance.policy import BreakAllowancePolicy
from office_tracker.attendance.service import AttendanceService
from office_tracker.attendance.store import TrackerStore
from office_tracker.common.clock import FixedClock
from office_tracker.storage.memory import InMemoryKeyValueStore


@pytest.fixture
def clock():
    # Monday, 09:15 local time
    return FixedClock(datetime(2026, 2, 2, 9, 15))


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv):
    return TrackerStore(kv)


@pytest.fixture
def make_service(store, clock):
    def _make(**kwargs):
        return AttendanceService(
            store,
            policy=BreakAllowancePolicy(),
            calculator=StandardSummaryCalculator(required_minutes=420),
            clock=clock,
            **kwargs,
        )

    return _make


@pytest.fixture
def service(make_service):
    return make_service()
