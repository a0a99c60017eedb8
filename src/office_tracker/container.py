from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.calculator import StandardSummaryCalculator, SummaryCalculator
from .attendance.policy import BreakAllowancePolicy
from .attendance.repository import KeyValueStore
from .attendance.rollover import RolloverArchiver, RolloverScheduler
from .attendance.service import AttendanceService, Confirmer, Notifier
from .attendance.store import TrackerStore
from .common.clock import Clock, SystemClock
from .core.settings import TrackerSettings
from .storage.factory import build_key_value_store


@dataclass(frozen=True)
class Container:
    settings: TrackerSettings
    clock: Clock

    kv: KeyValueStore
    store: TrackerStore

    policy: BreakAllowancePolicy
    calculator: SummaryCalculator
    archiver: RolloverArchiver
    attendance_service: AttendanceService
    scheduler: RolloverScheduler


def build_container(
    settings: TrackerSettings,
    *,
    clock: Optional[Clock] = None,
    kv: Optional[KeyValueStore] = None,
    confirm: Optional[Confirmer] = None,
    notify: Optional[Notifier] = None,
) -> Container:
    clock = clock or SystemClock()
    kv = kv if kv is not None else build_key_value_store(settings)
    store = TrackerStore(kv)

    policy = BreakAllowancePolicy(
        office_start=settings.office_start,
        base_break_minutes=settings.base_break_minutes,
    )
    calculator = StandardSummaryCalculator(required_minutes=settings.required_minutes)
    archiver = RolloverArchiver(store, calculator)
    attendance_service = AttendanceService(
        store,
        policy=policy,
        calculator=calculator,
        archiver=archiver,
        clock=clock,
        confirm=confirm,
        notify=notify,
    )
    scheduler = RolloverScheduler(
        attendance_service.check_rollover,
        interval_seconds=settings.rollover_check_seconds,
    )

    return Container(
        settings=settings,
        clock=clock,
        kv=kv,
        store=store,
        policy=policy,
        calculator=calculator,
        archiver=archiver,
        attendance_service=attendance_service,
        scheduler=scheduler,
    )
