from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import at_local_time, localize, parse_hhmm
from ..common.duration import day_key, format_duration, minutes_between
from ..core.enums import EditField, TrackerState
from ..core.exceptions import (
    BreakExhausted,
    BreakNotConfirmed,
    DomainError,
    InvalidTransition,
    OperationCancelled,
    ValidationError,
)
from ..core.logger import get_logger
from .calculator import StandardSummaryCalculator, SummaryCalculator
from .model import BreakSession, BreakStatus, DayRecord, DaySummary, HistoryEntry, TrackerSnapshot, WorkProgress
from .policy import BreakAllowancePolicy
from .rollover import RolloverArchiver
from .store import TrackerStore

logger = get_logger(__name__)

Confirmer = Callable[[str], bool]
Notifier = Callable[[str], None]


def reject_all(message: str) -> bool:
    """Default confirmation collaborator for non-interactive use."""
    return False


def silent(message: str) -> None:
    return None


class AttendanceService:
    """Punch/break state machine for the single live DayRecord.

    Every mutating operation runs the rollover check first, applies its
    change to a copy of the record, writes the copy through the store and
    only then makes it the live record. A failed write leaves the service
    exactly as it was.
    Entry points are serialized with a lock so the rollover scheduler thread
    never interleaves with a user action.
    """

    def __init__(
        self,
        store: TrackerStore,
        *,
        policy: BreakAllowancePolicy | None = None,
        calculator: SummaryCalculator | None = None,
        archiver: RolloverArchiver | None = None,
        clock: Clock | None = None,
        confirm: Confirmer | None = None,
        notify: Notifier | None = None,
    ):
        self._store = store
        self._policy = policy or BreakAllowancePolicy()
        self._calculator = calculator or StandardSummaryCalculator()
        self._archiver = archiver or RolloverArchiver(store, self._calculator)
        self._clock = clock or SystemClock()
        self._confirm = confirm or reject_all
        self._notify = notify or silent
        self._lock = threading.RLock()

        self._record = store.load_day()
        self.check_rollover()

    # ------------------------------------------------------------------
    # Rollover
    # ------------------------------------------------------------------
    def check_rollover(self) -> Optional[HistoryEntry]:
        with self._lock:
            return self._archiver.run(self._record, self._clock.now())

    # ------------------------------------------------------------------
    # Punch / break transitions
    # ------------------------------------------------------------------
    def punch_in(self) -> TrackerSnapshot:
        with self._lock:
            now = self._begin()
            state = self._record.state
            if state == TrackerState.WORKING:
                self._reject(InvalidTransition("Already punched in"))
            if state == TrackerState.ON_BREAK:
                self._reject(InvalidTransition("Currently on a break"))

            record = DayRecord(punch_in=now)
            self._commit(record, now)
            logger.info(f"Punched in at {now:%H:%M}")
            return self._snapshot(now)

    def punch_out(self) -> TrackerSnapshot:
        with self._lock:
            now = self._begin()
            state = self._record.state
            if state == TrackerState.NOT_STARTED:
                self._reject(InvalidTransition("Punch in first"))
            if state == TrackerState.ON_BREAK:
                self._reject(InvalidTransition("End break before punching out"))
            if state == TrackerState.COMPLETED:
                self._reject(InvalidTransition("Already punched out for the day"))

            record = self._record.copy()
            record.punch_out = now
            self._commit(record, now)
            logger.info(f"Punched out at {now:%H:%M}")
            return self._snapshot(now)

    def break_in(self) -> TrackerSnapshot:
        with self._lock:
            now = self._begin()
            state = self._record.state
            if state == TrackerState.NOT_STARTED:
                self._reject(InvalidTransition("Punch in first"))
            if state == TrackerState.COMPLETED:
                self._reject(InvalidTransition("Already punched out for the day"))
            if state == TrackerState.ON_BREAK:
                self._reject(InvalidTransition("Already on break"))

            status = self._break_status(now)
            if status.used_minutes >= status.allowed_minutes:
                self._reject(
                    BreakExhausted(
                        f"No break remaining. Total allowed: {format_duration(status.allowed_minutes)}",
                        allowed_minutes=status.allowed_minutes,
                        used_minutes=status.used_minutes,
                    )
                )

            record = self._record.copy()
            record.on_break = True
            record.break_start = now
            self._commit(record, now)
            logger.info(f"Break started at {now:%H:%M}")
            return self._snapshot(now)

    def break_out(self, confirm: Confirmer | None = None) -> TrackerSnapshot:
        """End the open break.

        A break that pushes the day over its allowance is still recorded once
        confirmed; the extra minutes come out of work time.
        """
        with self._lock:
            now = self._begin()
            if self._record.state != TrackerState.ON_BREAK:
                self._reject(InvalidTransition("Not currently on a break"))

            start = self._record.break_start
            minutes = minutes_between(start, now)
            allowed = self._policy.total_allowed(self._record.punch_in)
            total_after = self._record.committed_break_minutes + minutes
            if total_after > allowed:
                exceeded_by = total_after - allowed
                message = (
                    f"Break limit exceeded by {format_duration(exceeded_by)}!\n"
                    f"This break: {format_duration(minutes)}\n"
                    f"Total used: {format_duration(total_after)}\n"
                    f"Allowed: {format_duration(allowed)}\n"
                    f"The extra {format_duration(exceeded_by)} will be deducted from your work hours.\n"
                    "Submit this break anyway?"
                )
                if not (confirm or self._confirm)(message):
                    raise BreakNotConfirmed(
                        f"Over-limit break not submitted, still on break (exceeded by {format_duration(exceeded_by)})",
                        exceeded_minutes=exceeded_by,
                    )
                logger.info(f"Over-limit break confirmed, exceeded by {exceeded_by}m")

            record = self._record.copy()
            record.breaks.append(BreakSession(start=start, end=now, minutes=minutes))
            record.on_break = False
            record.break_start = None
            self._commit(record, now)
            logger.info(f"Break ended at {now:%H:%M} ({minutes}m)")
            return self._snapshot(now)

    # ------------------------------------------------------------------
    # Corrections
    # ------------------------------------------------------------------
    def edit_time(self, field: EditField | str, value: str, *, index: Optional[int] = None) -> TrackerSnapshot:
        """Set hh:mm on a punch or break endpoint, keeping its calendar day.

        Edits reflect ground truth and bypass the break allowance.
        """
        with self._lock:
            now = self._begin()
            try:
                field = EditField(field)
            except ValueError:
                self._reject(ValidationError(f"Unknown field {field!r}"))
            new_time = parse_hhmm(value)

            def on_same_day(current: Optional[datetime]) -> datetime:
                base = localize(current) if current else now
                return at_local_time(base.date(), new_time.hour, new_time.minute)

            record = self._record.copy()
            if field == EditField.PUNCH_IN:
                record.punch_in = on_same_day(record.punch_in)
            elif field == EditField.PUNCH_OUT:
                if record.punch_in is None:
                    self._reject(InvalidTransition("Punch in first"))
                if record.on_break:
                    self._reject(InvalidTransition("End break before setting punch out"))
                record.punch_out = on_same_day(record.punch_out)
            else:
                idx = self._check_index(index)
                session = record.breaks[idx]
                if field == EditField.BREAK_START:
                    session = BreakSession.between(on_same_day(session.start), session.end)
                else:
                    session = BreakSession.between(session.start, on_same_day(session.end))
                record.breaks[idx] = session

            self._commit(record, now)
            logger.info(f"Edited {field.value} to {new_time:%H:%M}")
            return self._snapshot(now)

    def delete_break(self, index: int, confirm: Confirmer | None = None) -> TrackerSnapshot:
        with self._lock:
            now = self._begin()
            index = self._check_index(index)
            if not (confirm or self._confirm)("Delete this break session?"):
                raise OperationCancelled("Break not deleted")

            record = self._record.copy()
            del record.breaks[index]
            self._commit(record, now)
            logger.info(f"Deleted break #{index}")
            return self._snapshot(now)

    def clear_today(self, confirm: Confirmer | None = None) -> TrackerSnapshot:
        with self._lock:
            now = self._begin()
            if not (confirm or self._confirm)("Clear today data? This will not remove history."):
                raise OperationCancelled("Today's data kept")

            self._store.commit(record=None, day_marker=day_key(now))
            self._record = DayRecord()
            logger.info("Cleared today's record")
            return self._snapshot(now)

    def clear_all(self, confirm: Confirmer | None = None) -> TrackerSnapshot:
        with self._lock:
            now = self._begin()
            if not (confirm or self._confirm)("Clear ALL data and history?"):
                raise OperationCancelled("Data kept")

            self._store.clear()
            self._record = DayRecord()
            logger.info("Cleared record, history and day marker")
            return self._snapshot(now)

    # ------------------------------------------------------------------
    # Read-only queries (pure functions of the record and now)
    # ------------------------------------------------------------------
    def state(self) -> TrackerState:
        with self._lock:
            return self._record.state

    def record(self) -> DayRecord:
        with self._lock:
            return self._record.copy()

    def summary(self) -> Optional[DaySummary]:
        with self._lock:
            return self._summary()

    def break_status(self) -> BreakStatus:
        with self._lock:
            return self._break_status(self._clock.now())

    def work_progress(self) -> Optional[WorkProgress]:
        with self._lock:
            return self._work_progress(self._clock.now())

    def history(self) -> List[HistoryEntry]:
        with self._lock:
            return self._store.load_history()

    def snapshot(self) -> TrackerSnapshot:
        with self._lock:
            return self._snapshot(self._clock.now())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _begin(self) -> datetime:
        now = self._clock.now()
        self._archiver.run(self._record, now)
        return now

    def _commit(self, record: DayRecord, now: datetime) -> None:
        # The live record changes only after the write succeeds
        self._store.save_day(record, day_marker=day_key(now))
        self._record = record

    def _reject(self, error: DomainError) -> None:
        logger.info(f"Rejected: {error}")
        self._notify(str(error))
        raise error

    def _check_index(self, index: Optional[int]) -> int:
        if index is None or not 0 <= int(index) < len(self._record.breaks):
            self._reject(ValidationError(f"Break session {index!r} not found"))
        return int(index)

    def _summary(self) -> Optional[DaySummary]:
        r = self._record
        return self._calculator.compute(r.punch_in, r.punch_out, r.breaks)

    def _break_used(self, now: datetime) -> int:
        used = self._record.committed_break_minutes
        if self._record.on_break and self._record.break_start:
            used += minutes_between(self._record.break_start, now)
        return used

    def _break_status(self, now: datetime) -> BreakStatus:
        punch_in = self._record.punch_in
        allowed = self._policy.total_allowed(punch_in)
        used = self._break_used(now)
        return BreakStatus(
            allowed_minutes=allowed,
            early_arrival_minutes=self._policy.early_arrival_minutes(punch_in),
            used_minutes=used,
            remaining_minutes=max(0, allowed - used),
            is_exceeded=used > allowed,
            exceeded_minutes=max(0, used - allowed),
        )

    def _work_progress(self, now: datetime) -> Optional[WorkProgress]:
        if self._record.state not in (TrackerState.WORKING, TrackerState.ON_BREAK):
            return None
        office = minutes_between(self._record.punch_in, now)
        breaks = self._break_used(now)
        work = max(0, office - breaks)
        remaining = max(0, self._calculator.required_minutes - work)
        return WorkProgress(
            office_minutes_so_far=office,
            break_minutes_so_far=breaks,
            work_minutes_so_far=work,
            remaining_minutes=remaining,
            estimated_punch_out=now + timedelta(minutes=remaining),
        )

    def _snapshot(self, now: datetime) -> TrackerSnapshot:
        return TrackerSnapshot(
            now=now,
            state=self._record.state,
            record=self._record.copy(),
            summary=self._summary(),
            break_status=self._break_status(now),
            progress=self._work_progress(now),
        )
