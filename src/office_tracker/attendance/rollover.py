from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from ..common.duration import day_key
from ..core.logger import get_logger
from .calculator import SummaryCalculator
from .model import DayRecord, HistoryEntry
from .store import TrackerStore

logger = get_logger(__name__)


class RolloverArchiver:
    """Moves a stale day into history once the calendar day changes.

    Idempotent: after a rollover the record is empty and the marker matches
    today, so an immediate second run does nothing. The live record is only
    reset once the archive is written, so a failed write is retried intact.
    """

    def __init__(self, store: TrackerStore, calculator: SummaryCalculator):
        self._store = store
        self._calculator = calculator

    def run(self, record: DayRecord, now: datetime) -> Optional[HistoryEntry]:
        today = day_key(now)
        stored_day = self._store.load_day_marker()

        if stored_day is None:
            self._store.save_day_marker(today)
            return None
        if stored_day == today:
            return None

        entry: Optional[HistoryEntry] = None
        updates: dict = {"record": None, "day_marker": today}
        if not record.is_empty():
            entry = HistoryEntry(
                date=stored_day,
                punch_in=record.punch_in,
                punch_out=record.punch_out,
                breaks=tuple(record.breaks),
                summary=self._calculator.compute(record.punch_in, record.punch_out, record.breaks),
            )
            updates["history"] = self._store.load_history() + [entry]

        self._store.commit(**updates)
        record.reset()

        if entry:
            logger.info(f"Archived {stored_day} into history, new day {today}")
        else:
            logger.info(f"Day changed {stored_day} -> {today}, nothing to archive")
        return entry


class RolloverScheduler:
    """Runs the rollover check on an APScheduler interval job.

    The interval only bounds how late a midnight crossing is noticed when
    nobody interacts with the tracker.
    """

    JOB_ID = "rollover-check"

    def __init__(self, check: Callable[[], object], *, interval_seconds: float = 60):
        self._check = check
        self._interval = float(interval_seconds)
        self._scheduler: Optional[BackgroundScheduler] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def next_run_time(self) -> Optional[datetime]:
        scheduler = self._scheduler
        if scheduler is None or not scheduler.running:
            return None
        job = scheduler.get_job(self.JOB_ID)
        return job.next_run_time if job else None

    def start(self) -> bool:
        """Start the interval job; False when it was already running."""
        with self._lock:
            if self.running:
                return False
            # Missed runs collapse into one; a check never overlaps itself
            scheduler = BackgroundScheduler(job_defaults={"coalesce": True, "max_instances": 1})
            scheduler.add_job(self.tick, "interval", seconds=self._interval, id=self.JOB_ID)
            scheduler.start()
            self._scheduler = scheduler
            logger.debug(f"Rollover check every {self._interval:g}s")
            return True

    def stop(self, wait: bool = True) -> None:
        with self._lock:
            if self._scheduler is None:
                return
            if self._scheduler.running:
                self._scheduler.shutdown(wait=wait)
            self._scheduler = None

    def tick(self) -> None:
        """One check; errors are logged and the job stays scheduled."""
        try:
            self._check()
        except Exception:
            logger.exception("Rollover check failed")
