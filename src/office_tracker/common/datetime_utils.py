from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional

from ..core.exceptions import InvalidTimeInput


def now_local() -> datetime:
    """Current local time, timezone-aware.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now().astimezone()


def localize(value: datetime) -> datetime:
    """Return an aware datetime in the local zone (naive values are taken as local)."""
    return value.astimezone()


def at_local_time(day: date, hh: int, mm: int) -> datetime:
    """Aware instant for wall-clock hh:mm (seconds zeroed) on a local calendar day."""
    return datetime.combine(day, time(hh, mm)).astimezone()


def parse_hhmm(value: str) -> time:
    """Parse 'HH:MM' (24h) into a time; anything else raises InvalidTimeInput."""
    parts = (value or "").strip().split(":")
    if len(parts) != 2:
        raise InvalidTimeInput(f"Invalid time {value!r}, expected HH:MM")
    try:
        hh, mm = int(parts[0]), int(parts[1])
        return time(hh, mm)
    except ValueError:
        raise InvalidTimeInput(f"Invalid time {value!r}, expected HH:MM") from None


def to_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize an instant as an absolute UTC ISO-8601 timestamp."""
    if value is None:
        return None
    return localize(value).astimezone(timezone.utc).isoformat()


def from_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Inverse of to_timestamp, re-localized to the current zone."""
    if value is None or value == "":
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone()
