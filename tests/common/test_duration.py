from datetime import datetime, timedelta

import pytest

from office_tracker.common.datetime_utils import from_timestamp, parse_hhmm, to_timestamp
from office_tracker.common.duration import day_key, format_clock, format_duration, minutes_between, same_day
from office_tracker.core.exceptions import InvalidTimeInput

BASE = datetime(2026, 2, 2, 9, 0).astimezone()


@pytest.mark.parametrize("seconds, expected", [(0, 0), (59, 0), (60, 1), (119, 1), (3600, 60), (8 * 3600 + 30, 480)])
def test_minutes_between_floors(seconds, expected):
    assert minutes_between(BASE, BASE + timedelta(seconds=seconds)) == expected


def test_minutes_between_reversed_is_zero():
    assert minutes_between(BASE + timedelta(minutes=30), BASE) == 0


def test_minutes_between_missing_endpoint_is_zero():
    assert minutes_between(None, BASE) == 0
    assert minutes_between(BASE, None) == 0


@pytest.mark.parametrize("minutes, text", [(0, "0m"), (5, "5m"), (59, "59m"), (60, "1h 0m"), (75, "1h 15m"), (480, "8h 0m")])
def test_format_duration(minutes, text):
    assert format_duration(minutes) == text


def test_format_duration_clamps_negative():
    assert format_duration(-10) == "0m"


def test_format_clock():
    assert format_clock(None) == "--:--"
    assert format_clock(datetime(2026, 2, 2, 9, 15).astimezone()) == "09:15 AM"
    assert format_clock(datetime(2026, 2, 2, 17, 5).astimezone()) == "05:05 PM"


def test_day_identity_uses_local_calendar_date():
    morning = datetime(2026, 2, 2, 0, 1).astimezone()
    night = datetime(2026, 2, 2, 23, 59).astimezone()
    next_day = datetime(2026, 2, 3, 0, 0).astimezone()

    assert day_key(morning) == "2026-02-02"
    assert same_day(morning, night)
    assert not same_day(night, next_day)


def test_parse_hhmm():
    t = parse_hhmm("07:05")
    assert (t.hour, t.minute) == (7, 5)


@pytest.mark.parametrize("value", ["", "7", "25:00", "12:61", "ab:cd", "12:30:00", None])
def test_parse_hhmm_rejects_garbage(value):
    with pytest.raises(InvalidTimeInput):
        parse_hhmm(value)


def test_timestamps_are_absolute_utc():
    value = datetime(2026, 2, 2, 9, 15).astimezone()
    stamp = to_timestamp(value)

    assert stamp.endswith("+00:00")
    assert from_timestamp(stamp) == value
    assert to_timestamp(None) is None
    assert from_timestamp(None) is None
