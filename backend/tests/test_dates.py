"""Tests for the UTC calendar helpers."""

from datetime import date, datetime, timedelta, timezone

from practice_tracker.core.dates import as_utc, to_unix_timestamp, utc_calendar_date, utc_day_window
from conftest import FIXED_NOW


def test_utc_day_window_bounds():
    start, end = utc_day_window(datetime(2026, 3, 10, 23, 59, 59, tzinfo=timezone.utc))
    assert start == datetime(2026, 3, 10, tzinfo=timezone.utc)
    assert end == datetime(2026, 3, 11, tzinfo=timezone.utc)


def test_utc_day_window_converts_offsets():
    """01:00 at UTC+3 is 22:00 UTC on the previous day."""
    local = datetime(2026, 3, 11, 1, 0, tzinfo=timezone(timedelta(hours=3)))
    start, _ = utc_day_window(local)
    assert start == datetime(2026, 3, 10, tzinfo=timezone.utc)


def test_midnight_starts_a_new_day():
    assert utc_calendar_date(datetime(2026, 3, 11, tzinfo=timezone.utc)) == date(2026, 3, 11)
    assert utc_calendar_date(datetime(2026, 3, 10, 23, 59, 59, tzinfo=timezone.utc)) == date(2026, 3, 10)


def test_as_utc_treats_naive_as_utc():
    assert as_utc(datetime(2026, 3, 10, 12, 0)) == FIXED_NOW


def test_to_unix_timestamp():
    assert to_unix_timestamp(None) is None
    assert to_unix_timestamp(datetime(1970, 1, 1, 0, 1, 5)) == 65
    assert to_unix_timestamp(FIXED_NOW) == int(FIXED_NOW.timestamp())
