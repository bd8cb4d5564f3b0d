"""UTC calendar helpers. A "day" is always the UTC date of a timestamp."""

from datetime import date, datetime, time, timedelta, timezone


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC (sqlite returns them without tzinfo)."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utc_calendar_date(moment: datetime) -> date:
    return as_utc(moment).date()


def utc_day_window(moment: datetime) -> tuple[datetime, datetime]:
    """[start, end) of the UTC calendar day containing moment."""
    day_start = datetime.combine(utc_calendar_date(moment), time.min).replace(tzinfo=timezone.utc)
    return day_start, day_start + timedelta(days=1)


def to_unix_timestamp(moment: datetime | None) -> int | None:
    if moment is None:
        return None
    return int(as_utc(moment).timestamp())
