"""Calendar helpers: whole days only, no timezone arithmetic."""
from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def to_date(value: DateLike) -> date:
    """
    Coerce a date, datetime or ISO string to a calendar date.

    Time-of-day and offsets are dropped: callers normalize to one local
    calendar before invocation.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        # "2026-01-07", "2026-01-07T10:00:00Z", "2026-01-07 10:00"
        return date.fromisoformat(text[:10])
    raise TypeError(f"Unsupported date value: {value!r}")


def date_key(d: DateLike) -> str:
    """Locale-independent YYYY-MM-DD key."""
    return to_date(d).isoformat()


def day_index(d: DateLike, start: DateLike) -> int:
    """Whole days from start to d (negative before the horizon)."""
    return (to_date(d) - to_date(start)).days


def horizon_length(start: DateLike, end: DateLike) -> int:
    """Number of days in the inclusive range [start, end]."""
    return day_index(end, start) + 1


def date_at(start: DateLike, index: int) -> date:
    return to_date(start) + timedelta(days=index)


def weekday_name(d: DateLike) -> str:
    """Lowercase English weekday name ("sunday", "monday", ...)."""
    return WEEKDAY_NAMES[to_date(d).weekday()]
