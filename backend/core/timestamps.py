"""UTC timestamp helpers shared by the stores."""

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from backends without time zones (SQLite)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def later_than(previous: datetime | None, now: datetime) -> datetime:
    """Return ``now``, nudged forward so it is strictly after ``previous``."""
    if previous is None:
        return now
    previous = as_utc(previous)
    if now <= previous:
        return previous + _TICK
    return now
