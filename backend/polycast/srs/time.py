"""Local-time helpers for SRS scheduling.

Day-granularity scheduling is anchored to *local* midnight. "Local" always
means the timezone carried by the ``now`` value handed to these helpers, so
callers control it explicitly (production passes ``local_now()``).

Midnights are built on the target date with ``now.tzinfo``, so a zone that
observes DST (the host zone from ``local_now()``, or any IANA zone) resolves
the offset of that date rather than reusing today's.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from dateutil import tz

# A clock returns a timezone-aware "now".
Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return timezone-aware wall-clock 'now' in the host's local timezone.

    The tzinfo is the host zone itself, not a fixed offset, so dates
    derived from it keep their own DST offset.
    """
    return datetime.now(tz.tzlocal())


def ensure_aware(dt: datetime) -> datetime:
    """Attach the local timezone to naive datetimes; aware values pass through."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz.tzlocal())
    return dt


def to_iso(dt: datetime) -> str:
    """Format a datetime as an ISO-8601 string with millisecond precision."""
    return ensure_aware(dt).isoformat(timespec="milliseconds")


def parse_iso(s: str) -> datetime:
    """Parse an ISO-8601 string (a trailing 'Z' is accepted) into an aware datetime.

    Raises:
        ValueError: If the string is not a valid ISO timestamp.
    """
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(s))


def coerce_datetime(value: Any) -> datetime | None:
    """Best-effort conversion of a stored timestamp to an aware datetime.

    Malformed or missing values yield None instead of raising.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, str):
        try:
            return parse_iso(value)
        except ValueError:
            return None
    return None


def end_of_day(now: datetime) -> datetime:
    """Last representable instant (23:59:59.999) of ``now``'s calendar day."""
    return datetime.combine(now.date(), time(23, 59, 59, 999000), tzinfo=now.tzinfo)


def local_date(dt: datetime, now: datetime) -> date:
    """Calendar date of ``dt`` as seen from ``now``'s timezone."""
    return ensure_aware(dt).astimezone(now.tzinfo).date()


def add_minutes(now: datetime, minutes: int) -> datetime:
    # Elapsed time, not wall-clock time, across a DST change
    return (now.astimezone(timezone.utc) + timedelta(minutes=minutes)).astimezone(now.tzinfo)


def add_days_at_midnight(now: datetime, days: int) -> datetime:
    """Midnight of the day ``days`` calendar days after ``now``."""
    target = now.date() + timedelta(days=days)
    return datetime.combine(target, time.min, tzinfo=now.tzinfo)


def calendar_days_between(now: datetime, later: datetime) -> int:
    """Midnight-to-midnight day count from ``now`` to ``later``."""
    return (local_date(later, now) - now.date()).days
