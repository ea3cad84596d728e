"""SRS helpers (fixed-table scheduling, queue selection, calendar, labels)."""

from .time import (
    Clock,
    local_now,
    ensure_aware,
    to_iso,
    parse_iso,
    coerce_datetime,
    end_of_day,
    add_minutes,
    add_days_at_midnight,
)

__all__ = [
    "Clock",
    "local_now",
    "ensure_aware",
    "to_iso",
    "parse_iso",
    "coerce_datetime",
    "end_of_day",
    "add_minutes",
    "add_days_at_midnight",
]
