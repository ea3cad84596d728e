"""Human-readable "next review" labels matching the interval table buckets."""

from __future__ import annotations

from datetime import datetime

from polycast.srs.time import calendar_days_between, ensure_aware

# (minimum whole days, label), largest first
_DAY_BUCKETS: tuple[tuple[int, str], ...] = (
    (120, "4 months"),
    (60, "2 months"),
    (30, "1 month"),
    (14, "2 weeks"),
    (7, "1 week"),
    (3, "3 days"),
    (1, "1 day"),
)


def format_next_review_time(review_date: datetime, now: datetime) -> str:
    """Label the time until ``review_date``.

    Minute values absorb a little processing jitter: anything up to one
    minute reads "1 min" and 9-11 minutes read "10 min". Day counts are taken
    midnight-to-midnight, so a card due any time tomorrow reads "1 day".
    """
    diff = ensure_aware(review_date) - now
    if diff.total_seconds() <= 0:
        return "Now"

    diff_mins = int(diff.total_seconds() // 60)
    if diff_mins <= 1:
        return "1 min"
    if 9 <= diff_mins <= 11:
        return "10 min"
    if diff_mins < 60:
        return "1 min" if diff_mins < 5 else "10 min"

    diff_days = calendar_days_between(now, review_date)
    for threshold, label in _DAY_BUCKETS:
        if diff_days >= threshold:
            return label
    # Later today, past the minute buckets
    return "1 day"
