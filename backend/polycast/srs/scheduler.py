"""Interval calculator.

Each answer moves a card along a fixed nine-step interval table:

    1: 1 min   2: 10 min   3: 1 day    4: 3 days   5: 7 days
    6: 14 days 7: 30 days  8: 60 days  9: 120 days

Steps 1-2 are minute-granularity ("learning steps"); from step 3 on the due
date lands on local midnight of the target day, so the card is available at
any time on that day.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from polycast.models.card import MAX_SRS_INTERVAL, MIN_SRS_INTERVAL, Answer, Card, SRSData, Status
from polycast.srs.time import add_days_at_midnight, add_minutes

INTERVAL_TABLE: dict[int, timedelta] = {
    1: timedelta(minutes=1),
    2: timedelta(minutes=10),
    3: timedelta(days=1),
    4: timedelta(days=3),
    5: timedelta(days=7),
    6: timedelta(days=14),
    7: timedelta(days=30),
    8: timedelta(days=60),
    9: timedelta(days=120),
}

# Highest interval still scheduled in minutes
LAST_MINUTE_INTERVAL = 2

_INTERVAL_STEP: dict[Answer, int] = {
    "correct": 1,
    "easy": 2,
}


def is_minute_interval(interval: int) -> bool:
    return interval <= LAST_MINUTE_INTERVAL


def due_date_for_interval(now: datetime, interval: int) -> datetime:
    """Due date for a card placed on ``interval`` at ``now``."""
    elapsed = INTERVAL_TABLE[interval]
    if is_minute_interval(interval):
        return add_minutes(now, int(elapsed.total_seconds() // 60))
    return add_days_at_midnight(now, elapsed.days)


def derive_status(got_wrong: bool) -> Status:
    """Status after an answer. The calculator never re-enters "new" nor emits "review"."""
    return "relearning" if got_wrong else "learning"


def calculate_next_review(card: Card, answer: Answer, now: datetime) -> SRSData:
    """Return the card's scheduling state after ``answer`` at ``now``.

    New and previously seen cards follow the same rules; a new card simply
    starts from the first step of the table.

    Raises:
        ValueError: If ``answer`` is not one of incorrect/correct/easy.
    """
    current = card.srsData if card.srsData is not None else SRSData()
    interval = MIN_SRS_INTERVAL if current.isNew else current.SRS_interval

    if answer == "incorrect":
        got_wrong = True
        interval = MIN_SRS_INTERVAL
    elif answer in _INTERVAL_STEP:
        got_wrong = False
        interval += _INTERVAL_STEP[answer]
    else:
        raise ValueError(f"Invalid answer: {answer}")

    interval = min(interval, MAX_SRS_INTERVAL)
    correct = answer != "incorrect"

    return current.model_copy(
        update={
            "isNew": False,
            "gotWrongThisSession": got_wrong,
            "SRS_interval": interval,
            "status": derive_status(got_wrong),
            "dueDate": due_date_for_interval(now, interval),
            "lastReviewDate": now,
            "lastSeen": now,
            "correctCount": current.correctCount + (1 if correct else 0),
            "incorrectCount": current.incorrectCount + (0 if correct else 1),
        }
    )
