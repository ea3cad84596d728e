"""Eight-day calendar projection of upcoming reviews."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from polycast.models.card import Card
from polycast.models.study import CalendarDay
from polycast.srs.time import add_days_at_midnight, local_date

CALENDAR_DAYS = 8

# Demo profile whose pool is not filtered by deck membership
NON_SAVING_PROFILE = "non-saving"

# Short English weekday names, indexed by date.weekday()
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _day_name(offset: int, day: datetime) -> str:
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Tomorrow"
    return WEEKDAY_NAMES[day.weekday()]


def _same_sense(a: Card, b: Card) -> bool:
    if a.key == b.key:
        return True
    return a.wordSenseId is not None and a.wordSenseId == b.wordSenseId


def merge_candidates(
    due_cards: Iterable[Card],
    pool: Iterable[Card],
    processed_cards: Iterable[Card],
    profile_id: str | None = None,
) -> list[Card]:
    """Session cards first, then pool cards not already represented.

    Queue and processed copies carry the freshest scheduling state, so they
    win over the pool's copy of the same sense.
    """
    merged: list[Card] = []
    for card in list(due_cards) + list(processed_cards):
        # A processed card can come back through a refill; the queued copy wins
        if not any(_same_sense(card, seen) for seen in merged):
            merged.append(card)

    for card in pool:
        if profile_id != NON_SAVING_PROFILE and not card.inFlashcards:
            continue
        if any(_same_sense(card, seen) for seen in merged):
            continue
        merged.append(card)
    return merged


def project_calendar(
    due_cards: Iterable[Card],
    pool: Iterable[Card],
    processed_cards: Iterable[Card],
    now: datetime,
    profile_id: str | None = None,
    days: int = CALENDAR_DAYS,
) -> list[CalendarDay]:
    """Bucket every known card by the calendar day it is next due.

    Cards due before today or beyond the horizon land in no bucket.
    """
    candidates = merge_candidates(due_cards, pool, processed_cards, profile_id)

    calendar: list[CalendarDay] = []
    for offset in range(days):
        day = add_days_at_midnight(now, offset)
        day_date = day.date()
        cards_for_day = [
            card
            for card in candidates
            if card.srsData is not None
            and card.srsData.dueDate is not None
            and local_date(card.srsData.dueDate, now) == day_date
        ]
        calendar.append(
            CalendarDay(
                date=day,
                cards=cards_for_day,
                dayName=_day_name(offset, day),
                dateStr=f"{day.month}/{day.day}",
            )
        )
    return calendar
