"""Due-card selection: builds the ordered review queue for a session."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import TypedDict

from polycast.models.card import Card
from polycast.models.settings import SRSSettings

# Learning cards due within this window may be pulled forward
WAITING_WINDOW = timedelta(hours=24)

# Rank used for cards without a frequency (1-10 scale)
NEUTRAL_FREQUENCY = 5


class ReviewStats(TypedDict):
    """Status tally over a card pool."""
    new: int
    learning: int
    review: int
    relearning: int
    dueToday: int
    total: int


def _due(card: Card) -> datetime:
    # Only called on cards already known to have a due date.
    return card.srsData.dueDate  # type: ignore[union-attr,return-value]


def _frequency(card: Card) -> int:
    return card.frequency or NEUTRAL_FREQUENCY


def get_due_cards(
    cards: Iterable[Card],
    now: datetime,
    new_per_day: int | None = None,
    include_waiting: bool = False,
    settings: SRSSettings | None = None,
) -> list[Card]:
    """Return the review queue for ``now``.

    Order: cards whose due date has passed (earliest first), then up to
    ``new_per_day`` new cards (most common first, input order on ties).
    ``new_per_day`` defaults to ``settings.newCardsPerDay``.

    With ``include_waiting`` and nothing else to study, learning/relearning
    cards due within the next 24 hours are returned instead, soonest first.

    Cards without scheduling state, and non-new cards without a readable due
    date, are never selected.
    """
    if settings is None:
        settings = SRSSettings()
    max_new = new_per_day if new_per_day is not None else settings.newCardsPerDay
    max_new = max(0, max_new)

    scheduled = [card for card in cards if card.srsData is not None]
    dated = [card for card in scheduled if card.srsData.dueDate is not None]

    strictly_due = sorted(
        (c for c in dated if c.srsData.status != "new" and _due(c) <= now),
        key=_due,
    )
    new_cards = sorted(
        (c for c in scheduled if c.srsData.status == "new"),
        key=_frequency,
        reverse=True,
    )

    queue = strictly_due + new_cards[:max_new]

    if include_waiting and not queue:
        waiting = [
            c
            for c in dated
            if c.srsData.status in ("learning", "relearning")
            and now < _due(c)
            and _due(c) - now < WAITING_WINDOW
        ]
        return sorted(waiting, key=_due)

    return queue


def get_review_stats(cards: Iterable[Card], now: datetime) -> ReviewStats:
    """Count cards per status, plus how many are due at ``now``."""
    stats = ReviewStats(new=0, learning=0, review=0, relearning=0, dueToday=0, total=0)
    for card in cards:
        if card.srsData is None:
            continue
        stats["total"] += 1
        stats[card.srsData.status] += 1
        if card.srsData.dueDate is not None and card.srsData.dueDate <= now:
            stats["dueToday"] += 1
    return stats
