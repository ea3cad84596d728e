"""Session queue controller: applies one answer at a time to a study session."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from polycast.models import Answer, CalendarDay, Card, SRSData, SessionCounts, Status
from polycast.repositories import (
    DailyCountRepository,
    SettingsRepository,
    WordRepository,
    get_daily_count_repository,
    get_settings_repository,
    get_word_repository,
)
from polycast.sessions.session_store import (
    StudySession,
    StudySessionStore,
    get_session_store,
    tally_session_counts,
)
from polycast.srs.calendar import project_calendar
from polycast.srs.labels import format_next_review_time
from polycast.srs.scheduler import calculate_next_review, is_minute_interval
from polycast.srs.selector import get_due_cards
from polycast.srs.time import Clock, end_of_day, local_now

logger = logging.getLogger(__name__)

# A card due within this window still counts toward today's header tallies
COUNTS_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class MarkResult:
    """Outcome of one answer."""
    card: Card
    previous_status: Status
    kept_in_session: bool
    next_review_label: str


class TransitionHooks(Protocol):
    """Presentation steps awaited between recording an answer and advancing the queue."""

    async def flip_reset(self, session: StudySession) -> None: ...

    async def card_enter(self, session: StudySession) -> None: ...


class DelayedTransitions:
    """Waits out the flip-back and card-enter animations."""

    def __init__(self, flip_delay: float = 0.2, enter_delay: float = 0.2):
        self.flip_delay = flip_delay
        self.enter_delay = enter_delay

    async def flip_reset(self, session: StudySession) -> None:
        await asyncio.sleep(self.flip_delay)
        session.is_flipped = False

    async def card_enter(self, session: StudySession) -> None:
        await asyncio.sleep(self.enter_delay)


def _update_session_counts(
    counts: SessionCounts, before: SRSData, after: SRSData, now: datetime
) -> None:
    # Leave the old category
    if before.isNew:
        counts.newCount = max(0, counts.newCount - 1)
    elif before.gotWrongThisSession:
        counts.learningCount = max(0, counts.learningCount - 1)
    else:
        counts.reviewCount = max(0, counts.reviewCount - 1)

    # Join the new one only if the card comes back within a day
    if after.dueDate is None or after.dueDate - now >= COUNTS_WINDOW:
        return
    if after.isNew:
        counts.newCount += 1
    elif after.gotWrongThisSession:
        counts.learningCount += 1
    else:
        counts.reviewCount += 1


class SessionQueueController:
    """Owns every mutation of a StudySession.

    Collaborators default to the process-wide singletons and can be injected
    for tests, along with a fixed clock and instant transitions.
    """

    def __init__(
        self,
        word_repository: WordRepository | None = None,
        settings_repository: SettingsRepository | None = None,
        daily_count_repository: DailyCountRepository | None = None,
        session_store: StudySessionStore | None = None,
        transitions: TransitionHooks | None = None,
        clock: Clock = local_now,
    ):
        self._word_repository = word_repository
        self._settings_repository = settings_repository
        self._daily_count_repository = daily_count_repository
        self._session_store = session_store
        self.transitions = transitions or DelayedTransitions()
        self.clock = clock

    @property
    def words(self) -> WordRepository:
        if self._word_repository is None:
            self._word_repository = get_word_repository()
        return self._word_repository

    @property
    def settings(self) -> SettingsRepository:
        if self._settings_repository is None:
            self._settings_repository = get_settings_repository()
        return self._settings_repository

    @property
    def daily_counts(self) -> DailyCountRepository:
        if self._daily_count_repository is None:
            self._daily_count_repository = get_daily_count_repository()
        return self._daily_count_repository

    @property
    def sessions(self) -> StudySessionStore:
        if self._session_store is None:
            self._session_store = get_session_store()
        return self._session_store

    def start_session(self, profile_id: str) -> StudySession:
        """Create a session whose queue holds everything due now."""
        now = self.clock()
        session = self.sessions.create(profile_id, now)
        session.todays_new_cards = self.daily_counts.get_new_cards(profile_id, now.date())
        self._fill_queue(session, now)
        session.session_counts = tally_session_counts(session.due_cards)

        logger.info(
            f"Study session started: profile={profile_id}, session={session.session_id}, "
            f"queued={len(session.due_cards)}, todays_new={session.todays_new_cards}"
        )
        return session

    def _fill_queue(self, session: StudySession, now: datetime) -> None:
        settings = self.settings.get(session.profile_id)
        pool = self.words.list_flashcards(session.profile_id)
        max_new = max(0, settings.newCardsPerDay - session.todays_new_cards)

        queue = get_due_cards(pool, now, new_per_day=max_new, settings=settings)
        if not queue:
            queue = get_due_cards(pool, now, new_per_day=max_new, include_waiting=True, settings=settings)

        session.due_cards = queue
        session.current_due_index = 0
        logger.info(f"Queue filled: session={session.session_id}, cards={len(queue)}, max_new={max_new}")

    async def mark_card(self, session: StudySession, answer: Answer) -> MarkResult | None:
        """Apply ``answer`` to the session's current card.

        Returns None, changing nothing, when there is no current card or
        another answer is still being applied.
        """
        card = session.current_card
        if card is None or session.processing:
            return None

        session.audio.stop()
        logger.info(f"User answered {answer!r} for card {card.word!r} (session={session.session_id})")

        session.processing = True
        now = self.clock()
        try:
            before = card.srsData if card.srsData is not None else SRSData()
            after = calculate_next_review(card, answer, now)
            label = format_next_review_time(after.dueDate, now)
            logger.info(
                f"SRS update for {card.word!r}: status {before.status} -> {after.status}, "
                f"interval {before.SRS_interval} -> {after.SRS_interval}, next review in {label}"
            )

            _update_session_counts(session.session_counts, before, after, now)

            updated_card = card.model_copy(update={"srsData": after})
            self.words.add(session.profile_id, updated_card)

            index = session.current_due_index
            queue = session.due_cards[:index] + session.due_cards[index + 1:]
            kept = after.dueDate <= end_of_day(now) and is_minute_interval(after.SRS_interval)
            if kept:
                queue.append(updated_card)
                next_index = 0 if index >= len(queue) else index
            else:
                next_index = len(queue) - 1 if queue and index >= len(queue) else index
                session.processed_cards.append(updated_card)
                session.calendar_update_trigger += 1
            logger.info(f"{'Keeping' if kept else 'Removing'} card {card.word!r} in today's session")

            session.stats.cardsReviewed += 1
            if answer != "incorrect":
                session.stats.correctAnswers += 1

            if before.status == "new":
                session.todays_new_cards += 1
                self.daily_counts.increment_new_cards(session.profile_id, now.date())

            await self.transitions.flip_reset(session)
            await self.transitions.card_enter(session)

            session.due_cards = queue
            session.current_due_index = next_index
            if not queue:
                self._fill_queue(session, self.clock())
        finally:
            session.processing = False

        return MarkResult(
            card=updated_card,
            previous_status=before.status,
            kept_in_session=kept,
            next_review_label=label,
        )

    def calendar(self, session: StudySession) -> list[CalendarDay]:
        """Eight-day projection over the queue, processed cards and the whole pool."""
        return project_calendar(
            session.due_cards,
            self.words.list_by_profile(session.profile_id),
            session.processed_cards,
            self.clock(),
            profile_id=session.profile_id,
        )


# Singleton instance
_controller: SessionQueueController | None = None


def get_session_controller() -> SessionQueueController:
    """Get the singleton controller, with transition delays from configuration."""
    global _controller
    if _controller is None:
        from polycast.config import get_app_settings

        app_settings = get_app_settings()
        _controller = SessionQueueController(
            transitions=DelayedTransitions(
                flip_delay=app_settings.flip_delay_seconds,
                enter_delay=app_settings.card_enter_delay_seconds,
            )
        )
    return _controller


def reset_session_controller() -> None:
    """Reset the controller (for testing)."""
    global _controller
    _controller = None
