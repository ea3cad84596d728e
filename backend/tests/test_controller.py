"""Tests for the session queue controller (answer handling and queue rules)."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from factories import NOW, FakeAudio, make_new_card, make_studied_card
from polycast.repositories import DailyCountRepository, SettingsRepository, WordRepository
from polycast.sessions import DelayedTransitions, SessionQueueController, StudySessionStore

PROFILE = "ana"


class RecordingTransitions:
    """Instant transitions that snapshot the queue when they run."""

    def __init__(self):
        self.events: list[tuple[str, list[str]]] = []

    async def flip_reset(self, session):
        self.events.append(("flip_reset", [card.key for card in session.due_cards]))
        session.is_flipped = False

    async def card_enter(self, session):
        self.events.append(("card_enter", [card.key for card in session.due_cards]))


@pytest.fixture
def words():
    return WordRepository()


@pytest.fixture
def daily_counts():
    return DailyCountRepository()


@pytest.fixture
def settings():
    return SettingsRepository()


@pytest.fixture
def controller(words, settings, daily_counts):
    return SessionQueueController(
        word_repository=words,
        settings_repository=settings,
        daily_count_repository=daily_counts,
        session_store=StudySessionStore(ttl_seconds=60),
        transitions=DelayedTransitions(flip_delay=0, enter_delay=0),
        clock=lambda: NOW,
    )


def _add(words, *cards):
    for card in cards:
        words.add(PROFILE, card)


def _keys(session):
    return [card.key for card in session.due_cards]


def _mark(controller, session, answer):
    return asyncio.run(controller.mark_card(session, answer))


class TestStartSession:
    """Tests for building the initial queue."""

    def test_due_cards_then_new_cards(self, controller, words):
        """Test the queue holds due cards first, then new cards by frequency."""
        _add(
            words,
            make_new_card("c", frequency=7),
            make_new_card("a", frequency=9),
            make_studied_card("due", timedelta(minutes=-5)),
            make_studied_card("later", timedelta(days=2)),
            make_new_card("b", frequency=8),
        )

        session = controller.start_session(PROFILE)

        assert _keys(session) == ["due", "a", "b", "c"]
        assert session.current_card.key == "due"
        assert session.session_counts.newCount == 3
        assert session.session_counts.reviewCount == 1
        assert session.session_counts.learningCount == 0

    def test_cards_outside_the_deck_are_not_studied(self, controller, words):
        """Test only inFlashcards cards enter the queue."""
        _add(words, make_new_card("in"), make_new_card("out").model_copy(update={"inFlashcards": False}))

        assert _keys(controller.start_session(PROFILE)) == ["in"]

    def test_new_card_quota_uses_todays_ledger(self, controller, words, settings, daily_counts):
        """Test new cards already started today count against the quota."""
        settings.save(PROFILE, {"newCardsPerDay": 4})
        for _ in range(3):
            daily_counts.increment_new_cards(PROFILE, NOW.date())
        _add(words, *(make_new_card(f"n{i}") for i in range(5)))

        session = controller.start_session(PROFILE)

        assert session.todays_new_cards == 3
        assert _keys(session) == ["n0"]

    def test_quota_exhausted_pulls_waiting_cards(self, controller, words, daily_counts):
        """Test learning cards due later today fill an otherwise empty queue."""
        for _ in range(5):
            daily_counts.increment_new_cards(PROFILE, NOW.date())
        _add(
            words,
            make_new_card("new"),
            make_studied_card("soon", timedelta(minutes=8), interval=2),
            make_studied_card("next_week", timedelta(days=7)),
        )

        assert _keys(controller.start_session(PROFILE)) == ["soon"]

    def test_nothing_to_study(self, controller):
        """Test an empty collection gives an empty, incomplete session."""
        session = controller.start_session(PROFILE)

        assert session.due_cards == []
        assert session.current_card is None
        assert session.is_complete is False


class TestMarkCard:
    """Tests for applying one answer."""

    def test_correct_on_new_card_requeues_at_back(self, controller, words, daily_counts):
        """Test a 10-minute card stays in today's session, behind the others."""
        _add(words, make_new_card("a", 9), make_new_card("b", 8), make_new_card("c", 7))
        session = controller.start_session(PROFILE)

        result = _mark(controller, session, "correct")

        assert result.kept_in_session is True
        assert result.previous_status == "new"
        assert result.next_review_label == "10 min"
        assert result.card.srsData.SRS_interval == 2
        assert result.card.srsData.dueDate == NOW + timedelta(minutes=10)

        assert _keys(session) == ["b", "c", "a"]
        assert session.current_due_index == 0
        assert session.current_card.key == "b"
        assert session.processed_cards == []
        assert session.calendar_update_trigger == 0

        assert session.stats.cardsReviewed == 1
        assert session.stats.correctAnswers == 1
        assert session.todays_new_cards == 1
        assert daily_counts.get_new_cards(PROFILE, NOW.date()) == 1
        assert session.session_counts.newCount == 2
        assert session.session_counts.reviewCount == 1

        stored = words.get_by_key(PROFILE, "a")
        assert stored.srsData.status == "learning"
        assert stored.srsData.isNew is False

    def test_easy_on_new_card_leaves_the_session(self, controller, words):
        """Test a day-interval card moves to processed cards and bumps the calendar."""
        _add(words, make_new_card("a", 9), make_new_card("b", 8))
        session = controller.start_session(PROFILE)

        result = _mark(controller, session, "easy")

        assert result.kept_in_session is False
        assert result.next_review_label == "1 day"
        assert result.card.srsData.dueDate == datetime(2025, 6, 12, tzinfo=timezone.utc)
        assert _keys(session) == ["b"]
        assert [card.key for card in session.processed_cards] == ["a"]
        assert session.calendar_update_trigger == 1
        # Due tomorrow at midnight: still within the header window
        assert session.session_counts.newCount == 1
        assert session.session_counts.reviewCount == 1

    def test_incorrect_marks_card_for_relearning(self, controller, words):
        """Test a wrong answer resets the card to the first step and keeps it."""
        _add(words, make_studied_card("a", timedelta(minutes=-1), interval=6), make_new_card("b"))
        session = controller.start_session(PROFILE)

        result = _mark(controller, session, "incorrect")

        srs = result.card.srsData
        assert srs.SRS_interval == 1
        assert srs.status == "relearning"
        assert srs.gotWrongThisSession is True
        assert srs.incorrectCount == 1
        assert result.previous_status == "learning"
        assert result.next_review_label == "1 min"
        assert _keys(session) == ["b", "a"]
        assert session.stats.correctAnswers == 0
        assert session.session_counts.reviewCount == 0
        assert session.session_counts.learningCount == 1
        assert session.todays_new_cards == 0

    def test_pointer_clamps_when_last_card_leaves(self, controller, words):
        """Test removing the last queued card points at the new last card."""
        _add(words, make_new_card("a", 9), make_new_card("b", 8), make_new_card("c", 7))
        session = controller.start_session(PROFILE)
        session.current_due_index = 2

        _mark(controller, session, "easy")

        assert _keys(session) == ["a", "b"]
        assert session.current_due_index == 1

    def test_pointer_stays_when_last_card_is_requeued(self, controller, words):
        """Test requeueing the last card leaves it under the pointer."""
        _add(words, make_new_card("a", 9), make_new_card("b", 8))
        session = controller.start_session(PROFILE)
        session.current_due_index = 1

        _mark(controller, session, "correct")

        assert _keys(session) == ["a", "b"]
        assert session.current_due_index == 1
        assert session.current_card.srsData.SRS_interval == 2

    def test_empty_queue_is_refilled_with_waiting_cards(self, controller, words):
        """Test the queue refills from learning cards due within a day."""
        _add(words, make_new_card("a", 9), make_new_card("b", 8))
        session = controller.start_session(PROFILE)

        _mark(controller, session, "correct")  # a -> 10 min, queue [b, a]
        _mark(controller, session, "easy")  # b -> tomorrow, queue [a]
        _mark(controller, session, "easy")  # a -> 3 days, queue empty

        assert _keys(session) == ["b"]
        assert session.current_due_index == 0
        assert session.calendar_update_trigger == 2
        assert session.is_complete is False

    def test_session_completes_when_nothing_is_left(self, controller, words):
        """Test the session is complete once the refill finds nothing."""
        _add(words, make_studied_card("a", timedelta(minutes=-1), interval=4))
        session = controller.start_session(PROFILE)

        result = _mark(controller, session, "correct")

        assert result.next_review_label == "1 week"
        assert session.due_cards == []
        assert session.is_complete is True
        assert session.header_stats().accuracy == 100

    def test_no_current_card_is_ignored(self, controller):
        """Test marking an empty session changes nothing."""
        session = controller.start_session(PROFILE)

        assert _mark(controller, session, "correct") is None
        assert session.stats.cardsReviewed == 0

    def test_mark_while_processing_is_ignored(self, controller, words):
        """Test a second answer during an in-flight one is dropped."""
        _add(words, make_new_card("a", 9), make_new_card("b", 8))
        session = controller.start_session(PROFILE)

        async def answer_twice():
            return await asyncio.gather(
                controller.mark_card(session, "correct"),
                controller.mark_card(session, "easy"),
            )

        first, second = asyncio.run(answer_twice())

        assert first is not None
        assert first.card.key == "a"
        assert second is None
        assert session.stats.cardsReviewed == 1
        assert session.processing is False
        assert _keys(session) == ["b", "a"]

    def test_guard_released_after_invalid_answer(self, controller, words):
        """Test an invalid answer raises and leaves the session usable."""
        _add(words, make_new_card("a"))
        session = controller.start_session(PROFILE)

        with pytest.raises(ValueError):
            _mark(controller, session, "maybe")

        assert session.processing is False
        assert _keys(session) == ["a"]
        assert session.stats.cardsReviewed == 0
        assert _mark(controller, session, "correct") is not None

    def test_transitions_run_before_queue_advances(self, words):
        """Test flip reset then card enter both see the old queue."""
        transitions = RecordingTransitions()
        controller = SessionQueueController(
            word_repository=words,
            settings_repository=SettingsRepository(),
            daily_count_repository=DailyCountRepository(),
            session_store=StudySessionStore(ttl_seconds=60),
            transitions=transitions,
            clock=lambda: NOW,
        )
        _add(words, make_new_card("a", 9), make_new_card("b", 8))
        session = controller.start_session(PROFILE)
        session.is_flipped = True

        _mark(controller, session, "easy")

        assert transitions.events == [
            ("flip_reset", ["a", "b"]),
            ("card_enter", ["a", "b"]),
        ]
        assert session.is_flipped is False
        assert _keys(session) == ["b"]

    def test_audio_is_stopped_before_answering(self, controller, words):
        """Test the playing handle is paused and rewound."""
        _add(words, make_new_card("a"))
        session = controller.start_session(PROFILE)
        audio = FakeAudio()
        session.audio.replace(audio)

        _mark(controller, session, "correct")

        assert audio.paused is True
        assert audio.currentTime == 0
        assert session.audio.is_active is False

    def test_failing_audio_does_not_block_answer(self, controller, words):
        """Test an audio failure never reaches scheduling."""
        _add(words, make_new_card("a"))
        session = controller.start_session(PROFILE)
        session.audio.replace(FakeAudio(fail=True))

        result = _mark(controller, session, "correct")

        assert result is not None
        assert session.audio.is_active is False
        assert words.get_by_key(PROFILE, "a").srsData.SRS_interval == 2

    def test_answer_is_written_back_by_key(self, controller, words):
        """Test the word store write is an upsert of the whole card."""
        _add(words, make_new_card("a"), make_new_card("b"))
        session = controller.start_session(PROFILE)
        words.delete(PROFILE, "a")

        result = _mark(controller, session, "easy")

        stored = words.get_by_key(PROFILE, "a")
        assert stored == result.card
        assert stored.srsData.SRS_interval == 3
        assert [card.key for card in words.list_by_profile(PROFILE)] == ["b", "a"]

    def test_new_card_ledger_carries_over_to_next_session(self, controller, words, settings):
        """Test new cards started in one session reduce the next session's quota."""
        settings.save(PROFILE, {"newCardsPerDay": 2})
        _add(words, *(make_new_card(f"n{i}", frequency=10 - i) for i in range(4)))
        first = controller.start_session(PROFILE)
        assert _keys(first) == ["n0", "n1"]

        _mark(controller, first, "easy")

        second = controller.start_session(PROFILE)
        assert second.todays_new_cards == 1
        assert _keys(second) == ["n1"]


class TestCalendar:
    """Tests for the controller's calendar view."""

    def test_answered_card_shows_on_its_new_day(self, controller, words):
        """Test a processed card appears on the day it is next due."""
        _add(words, make_new_card("a", 9), make_new_card("b", 8))
        session = controller.start_session(PROFILE)

        _mark(controller, session, "easy")
        days = controller.calendar(session)

        assert len(days) == 8
        assert [card.key for card in days[0].cards] == ["b"]
        assert [card.key for card in days[1].cards] == ["a"]
