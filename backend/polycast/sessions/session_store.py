"""Study-session state and its TTL-based store."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from cachetools import TTLCache

from polycast.models import Card, HeaderStats, SessionCounts, SessionStats
from polycast.sessions.audio import AudioSlot


class SessionNotFoundError(Exception):
    """Raised when a study session does not exist or has expired."""

    pass


@dataclass
class StudySession:
    """Queue state for one study session.

    Keyed by (profile_id, session_id). Only the session controller mutates it.

    Attributes:
        due_cards: Current review order
        current_due_index: Pointer into due_cards
        todays_new_cards: New cards already introduced today (capped by settings)
        session_counts: Live new/learning/review tallies for the header
        processed_cards: Cards that left today's queue, kept for the calendar
        stats: cardsReviewed / correctAnswers
        calendar_update_trigger: Bumped whenever a card leaves the queue
        processing: Reentrancy guard held while one answer is applied
        is_flipped: Whether the current card shows its back
        audio: The session's single playback slot
    """
    # Session identity
    session_id: str
    profile_id: str
    created_at: datetime

    # Queue
    due_cards: list[Card] = field(default_factory=list)
    current_due_index: int = 0
    processed_cards: list[Card] = field(default_factory=list)

    # Counters
    todays_new_cards: int = 0
    session_counts: SessionCounts = field(default_factory=SessionCounts)
    stats: SessionStats = field(default_factory=SessionStats)
    calendar_update_trigger: int = 0

    # Transition state
    processing: bool = False
    is_flipped: bool = False

    audio: AudioSlot = field(default_factory=AudioSlot)

    @property
    def current_card(self) -> Card | None:
        """Card at the queue pointer, if any."""
        if 0 <= self.current_due_index < len(self.due_cards):
            return self.due_cards[self.current_due_index]
        return None

    @property
    def is_complete(self) -> bool:
        """Queue exhausted after at least one answer."""
        return not self.due_cards and self.stats.cardsReviewed > 0

    @property
    def accuracy(self) -> int:
        if self.stats.cardsReviewed == 0:
            return 100
        return round(self.stats.correctAnswers / self.stats.cardsReviewed * 100)

    def header_stats(self) -> HeaderStats:
        """Category counts over the live queue."""
        queued = [card.srsData for card in self.due_cards if card.srsData is not None]
        return HeaderStats(
            newCards=sum(1 for s in queued if s.isNew),
            learningCards=sum(1 for s in queued if s.gotWrongThisSession and not s.isNew),
            reviewCards=sum(1 for s in queued if not s.isNew and not s.gotWrongThisSession),
            cardsReviewed=self.stats.cardsReviewed,
            accuracy=self.accuracy,
        )


def tally_session_counts(cards: list[Card]) -> SessionCounts:
    """Initial header tallies for a freshly built queue."""
    counts = SessionCounts()
    for card in cards:
        if card.srsData is None:
            continue
        if card.srsData.isNew:
            counts.newCount += 1
        elif card.srsData.gotWrongThisSession:
            counts.learningCount += 1
        else:
            counts.reviewCount += 1
    return counts


class StudySessionStore:
    """Thread-safe TTL-based session store.

    Stores StudySession keyed by (profile_id, session_id).
    Sessions expire after TTL seconds of inactivity (sliding window).
    """

    # Default TTL: 30 minutes
    DEFAULT_TTL_SECONDS = 30 * 60
    # Max sessions to cache
    MAX_SESSIONS = 10000

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, maxsize: int = MAX_SESSIONS):
        """Initialize the session store.

        Args:
            ttl_seconds: Time-to-live for sessions in seconds
            maxsize: Maximum number of sessions to cache
        """
        self._cache: TTLCache[tuple[str, str], StudySession] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds
        )
        self._lock = threading.Lock()

    def _make_key(self, profile_id: str, session_id: str) -> tuple[str, str]:
        """Create a cache key from profile and session IDs."""
        return (profile_id, session_id)

    def create(self, profile_id: str, now: datetime) -> StudySession:
        """Create and store an empty session."""
        session = StudySession(
            session_id=str(uuid.uuid4()),
            profile_id=profile_id,
            created_at=now,
        )
        self.put(session)
        return session

    def get(self, profile_id: str, session_id: str) -> StudySession:
        """Get a session; access refreshes its TTL (sliding window).

        Raises:
            SessionNotFoundError: If no session exists or it has expired.
        """
        key = self._make_key(profile_id, session_id)
        with self._lock:
            session = self._cache.get(key)
            if session is None:
                raise SessionNotFoundError(f"Study session {session_id} not found")
            # Re-set to refresh TTL (sliding window)
            self._cache[key] = session
            return session

    def put(self, session: StudySession) -> None:
        """Store session state (also refreshes TTL)."""
        key = self._make_key(session.profile_id, session.session_id)
        with self._lock:
            self._cache[key] = session

    def reset(self, profile_id: str, session_id: str) -> None:
        """Remove a session, stopping any audio it still owns."""
        key = self._make_key(profile_id, session_id)
        with self._lock:
            session = self._cache.pop(key, None)
        if session is not None:
            session.audio.stop()

    def clear(self) -> None:
        """Clear all sessions (for testing)."""
        with self._lock:
            self._cache.clear()


# Singleton instance
_session_store: StudySessionStore | None = None


def get_session_store() -> StudySessionStore:
    """Get the singleton session store instance."""
    global _session_store
    if _session_store is None:
        from polycast.config import get_app_settings

        settings = get_app_settings()
        _session_store = StudySessionStore(
            ttl_seconds=settings.session_ttl_seconds,
            maxsize=settings.session_max,
        )
    return _session_store


def reset_session_store() -> None:
    """Reset the session store (for testing)."""
    global _session_store
    _session_store = None
