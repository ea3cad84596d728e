"""Study sessions: queue state, TTL store and the per-answer controller."""

from .audio import AudioHandle, AudioSlot
from .session_store import (
    SessionNotFoundError,
    StudySession,
    StudySessionStore,
    get_session_store,
)
from .controller import (
    DelayedTransitions,
    MarkResult,
    SessionQueueController,
    get_session_controller,
)

__all__ = [
    "AudioHandle",
    "AudioSlot",
    "SessionNotFoundError",
    "StudySession",
    "StudySessionStore",
    "get_session_store",
    "DelayedTransitions",
    "MarkResult",
    "SessionQueueController",
    "get_session_controller",
]
