"""Study (SRS session) API router."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, status

from polycast.dependencies import CurrentProfile
from polycast.models import (
    CalendarResponse,
    MarkCardRequest,
    MarkCardResponse,
    NextReviewLabelResponse,
    ReviewStatsResponse,
    StudySessionResponse,
)
from polycast.repositories import get_word_repository
from polycast.sessions import (
    SessionNotFoundError,
    StudySession,
    get_session_controller,
    get_session_store,
)
from polycast.srs.labels import format_next_review_time
from polycast.srs.selector import get_review_stats
from polycast.srs.time import ensure_aware, local_now

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/study", tags=["study"])


def _session_response(session: StudySession) -> StudySessionResponse:
    return StudySessionResponse(
        sessionId=session.session_id,
        profileId=session.profile_id,
        createdAt=session.created_at,
        currentCard=session.current_card,
        currentDueIndex=session.current_due_index,
        dueCount=len(session.due_cards),
        todaysNewCards=session.todays_new_cards,
        sessionCounts=session.session_counts,
        stats=session.stats,
        headerStats=session.header_stats(),
        processedCount=len(session.processed_cards),
        isComplete=session.is_complete,
    )


def _load_session(profile_id: str, session_id: str) -> StudySession:
    try:
        return get_session_store().get(profile_id, session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Study session {session_id} not found",
        )


@router.post("/sessions", response_model=StudySessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(profile_id: CurrentProfile) -> StudySessionResponse:
    """Start a study session with everything due now plus today's new cards."""
    session = get_session_controller().start_session(profile_id)
    return _session_response(session)


@router.get("/sessions/{session_id}", response_model=StudySessionResponse)
async def get_session(session_id: str, profile_id: CurrentProfile) -> StudySessionResponse:
    """Current state of a study session."""
    return _session_response(_load_session(profile_id, session_id))


@router.post("/sessions/{session_id}/mark", response_model=MarkCardResponse)
async def mark_card(
    session_id: str, req: MarkCardRequest, profile_id: CurrentProfile
) -> MarkCardResponse:
    """Record an answer for the session's current card.

    A request arriving while a previous answer is still being applied, or
    when the queue is empty, is ignored (``accepted`` is false).
    """
    session = _load_session(profile_id, session_id)
    result = await get_session_controller().mark_card(session, req.answer)

    if result is None:
        logger.info(f"Mark ignored: session={session_id}, busy={session.processing}")
        return MarkCardResponse(accepted=False, session=_session_response(session))

    return MarkCardResponse(
        accepted=True,
        card=result.card,
        previousStatus=result.previous_status,
        keptInSession=result.kept_in_session,
        nextReview=result.next_review_label,
        session=_session_response(session),
    )


@router.get("/sessions/{session_id}/calendar", response_model=CalendarResponse)
async def get_calendar(session_id: str, profile_id: CurrentProfile) -> CalendarResponse:
    """Upcoming reviews for today and the next seven days."""
    session = _load_session(profile_id, session_id)
    days = get_session_controller().calendar(session)
    return CalendarResponse(days=days, updateTrigger=session.calendar_update_trigger)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(session_id: str, profile_id: CurrentProfile) -> None:
    """End a study session and discard its queue."""
    _load_session(profile_id, session_id)
    get_session_store().reset(profile_id, session_id)


@router.get("/stats", response_model=ReviewStatsResponse)
async def review_stats(profile_id: CurrentProfile) -> ReviewStatsResponse:
    """Status counts over the profile's whole collection."""
    cards = get_word_repository().list_by_profile(profile_id)
    return ReviewStatsResponse(**get_review_stats(cards, local_now()))


@router.get("/next-review", response_model=NextReviewLabelResponse)
async def next_review_label(dueDate: datetime) -> NextReviewLabelResponse:
    """Format the time until ``dueDate`` as an interval label."""
    return NextReviewLabelResponse(
        dueDate=dueDate,
        label=format_next_review_time(ensure_aware(dueDate), local_now()),
    )
