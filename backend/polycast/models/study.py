"""Models for study-session endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from polycast.models.card import Answer, Card, Status


class SessionCounts(BaseModel):
    """Live category tallies shown in the session header."""
    newCount: int = Field(0, ge=0)
    learningCount: int = Field(0, ge=0)
    reviewCount: int = Field(0, ge=0)


class SessionStats(BaseModel):
    """Answers recorded during a session."""
    cardsReviewed: int = Field(0, ge=0)
    correctAnswers: int = Field(0, ge=0)


class HeaderStats(BaseModel):
    """Category counts over the live queue plus session accuracy."""
    newCards: int
    learningCards: int
    reviewCards: int
    cardsReviewed: int
    accuracy: int = Field(..., description="Percentage of answers not marked incorrect", ge=0, le=100)


class CalendarDay(BaseModel):
    """Cards falling due on one calendar day."""
    date: datetime = Field(..., description="Local midnight of the day")
    cards: list[Card] = Field(default_factory=list)
    dayName: str = Field(..., description='"Today", "Tomorrow" or a short weekday name')
    dateStr: str = Field(..., description="Month/day, e.g. 10/19")


class StudySessionResponse(BaseModel):
    """Snapshot of a study session."""
    sessionId: str
    profileId: str
    createdAt: datetime
    currentCard: Card | None = Field(None, description="Card at the queue pointer")
    currentDueIndex: int
    dueCount: int = Field(..., description="Cards left in today's queue", ge=0)
    todaysNewCards: int
    sessionCounts: SessionCounts
    stats: SessionStats
    headerStats: HeaderStats
    processedCount: int
    isComplete: bool


class MarkCardRequest(BaseModel):
    """Request for POST /study/sessions/{session_id}/mark."""
    answer: Answer = Field(..., description="Learner's answer to the current card")


class MarkCardResponse(BaseModel):
    """Response for POST /study/sessions/{session_id}/mark."""
    accepted: bool = Field(..., description="False when no card was marked (busy or empty queue)")
    card: Card | None = Field(None, description="The answered card with its updated srsData")
    previousStatus: Status | None = None
    keptInSession: bool | None = Field(None, description="True if the card was requeued for later today")
    nextReview: str | None = Field(None, description='Label such as "10 min" or "3 days"')
    session: StudySessionResponse


class CalendarResponse(BaseModel):
    """Response for GET /study/sessions/{session_id}/calendar."""
    days: list[CalendarDay]
    updateTrigger: int = Field(..., description="Bumped whenever a card leaves today's queue")


class ReviewStatsResponse(BaseModel):
    """Response for GET /study/stats."""
    new: int
    learning: int
    review: int
    relearning: int
    dueToday: int
    total: int


class NextReviewLabelResponse(BaseModel):
    """Response for GET /study/next-review."""
    dueDate: datetime
    label: str
