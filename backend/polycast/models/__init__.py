"""Models module for Pydantic schemas."""

from .card import (
    Answer,
    Status,
    STATUS_TRANSITIONS,
    SRSData,
    Card,
    CardBase,
    CardCreate,
    CardListResponse,
    new_srs_data,
)
from .settings import (
    SRSSettings,
    SRSSettingsUpdate,
    validate_settings,
)
from .study import (
    CalendarDay,
    CalendarResponse,
    HeaderStats,
    MarkCardRequest,
    MarkCardResponse,
    NextReviewLabelResponse,
    ReviewStatsResponse,
    SessionCounts,
    SessionStats,
    StudySessionResponse,
)

__all__ = [
    "Answer",
    "Status",
    "STATUS_TRANSITIONS",
    "SRSData",
    "Card",
    "CardBase",
    "CardCreate",
    "CardListResponse",
    "new_srs_data",
    "SRSSettings",
    "SRSSettingsUpdate",
    "validate_settings",
    "CalendarDay",
    "CalendarResponse",
    "HeaderStats",
    "MarkCardRequest",
    "MarkCardResponse",
    "NextReviewLabelResponse",
    "ReviewStatsResponse",
    "SessionCounts",
    "SessionStats",
    "StudySessionResponse",
]
