"""Flashcard models: the card itself and its scheduling state (``srsData``)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Literal

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)

from polycast.srs.time import coerce_datetime

logger = logging.getLogger(__name__)


# Learner's answer to a flashcard
Answer = Literal["incorrect", "correct", "easy"]

# Card lifecycle status
Status = Literal["new", "learning", "relearning", "review"]

MIN_SRS_INTERVAL = 1
MAX_SRS_INTERVAL = 9

# Legal status changes. "review" is declared but nothing assigns it yet.
STATUS_TRANSITIONS: dict[Status, frozenset[Status]] = {
    "new": frozenset({"learning", "relearning"}),
    "learning": frozenset({"learning", "relearning"}),
    "relearning": frozenset({"learning", "relearning"}),
    "review": frozenset({"learning", "relearning"}),
}

_DATE_FIELDS = ("dueDate", "lastReviewDate", "lastSeen")


def _clamp_interval(value: Any) -> int:
    try:
        interval = int(value)
    except (TypeError, ValueError):
        return MIN_SRS_INTERVAL
    return max(MIN_SRS_INTERVAL, min(interval, MAX_SRS_INTERVAL))


class SRSData(BaseModel):
    """Scheduling state of one card.

    ``dueDate`` is the canonical due timestamp. ``nextReviewDate`` is only a
    serialized mirror kept for older consumers; on input it is accepted as a
    fallback when ``dueDate`` is missing.
    """

    isNew: bool = Field(True, description="True until the first answer is recorded")
    gotWrongThisSession: bool = Field(False, description="Most recent answer was incorrect")
    SRS_interval: int = Field(
        MIN_SRS_INTERVAL,
        ge=MIN_SRS_INTERVAL,
        le=MAX_SRS_INTERVAL,
        description="Index into the fixed interval table",
    )
    status: Status = Field("new", description="Derived lifecycle status")
    correctCount: int = Field(0, ge=0)
    incorrectCount: int = Field(0, ge=0)
    dueDate: datetime | None = Field(None, description="When the card is next due")
    lastReviewDate: datetime | None = None
    lastSeen: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def nextReviewDate(self) -> datetime | None:
        return self.dueDate

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        # Old stored format: {interval, repetitions, lapses, ...}
        if data.get("interval") is not None and data.get("SRS_interval") is None:
            old_interval = data.get("interval") or 0
            data["SRS_interval"] = 1 if old_interval == 0 else min(old_interval, MAX_SRS_INTERVAL)
            data["isNew"] = data.get("status") == "new"
            data["gotWrongThisSession"] = False
            data["correctCount"] = data.get("repetitions") or 0
            data["incorrectCount"] = data.get("lapses") or 0
            data["lastSeen"] = data.get("lastReviewDate")

        if data.get("dueDate") is None:
            data["dueDate"] = data.get("nextReviewDate")
        data.pop("nextReviewDate", None)

        for name in _DATE_FIELDS:
            data[name] = coerce_datetime(data.get(name))

        data["SRS_interval"] = _clamp_interval(data.get("SRS_interval"))
        for name in ("correctCount", "incorrectCount"):
            if not data.get(name):
                data[name] = 0
        return data


def new_srs_data(now: datetime) -> SRSData:
    """Scheduling state for a card that was just added to a collection."""
    return SRSData(isNew=True, status="new", SRS_interval=MIN_SRS_INTERVAL, dueDate=now)


class CardBase(BaseModel):
    """Base card model: one word sense."""

    word: str = Field(..., min_length=1, max_length=200, description="Headword")
    definition: str | None = Field(None, max_length=2000, description="Meaning of this sense")
    partOfSpeech: str | None = Field(None, max_length=50)
    frequency: int | None = Field(None, ge=1, le=10, description="Commonness rank (10 = most common)")


class CardCreate(CardBase):
    """Model for adding a word sense to a collection."""

    key: str | None = Field(None, min_length=1, max_length=200, description="Sense key; derived when omitted")
    wordSenseId: str | None = None
    srsData: SRSData | None = Field(None, description="Imported scheduling state, if any")


class Card(CardBase):
    """A flashcard as held by the word store."""

    key: str = Field(..., min_length=1, description="Stable identifier, unique per sense")
    wordSenseId: str | None = Field(None, description="Dictionary sense identifier")
    inFlashcards: bool = Field(True, description="Whether the sense is in the learner's deck")
    srsData: SRSData | None = Field(None, description="Scheduling state; None = unschedulable")

    @field_validator("srsData", mode="wrap")
    @classmethod
    def _tolerate_bad_srs_data(cls, value: Any, handler: Any) -> SRSData | None:
        try:
            return handler(value)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable srsData ({e.error_count()} errors)")
            return None

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "key": "good1",
                "word": "good",
                "wordSenseId": "good1",
                "partOfSpeech": "adjective",
                "definition": "Having the required qualities; of a high standard",
                "frequency": 10,
                "inFlashcards": True,
                "srsData": {
                    "isNew": True,
                    "gotWrongThisSession": False,
                    "SRS_interval": 1,
                    "status": "new",
                    "correctCount": 0,
                    "incorrectCount": 0,
                    "dueDate": "2025-01-01T00:00:00.000+00:00",
                },
            }
        }


class CardListResponse(BaseModel):
    """Response containing a list of cards."""

    cards: list[Card]
    count: int
