"""Seed API router for populating a profile with demo flashcards."""

from datetime import datetime, timedelta

from fastapi import APIRouter, status
from pydantic import BaseModel

from polycast.dependencies import CurrentProfile
from polycast.models import Card, SRSData, new_srs_data
from polycast.repositories import get_word_repository
from polycast.srs.time import local_now

router = APIRouter(prefix="/seed", tags=["seed"])


# (word, part of speech, definition, frequency)
SAMPLE_NEW_WORDS = [
    ("good", "adjective", "Having the required qualities; of a high standard", 10),
    ("water", "noun", "A clear liquid essential for life", 9),
    ("time", "noun", "The indefinite continued progress of existence", 9),
    ("house", "noun", "A building for human habitation", 8),
    ("love", "verb", "To feel deep affection for someone or something", 8),
    ("school", "noun", "An institution for educating children", 8),
    ("car", "noun", "A motor vehicle with four wheels", 7),
    ("happy", "adjective", "Feeling or showing pleasure or contentment", 7),
    ("friend", "noun", "A person you like and know well", 7),
    ("learn", "verb", "To acquire knowledge or skill through study or experience", 6),
]

# (word, part of speech, definition, frequency, status, interval, correct count, due offset)
SAMPLE_STUDIED_WORDS = [
    ("eat", "verb", "To consume food", 9, "review", 3, 2, timedelta(hours=-2)),
    ("run", "verb", "To move quickly on foot", 7, "learning", 2, 1, timedelta(minutes=5)),
    ("food", "noun", "Any nutritious substance that people or animals eat", 8, "learning", 2, 1, timedelta(minutes=45)),
    ("book", "noun", "A written work published in printed or electronic form", 7, "learning", 2, 1, timedelta(hours=3)),
    ("work", "verb", "To be engaged in physical or mental activity", 7, "review", 3, 2, timedelta(hours=6)),
    ("walk", "verb", "To move at a regular pace by lifting and setting down each foot in turn", 8, "review", 4, 3, timedelta(days=1)),
]


def build_sample_cards(now: datetime) -> list[Card]:
    """Demo pool: ten unseen words plus six already in rotation."""
    cards = []
    for word, part_of_speech, definition, frequency in SAMPLE_NEW_WORDS:
        cards.append(
            Card(
                key=f"{word}1",
                word=word,
                wordSenseId=f"{word}1",
                partOfSpeech=part_of_speech,
                definition=definition,
                frequency=frequency,
                srsData=new_srs_data(now),
            )
        )

    for word, part_of_speech, definition, frequency, card_status, interval, correct, due_offset in SAMPLE_STUDIED_WORDS:
        last_seen = now - timedelta(days=1)
        cards.append(
            Card(
                key=f"{word}1",
                word=word,
                wordSenseId=f"{word}1",
                partOfSpeech=part_of_speech,
                definition=definition,
                frequency=frequency,
                srsData=SRSData(
                    isNew=False,
                    gotWrongThisSession=False,
                    SRS_interval=interval,
                    status=card_status,
                    correctCount=correct,
                    incorrectCount=0,
                    dueDate=now + due_offset,
                    lastReviewDate=last_seen,
                    lastSeen=last_seen,
                ),
            )
        )
    return cards


class SeedResponse(BaseModel):
    """Response from seed operation."""

    message: str
    cards_created: int


@router.post("", response_model=SeedResponse, status_code=status.HTTP_201_CREATED)
async def seed_sample_data(profile_id: CurrentProfile) -> SeedResponse:
    """Load the demo flashcards into the current profile."""
    repo = get_word_repository()

    cards_created = 0
    for card in build_sample_cards(local_now()):
        repo.add(profile_id, card)
        cards_created += 1

    return SeedResponse(
        message="Sample flashcards created successfully",
        cards_created=cards_created,
    )
