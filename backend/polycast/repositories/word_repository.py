"""Repository for a profile's word senses (the flashcard pool)."""

import threading
from datetime import datetime

from polycast.models import Card, CardCreate, new_srs_data
from polycast.srs.time import local_now


class CardNotFoundError(Exception):
    """Raised when a card is not found."""

    pass


class WordRepository:
    """In-memory word store keyed by profile, then by sense key.

    Cards are stored and returned as copies, so callers persist changes by
    handing an updated card back through ``add``.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._words: dict[str, dict[str, Card]] = {}
        self._lock = threading.Lock()

    def list_by_profile(self, profile_id: str) -> list[Card]:
        """List every card in a profile, in insertion order."""
        with self._lock:
            return [card.model_copy(deep=True) for card in self._words.get(profile_id, {}).values()]

    def list_flashcards(self, profile_id: str) -> list[Card]:
        """List the cards the learner has put in their flashcard deck."""
        return [card for card in self.list_by_profile(profile_id) if card.inFlashcards]

    def get_by_key(self, profile_id: str, key: str) -> Card:
        """Get a card by its sense key."""
        with self._lock:
            card = self._words.get(profile_id, {}).get(key)
            if card is None:
                raise CardNotFoundError(f"Card with key {key} not found")
            return card.model_copy(deep=True)

    def create(self, profile_id: str, card_create: CardCreate, now: datetime | None = None) -> Card:
        """Add a word sense; new senses start as new cards due now."""
        key = card_create.key or card_create.wordSenseId or card_create.word
        srs_data = card_create.srsData or new_srs_data(now or local_now())
        card = Card(
            key=key,
            word=card_create.word,
            wordSenseId=card_create.wordSenseId or key,
            definition=card_create.definition,
            partOfSpeech=card_create.partOfSpeech,
            frequency=card_create.frequency,
            srsData=srs_data,
        )
        return self.add(profile_id, card)

    def add(self, profile_id: str, card: Card) -> Card:
        """Store a fully formed card, overwriting any card with the same key."""
        with self._lock:
            self._words.setdefault(profile_id, {})[card.key] = card.model_copy(deep=True)
        return card

    def delete(self, profile_id: str, key: str) -> None:
        """Remove a word sense from the collection."""
        with self._lock:
            words = self._words.get(profile_id, {})
            if key not in words:
                raise CardNotFoundError(f"Card with key {key} not found")
            del words[key]

    def clear(self) -> None:
        """Drop every profile (for testing)."""
        with self._lock:
            self._words.clear()


# Singleton instance
_word_repository: WordRepository | None = None


def get_word_repository() -> WordRepository:
    """Get the word repository singleton."""
    global _word_repository
    if _word_repository is None:
        _word_repository = WordRepository()
    return _word_repository


def reset_word_repository() -> None:
    """Reset the word repository (for testing)."""
    global _word_repository
    _word_repository = None
