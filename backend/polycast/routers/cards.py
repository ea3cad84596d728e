"""Cards API router (the profile's word collection)."""

from fastapi import APIRouter, HTTPException, status

from polycast.dependencies import CurrentProfile
from polycast.models import Card, CardCreate, CardListResponse
from polycast.repositories import CardNotFoundError, get_word_repository

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=CardListResponse)
async def list_cards(profile_id: CurrentProfile) -> CardListResponse:
    """List all cards in the profile's collection."""
    repo = get_word_repository()
    cards = repo.list_by_profile(profile_id)
    return CardListResponse(cards=cards, count=len(cards))


@router.get("/{key}", response_model=Card)
async def get_card(key: str, profile_id: CurrentProfile) -> Card:
    """Get a specific card by its sense key."""
    repo = get_word_repository()
    try:
        return repo.get_by_key(profile_id, key)
    except CardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card with key {key} not found",
        )


@router.post("", response_model=Card, status_code=status.HTTP_201_CREATED)
async def create_card(card_create: CardCreate, profile_id: CurrentProfile) -> Card:
    """Add a word sense to the collection as a new flashcard."""
    repo = get_word_repository()
    return repo.create(profile_id, card_create)


@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(key: str, profile_id: CurrentProfile) -> None:
    """Remove a word sense from the collection."""
    repo = get_word_repository()
    try:
        repo.delete(profile_id, key)
    except CardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card with key {key} not found",
        )
