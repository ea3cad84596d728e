"""SRS settings API router."""

from fastapi import APIRouter

from polycast.dependencies import CurrentProfile
from polycast.models import SRSSettings, SRSSettingsUpdate
from polycast.repositories import get_settings_repository

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SRSSettings)
async def get_settings(profile_id: CurrentProfile) -> SRSSettings:
    """Current SRS settings for the profile."""
    return get_settings_repository().get(profile_id)


@router.put("", response_model=SRSSettings)
async def save_settings(update: SRSSettingsUpdate, profile_id: CurrentProfile) -> SRSSettings:
    """Save settings; out-of-range values are clamped rather than rejected."""
    return get_settings_repository().save(profile_id, update.model_dump(exclude_none=True))


@router.delete("", response_model=SRSSettings)
async def reset_settings(profile_id: CurrentProfile) -> SRSSettings:
    """Restore the default settings."""
    return get_settings_repository().reset(profile_id)
