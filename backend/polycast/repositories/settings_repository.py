"""Repository for per-profile SRS settings."""

import threading
from typing import Any

from polycast.models import SRSSettings, validate_settings


class SettingsRepository:
    """In-memory settings store. Values are validated on every save."""

    def __init__(self):
        self._settings: dict[str, SRSSettings] = {}
        self._lock = threading.Lock()

    def get(self, profile_id: str) -> SRSSettings:
        """Current settings for a profile, defaults when nothing was saved."""
        with self._lock:
            stored = self._settings.get(profile_id)
            return stored.model_copy() if stored is not None else SRSSettings()

    def save(self, profile_id: str, raw: dict[str, Any]) -> SRSSettings:
        """Validate and store a full or partial settings payload."""
        current = self.get(profile_id).model_dump()
        validated = validate_settings({**current, **raw})
        with self._lock:
            self._settings[profile_id] = validated
        return validated.model_copy()

    def update(self, profile_id: str, key: str, value: Any) -> SRSSettings:
        """Update a single setting."""
        return self.save(profile_id, {key: value})

    def reset(self, profile_id: str) -> SRSSettings:
        """Forget saved settings; the profile falls back to defaults."""
        with self._lock:
            self._settings.pop(profile_id, None)
        return SRSSettings()

    def clear(self) -> None:
        """Drop every profile (for testing)."""
        with self._lock:
            self._settings.clear()


# Singleton instance
_settings_repository: SettingsRepository | None = None


def get_settings_repository() -> SettingsRepository:
    """Get the settings repository singleton."""
    global _settings_repository
    if _settings_repository is None:
        _settings_repository = SettingsRepository()
    return _settings_repository


def reset_settings_repository() -> None:
    """Reset the settings repository (for testing)."""
    global _settings_repository
    _settings_repository = None
