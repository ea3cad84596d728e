"""Repositories module for data access layer."""

from .word_repository import (
    WordRepository,
    CardNotFoundError,
    get_word_repository,
)
from .settings_repository import (
    SettingsRepository,
    get_settings_repository,
)
from .daily_count_repository import (
    DailyCountRepository,
    get_daily_count_repository,
)

__all__ = [
    "WordRepository",
    "CardNotFoundError",
    "get_word_repository",
    "SettingsRepository",
    "get_settings_repository",
    "DailyCountRepository",
    "get_daily_count_repository",
]
