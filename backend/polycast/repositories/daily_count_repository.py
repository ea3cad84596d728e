"""Per-profile count of new cards introduced each calendar day."""

import threading
from datetime import date


class DailyCountRepository:
    """Tracks how many new cards a profile has started on a given day."""

    def __init__(self):
        self._counts: dict[tuple[str, date], int] = {}
        self._lock = threading.Lock()

    def get_new_cards(self, profile_id: str, day: date) -> int:
        with self._lock:
            return self._counts.get((profile_id, day), 0)

    def increment_new_cards(self, profile_id: str, day: date) -> int:
        """Record one more new card for the day; returns the new total."""
        with self._lock:
            key = (profile_id, day)
            self._counts[key] = self._counts.get(key, 0) + 1
            return self._counts[key]

    def clear(self) -> None:
        """Drop every count (for testing)."""
        with self._lock:
            self._counts.clear()


# Singleton instance
_daily_count_repository: DailyCountRepository | None = None


def get_daily_count_repository() -> DailyCountRepository:
    """Get the daily count repository singleton."""
    global _daily_count_repository
    if _daily_count_repository is None:
        _daily_count_repository = DailyCountRepository()
    return _daily_count_repository


def reset_daily_count_repository() -> None:
    """Reset the daily count repository (for testing)."""
    global _daily_count_repository
    _daily_count_repository = None
