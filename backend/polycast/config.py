"""Application configuration loaded from environment variables."""

import os
from functools import lru_cache

from pydantic import BaseModel


class AppSettings(BaseModel):
    """Service settings loaded from environment variables."""

    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    log_level: str = "INFO"

    # Study sessions expire after this much inactivity (sliding window)
    session_ttl_seconds: int = 30 * 60
    session_max: int = 10000

    # Card transition staging (flip reset, then card enter)
    flip_delay_ms: int = 200
    card_enter_delay_ms: int = 200

    @property
    def flip_delay_seconds(self) -> float:
        return self.flip_delay_ms / 1000

    @property
    def card_enter_delay_seconds(self) -> float:
        return self.card_enter_delay_ms / 1000


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


@lru_cache()
def get_app_settings() -> AppSettings:
    """Get cached application settings from environment variables."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

    return AppSettings(
        cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        session_ttl_seconds=_int_env("SESSION_TTL_SECONDS", 30 * 60),
        session_max=_int_env("SESSION_MAX", 10000),
        flip_delay_ms=_int_env("FLIP_DELAY_MS", 200),
        card_enter_delay_ms=_int_env("CARD_ENTER_DELAY_MS", 200),
    )
