"""API routers module."""

from .cards import router as cards_router
from .settings import router as settings_router
from .seed import router as seed_router
from .study import router as study_router

__all__ = [
    "cards_router",
    "settings_router",
    "seed_router",
    "study_router",
]
