"""Pytest configuration and fixtures."""

import os

import pytest

# Card transitions are instant during tests
os.environ.setdefault("FLIP_DELAY_MS", "0")
os.environ.setdefault("CARD_ENTER_DELAY_MS", "0")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Give every test empty stores."""
    from polycast.repositories.daily_count_repository import reset_daily_count_repository
    from polycast.repositories.settings_repository import reset_settings_repository
    from polycast.repositories.word_repository import reset_word_repository
    from polycast.sessions.controller import reset_session_controller
    from polycast.sessions.session_store import reset_session_store

    for reset in (
        reset_word_repository,
        reset_settings_repository,
        reset_daily_count_repository,
        reset_session_store,
        reset_session_controller,
    ):
        reset()
    yield
