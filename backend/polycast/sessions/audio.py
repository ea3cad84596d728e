"""Ownership of the single current audio-playback handle."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class AudioHandle(Protocol):
    """Playback handle exposed by the audio collaborator."""

    currentTime: float

    def pause(self) -> None: ...


class AudioSlot:
    """Holds at most one playback handle.

    A handle is always paused and rewound before it is replaced or dropped.
    Failures inside the handle are logged and never reach scheduling state.
    """

    def __init__(self) -> None:
        self._handle: AudioHandle | None = None

    @property
    def handle(self) -> AudioHandle | None:
        return self._handle

    @property
    def is_active(self) -> bool:
        return self._handle is not None

    def stop(self) -> None:
        """Pause and rewind the current handle, then release it."""
        handle = self._handle
        if handle is None:
            return
        try:
            handle.pause()
            handle.currentTime = 0
        except Exception as e:
            logger.warning(f"Audio handle failed to stop: {e}")
        self._handle = None

    def replace(self, handle: AudioHandle) -> None:
        """Stop whatever is playing and take ownership of ``handle``."""
        self.stop()
        self._handle = handle
