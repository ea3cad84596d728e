"""SRS settings: daily quotas and learning-step configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SRSSettings(BaseModel):
    """Per-profile spaced repetition preferences.

    Only ``newCardsPerDay`` drives the scheduler today; the remaining knobs
    are stored and validated for the settings screen.
    """

    # Daily limits
    newCardsPerDay: int = 5
    maxReviewsPerDay: int = 100

    # Learning steps (minutes)
    learningSteps: list[int] = Field(default_factory=lambda: [10])
    relearningSteps: list[int] = Field(default_factory=lambda: [10])

    # Graduation (days)
    graduatingInterval: int = 1
    easyInterval: int = 4

    # Ease
    startingEase: float = 2.5
    easyBonus: float = 1.3
    hardFactor: float = 1.2

    # Penalties
    lapseMultiplier: float = 0.5
    minimumInterval: int = 1

    # Advanced
    maximumInterval: int = 36500
    burySiblings: bool = False

    # UI preferences
    showNextReviewTime: bool = True
    showProgress: bool = True
    autoPlayAudio: bool = False


class SRSSettingsUpdate(BaseModel):
    """Partial settings payload; omitted fields keep their stored value."""

    newCardsPerDay: int | None = None
    maxReviewsPerDay: int | None = None
    learningSteps: list[int] | None = None
    relearningSteps: list[int] | None = None
    graduatingInterval: int | None = None
    easyInterval: int | None = None
    startingEase: float | None = None
    easyBonus: float | None = None
    hardFactor: float | None = None
    lapseMultiplier: float | None = None
    minimumInterval: int | None = None
    maximumInterval: int | None = None
    burySiblings: bool | None = None
    showNextReviewTime: bool | None = None
    showProgress: bool | None = None
    autoPlayAudio: bool | None = None


def _clamp(value: Any, low: float, high: float, default: float) -> Any:
    # Falsy values (0, None) fall back to the default before clamping.
    return max(low, min(high, value or default))


def _clamp_steps(steps: Any, fallback: list[int]) -> list[int]:
    if not isinstance(steps, list) or not steps:
        steps = fallback
    return [int(_clamp(step, 1, 10080, 1)) for step in steps]


def validate_settings(raw: dict[str, Any]) -> SRSSettings:
    """Clamp every bounded setting into its allowed range.

    Unknown keys are ignored and missing keys take their defaults.
    """
    merged = {**SRSSettings().model_dump(), **raw}

    merged["newCardsPerDay"] = int(_clamp(merged["newCardsPerDay"], 0, 50, 5))
    merged["maxReviewsPerDay"] = int(_clamp(merged["maxReviewsPerDay"], 10, 1000, 100))

    merged["learningSteps"] = _clamp_steps(merged["learningSteps"], [1, 10])
    merged["relearningSteps"] = _clamp_steps(merged["relearningSteps"], [10])

    merged["graduatingInterval"] = int(_clamp(merged["graduatingInterval"], 1, 30, 1))
    merged["easyInterval"] = int(_clamp(merged["easyInterval"], 2, 30, 4))

    merged["startingEase"] = _clamp(merged["startingEase"], 1.3, 5.0, 2.5)
    merged["easyBonus"] = _clamp(merged["easyBonus"], 1.1, 2.0, 1.3)
    merged["hardFactor"] = _clamp(merged["hardFactor"], 1.0, 1.5, 1.2)

    merged["lapseMultiplier"] = _clamp(merged["lapseMultiplier"], 0.1, 1.0, 0.5)
    merged["minimumInterval"] = int(_clamp(merged["minimumInterval"], 1, 10, 1))
    merged["maximumInterval"] = int(_clamp(merged["maximumInterval"], 365, 36500, 36500))

    return SRSSettings(**merged)
