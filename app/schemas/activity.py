from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

ALLOWED_MINUTES: tuple[int, ...] = (5, 10, 30, 60)


class Mood(str, Enum):
    SAD = "sad"
    BORED = "bored"
    ANXIOUS = "anxious"
    HAPPY = "happy"
    CALM = "calm"
    # Query wildcard only, never stored on an activity
    SURPRISE = "surprise"


class Category(str, Enum):
    MIND = "mind"
    MOVE = "move"


def check_minutes(value: int) -> int:
    if value not in ALLOWED_MINUTES:
        raise ValueError(f"minutes must be one of {ALLOWED_MINUTES}")
    return value


class Activity(BaseModel):
    """
    Immutable catalog entry.
    `durations` and `moods` are sets in meaning; they are normalised to tuples
    so serialised output is stable.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    prompt: str
    category: Category
    durations: tuple[int, ...]
    moods: tuple[Mood, ...]

    @field_validator("id", "title", "prompt")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("durations")
    @classmethod
    def _durations(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v:
            raise ValueError("durations must not be empty")
        for m in v:
            check_minutes(m)
        return tuple(sorted(set(v)))

    @field_validator("moods")
    @classmethod
    def _moods(cls, v: tuple[Mood, ...]) -> tuple[Mood, ...]:
        if not v:
            raise ValueError("moods must not be empty")
        if Mood.SURPRISE in v:
            raise ValueError("'surprise' is a query wildcard and cannot be stored on an activity")
        return tuple(dict.fromkeys(v))

    def supports(self, minutes: int) -> bool:
        return minutes in self.durations

    def fits_within(self, minutes: int) -> bool:
        return any(d <= minutes for d in self.durations)


class ActivityList(BaseModel):
    activities: list[Activity]
