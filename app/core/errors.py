"""
Domain errors raised by the services and translated to HTTP responses in app.main.
"""
from __future__ import annotations

from typing import Any


class TinyMilestoneError(Exception):
    """Base class for every error this service raises on purpose."""

    error_code = "INTERNAL_ERROR"


class NoMatchFound(TinyMilestoneError):
    """
    The duration stage left no candidates for the requested filters.
    Retryable: the user can pick another duration or category.
    """

    error_code = "NO_MATCH"
    message = "No matching activities found for these filters. Try adjusting the time!"

    def __init__(self, mood: Any, category: Any, minutes: int):
        self.mood = mood
        self.category = category
        self.minutes = minutes
        super().__init__(f"no activity for mood={mood} category={category} minutes={minutes}")


class InvalidTransition(TinyMilestoneError):
    error_code = "INVALID_TRANSITION"

    def __init__(self, stage: Any, action: str):
        self.stage = stage
        self.action = action
        super().__init__(f"cannot {action} while {stage}")


class SessionNotFound(TinyMilestoneError):
    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: Any):
        self.session_id = session_id
        super().__init__(f"session {session_id} not found or expired")


class PersistenceUnavailable(TinyMilestoneError):
    """Storage read/write failed. Never surfaced to users."""

    error_code = "PERSISTENCE_UNAVAILABLE"
