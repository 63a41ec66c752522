"""
A single check-in flow as an explicit state machine:

    selecting_mood -> selecting_options -> showing_result -> completed
          ^                  |   ^               |               |
          +------ reset -----+   +---- back -----+               |
          +----------------------- reset ------------------------+

The reroll budget belongs to the flow and is refilled only when options are
confirmed again.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.core.config import settings
from app.core.errors import InvalidTransition, NoMatchFound
from app.data.activities import ActivityCatalog
from app.schemas.activity import Activity, Category, Mood, check_minutes
from app.services.history import CompletionHistory
from app.services.session_log import SessionLog
from app.services.suggestion import Picker, random_index, suggest

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = Category.MIND
DEFAULT_MINUTES = 5


class CheckinStage(str, Enum):
    SELECTING_MOOD = "selecting_mood"
    SELECTING_OPTIONS = "selecting_options"
    SHOWING_RESULT = "showing_result"
    COMPLETED = "completed"


@dataclass(slots=True)
class SessionState:
    stage: CheckinStage = CheckinStage.SELECTING_MOOD
    mood: Optional[Mood] = None
    category: Category = DEFAULT_CATEGORY
    minutes: int = DEFAULT_MINUTES
    activity: Optional[Activity] = None
    rerolls_left: int = 0
    last_shown_id: Optional[str] = None
    # Set when a reroll found no alternative to the current activity
    pool_exhausted: bool = False

    @property
    def can_reroll(self) -> bool:
        return self.stage == CheckinStage.SHOWING_RESULT and self.rerolls_left > 0 and not self.pool_exhausted


class CheckinSession:
    def __init__(
        self,
        catalog: ActivityCatalog,
        history: CompletionHistory,
        session_log: Optional[SessionLog] = None,
        *,
        picker: Picker = random_index,
        reroll_budget: int = settings.REROLL_BUDGET,
    ):
        self._catalog = catalog
        self._history = history
        self._session_log = session_log
        self._picker = picker
        self._reroll_budget = reroll_budget
        self.state = SessionState()
        # Held by the HTTP layer so one flow is never driven from two threads at once
        self.lock = threading.Lock()

    @property
    def stage(self) -> CheckinStage:
        return self.state.stage

    def _require(self, action: str, *stages: CheckinStage) -> None:
        if self.state.stage not in stages:
            raise InvalidTransition(self.state.stage.value, action)

    def _suggest(self, exclude_id: Optional[str]) -> Optional[Activity]:
        s = self.state
        return suggest(
            self._catalog, s.mood, s.category, s.minutes,
            history=self._history.snapshot(),
            exclude_id=exclude_id,
            picker=self._picker,
        )

    def select_mood(self, mood: Mood) -> SessionState:
        self._require("select a mood", CheckinStage.SELECTING_MOOD)
        self.state.mood = Mood(mood)
        self.state.stage = CheckinStage.SELECTING_OPTIONS
        return self.state

    def confirm(self, category: Category, minutes: int) -> Activity:
        """
        Start a new suggestion flow with the given options.
        Raises NoMatchFound (and stays on the options step) when nothing fits.
        """
        self._require("confirm options", CheckinStage.SELECTING_OPTIONS)
        s = self.state
        s.category = Category(category)
        s.minutes = check_minutes(minutes)
        s.rerolls_left = self._reroll_budget
        s.pool_exhausted = False

        activity = self._suggest(exclude_id=None)
        if activity is None:
            raise NoMatchFound(s.mood, s.category, s.minutes)

        s.activity = activity
        s.last_shown_id = activity.id
        s.stage = CheckinStage.SHOWING_RESULT
        return activity

    def reroll(self) -> Activity:
        """
        Swap the current activity for another one while budget remains.
        Without budget, or without an alternative, this is a no-op returning
        the current activity; the budget is only spent on a real swap.
        Once no alternative was found, rerolls stay off until the next confirm,
        even if history is cleared meanwhile.
        """
        self._require("reroll", CheckinStage.SHOWING_RESULT)
        s = self.state
        if s.rerolls_left <= 0 or s.pool_exhausted:
            return s.activity

        activity = self._suggest(exclude_id=s.last_shown_id)
        if activity is None or activity.id == s.activity.id:
            s.pool_exhausted = True
            logger.info("No alternative to %s for %s/%s/%s", s.activity.id, s.mood, s.category, s.minutes)
            return s.activity

        s.activity = activity
        s.last_shown_id = activity.id
        s.rerolls_left -= 1
        return activity

    def complete(self) -> Activity:
        self._require("complete", CheckinStage.SHOWING_RESULT)
        s = self.state
        self._history.record(s.activity.id)
        if self._session_log is not None:
            self._session_log.append(s.activity.id, s.mood)
        s.stage = CheckinStage.COMPLETED
        return s.activity

    def back_to_options(self) -> SessionState:
        """Leave the result for the options step, keeping mood and options."""
        self._require("go back to options", CheckinStage.SHOWING_RESULT)
        s = self.state
        s.activity = None
        s.last_shown_id = None
        s.rerolls_left = 0
        s.pool_exhausted = False
        s.stage = CheckinStage.SELECTING_OPTIONS
        return s

    def reset(self) -> SessionState:
        self._require(
            "reset",
            CheckinStage.SELECTING_MOOD, CheckinStage.SELECTING_OPTIONS, CheckinStage.COMPLETED,
        )
        self.state = SessionState()
        return self.state
