from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from typing import Any, Optional

from app.core.config import settings
from app.schemas.activity import Mood
from app.services.store import KeyValueStore
from app.utils.time import epoch_millis

logger = logging.getLogger(__name__)


class SessionLog:
    """
    Background record of completed check-ins, newest first.
    Nothing in the suggestion path reads it back.
    """

    def __init__(self, store: KeyValueStore, *, key: str = settings.SESSION_LOG_KEY, limit: int = settings.SESSION_LOG_LIMIT):
        self._store = store
        self._key = key
        self._limit = limit
        self._lock = threading.Lock()

    def append(self, activity_id: str, mood: Optional[Mood], *, now: Optional[datetime] = None) -> dict[str, Any]:
        entry = {
            "id": str(uuid.uuid4()),
            "activity_id": activity_id,
            "timestamp": epoch_millis(now),
            "mood": mood.value if mood is not None else None,
        }
        limit = self._limit

        def prepend(raw: Optional[Any]) -> list[dict[str, Any]]:
            current = raw if isinstance(raw, list) else []
            return ([entry] + current)[:limit]

        with self._lock:
            self._store.update(self._key, prepend)
        return entry

    def entries(self) -> list[dict[str, Any]]:
        raw = self._store.get(self._key)
        return raw if isinstance(raw, list) else []

    def clear(self) -> None:
        with self._lock:
            self._store.delete(self._key)
        logger.info("Session log cleared")
