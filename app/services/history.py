from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from app.core.config import settings
from app.services.store import KeyValueStore

logger = logging.getLogger(__name__)


def _as_ids(raw: Optional[Any]) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Ignoring malformed completion history: %r", raw)
        return []
    return [x for x in raw if isinstance(x, str)]


class CompletionHistory:
    """
    The most recently completed activity ids, most recent first.
    Read by the suggestion engine (as a snapshot) to avoid repeats.
    """

    def __init__(self, store: KeyValueStore, *, key: str = settings.HISTORY_KEY, limit: int = settings.HISTORY_LIMIT):
        self._store = store
        self._key = key
        self._limit = limit
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    def record(self, activity_id: str) -> list[str]:
        """
        Prepend `activity_id` and keep the newest `limit` ids.
        Recording the same id again just moves it back to the front.
        """
        limit = self._limit

        def prepend(raw: Optional[Any]) -> list[str]:
            return ([activity_id] + _as_ids(raw))[:limit]

        with self._lock:
            ids = self._store.update(self._key, prepend)
        logger.info("Recorded completion of %s", activity_id)
        return list(ids)

    def snapshot(self) -> list[str]:
        return _as_ids(self._store.get(self._key))

    def clear(self) -> None:
        with self._lock:
            self._store.delete(self._key)
        logger.info("Completion history cleared")
