from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from app.core.config import settings
from app.core.errors import SessionNotFound
from app.services.checkin import CheckinSession
from app.utils.time import add_minutes, is_past, utcnow

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Active check-in flows keyed by id. Sessions are transient: they live in
    memory only and are dropped after `ttl_minutes` without activity.
    """

    def __init__(self, *, ttl_minutes: int = settings.SESSION_TTL_MINUTES, clock: Callable[[], datetime] = utcnow):
        self._ttl = ttl_minutes
        self._clock = clock
        self._sessions: dict[UUID, tuple[CheckinSession, datetime]] = {}
        self._lock = threading.Lock()

    def _sweep(self, now: datetime) -> None:
        expired = [sid for sid, (_, seen) in self._sessions.items() if is_past(add_minutes(seen, self._ttl), now=now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug("Expired %s idle check-in sessions", len(expired))

    def add(self, session: CheckinSession) -> UUID:
        sid = uuid.uuid4()
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._sessions[sid] = (session, now)
        return sid

    def get(self, session_id: UUID) -> CheckinSession:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            entry = self._sessions.get(session_id)
            if entry is None:
                raise SessionNotFound(session_id)
            session = entry[0]
            self._sessions[session_id] = (session, now)
        return session

    def discard(self, session_id: UUID) -> Optional[CheckinSession]:
        with self._lock:
            entry = self._sessions.pop(session_id, None)
        return entry[0] if entry else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
