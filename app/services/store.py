"""
Key-value persistence for the small amount of state the service keeps.

`SqlKeyValueStore` writes through SQLAlchemy. `ResilientKeyValueStore` wraps it
and, on the first storage failure, keeps serving from memory for the rest of
the process: history then simply does not survive a restart.
"""
from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Optional, Protocol

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from app.core.errors import PersistenceUnavailable
from app.repositories.kv_repo import delete_values, get_value, put_value

logger = logging.getLogger(__name__)

Updater = Callable[[Optional[Any]], Any]


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def update(self, key: str, fn: Updater) -> Any:
        """Atomically replace the value at `key` with `fn(current)` and return it."""
        ...

    def delete(self, *keys: str) -> None: ...


class MemoryKeyValueStore:
    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def update(self, key: str, fn: Updater) -> Any:
        with self._lock:
            new = fn(copy.deepcopy(self._data.get(key)))
            self._data[key] = copy.deepcopy(new)
            return new

    def delete(self, *keys: str) -> None:
        with self._lock:
            for k in keys:
                self._data.pop(k, None)


class SqlKeyValueStore:
    """
    Stores each value as JSON in the kv_entries table.
    Every call runs in its own session; `update` reads and writes in one transaction.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    # SQLite reports "database is locked" as OperationalError
    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(0.1),
        retry=retry_if_exception_type(OperationalError),
        reraise=True,
    )
    def _attempt(self, op: Callable[[Session], Any]) -> Any:
        with self._session_factory() as db:
            return op(db)

    def _run(self, op: Callable[[Session], Any]) -> Any:
        try:
            return self._attempt(op)
        except SQLAlchemyError as e:
            raise PersistenceUnavailable(str(e)) from e

    def get(self, key: str) -> Optional[Any]:
        return self._run(lambda db: get_value(db, key))

    def set(self, key: str, value: Any) -> None:
        self._run(lambda db: put_value(db, key, value))

    def update(self, key: str, fn: Updater) -> Any:
        def op(db: Session) -> Any:
            new = fn(get_value(db, key, for_update=True))
            put_value(db, key, new)
            return new
        return self._run(op)

    def delete(self, *keys: str) -> None:
        self._run(lambda db: delete_values(db, *keys))


class ResilientKeyValueStore:
    """
    Primary store with an in-memory mirror. Once the primary fails the store
    is degraded for the rest of the process and never touches it again.

    Every primary call and the mirror write that follows it happen under one
    lock, so a slow read can never put an older value back into the mirror.
    """

    def __init__(self, primary: KeyValueStore, fallback: Optional[MemoryKeyValueStore] = None):
        self._primary = primary
        self._memory = fallback or MemoryKeyValueStore()
        self._degraded = False
        self._lock = threading.RLock()

    @property
    def degraded(self) -> bool:
        return self._degraded

    def _degrade(self, exc: Exception) -> None:
        with self._lock:
            if self._degraded:
                return
            self._degraded = True
        logger.warning("Persistence unavailable, continuing in memory only: %s", exc)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            if not self._degraded:
                try:
                    value = self._primary.get(key)
                except PersistenceUnavailable as e:
                    self._degrade(e)
                else:
                    if value is None:
                        self._memory.delete(key)
                    else:
                        self._memory.set(key, value)
                    return value
            return self._memory.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._memory.set(key, value)
            if not self._degraded:
                try:
                    self._primary.set(key, value)
                except PersistenceUnavailable as e:
                    self._degrade(e)

    def update(self, key: str, fn: Updater) -> Any:
        with self._lock:
            if not self._degraded:
                try:
                    new = self._primary.update(key, fn)
                except PersistenceUnavailable as e:
                    self._degrade(e)
                else:
                    self._memory.set(key, new)
                    return new
            return self._memory.update(key, fn)

    def delete(self, *keys: str) -> None:
        with self._lock:
            self._memory.delete(*keys)
            if not self._degraded:
                try:
                    self._primary.delete(*keys)
                except PersistenceUnavailable as e:
                    self._degrade(e)
