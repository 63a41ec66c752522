"""
Pytest configuration and shared fixtures for all tests.
"""
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.data.activities import ActivityCatalog
from app.db.models import Base
from app.main import create_app
from app.schemas.activity import Activity
from app.services.history import CompletionHistory
from app.services.registry import SessionRegistry
from app.services.session_log import SessionLog
from app.services.store import MemoryKeyValueStore, ResilientKeyValueStore, SqlKeyValueStore


class SequencePicker:
    """Deterministic stand-in for the random picker: replays indices, then repeats the last one."""

    def __init__(self, *indices: int):
        self.indices = list(indices) or [0]
        self.calls: list[int] = []

    def __call__(self, n: int) -> int:
        self.calls.append(n)
        if len(self.calls) <= len(self.indices):
            return self.indices[len(self.calls) - 1]
        return self.indices[-1]


def make_activity(id, category="mind", durations=(5,), moods=("happy",), title=None, prompt=None) -> Activity:
    return Activity(
        id=id,
        title=title or id.replace("-", " ").title(),
        prompt=prompt or f"Do {id}.",
        category=category,
        durations=list(durations),
        moods=list(moods),
    )


@pytest.fixture
def picker() -> SequencePicker:
    return SequencePicker(0)


@pytest.fixture
def small_catalog() -> ActivityCatalog:
    """Two mind activities and three move activities with overlapping moods and durations."""
    return ActivityCatalog([
        make_activity("mind-a", "mind", [5], ["happy"]),
        make_activity("mind-b", "mind", [5, 10], ["happy", "calm"]),
        make_activity("move-a", "move", [5], ["sad", "bored"]),
        make_activity("move-b", "move", [30], ["sad"]),
        make_activity("move-c", "move", [30, 60], ["sad", "calm"]),
    ])


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def history(memory_store) -> CompletionHistory:
    return CompletionHistory(memory_store, key="test-completed", limit=5)


@pytest.fixture
def session_log(memory_store) -> SessionLog:
    return SessionLog(memory_store, key="test-history", limit=50)


@pytest.fixture
def sqlite_session_factory() -> Iterator[sessionmaker]:
    """In-memory SQLite shared across threads, with tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(engine, expire_on_commit=False, class_=Session)
    engine.dispose()


@pytest.fixture
def sql_store(sqlite_session_factory) -> SqlKeyValueStore:
    return SqlKeyValueStore(sqlite_session_factory)


@pytest.fixture
def app_store(memory_store) -> ResilientKeyValueStore:
    return ResilientKeyValueStore(memory_store)


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def app(small_catalog, app_store, picker, registry):
    """Application wired to in-memory collaborators."""
    app = create_app()
    history = CompletionHistory(app_store, key="test-completed", limit=5)
    session_log = SessionLog(app_store, key="test-history", limit=50)

    app.dependency_overrides[deps.get_catalog] = lambda: small_catalog
    app.dependency_overrides[deps.get_store] = lambda: app_store
    app.dependency_overrides[deps.get_history] = lambda: history
    app.dependency_overrides[deps.get_session_log] = lambda: session_log
    app.dependency_overrides[deps.get_picker] = lambda: picker
    app.dependency_overrides[deps.get_registry] = lambda: registry
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def sync_client(app) -> Iterator[TestClient]:
    """Synchronous test client; lifespan (and so init_db) is not run."""
    yield TestClient(app)
