from functools import lru_cache
from app.data.activities import ActivityCatalog, default_catalog
from app.db.session import SessionLocal
from app.services.history import CompletionHistory
from app.services.registry import SessionRegistry
from app.services.session_log import SessionLog
from app.services.store import ResilientKeyValueStore, SqlKeyValueStore
from app.services.suggestion import Picker, random_index

# Process-wide singletons; tests swap them through app.dependency_overrides

def get_catalog() -> ActivityCatalog:
    return default_catalog()

@lru_cache(maxsize=1)
def get_store() -> ResilientKeyValueStore:
    return ResilientKeyValueStore(SqlKeyValueStore(SessionLocal))

@lru_cache(maxsize=1)
def get_history() -> CompletionHistory:
    return CompletionHistory(get_store())

@lru_cache(maxsize=1)
def get_session_log() -> SessionLog:
    return SessionLog(get_store())

@lru_cache(maxsize=1)
def get_registry() -> SessionRegistry:
    return SessionRegistry()

def get_picker() -> Picker:
    return random_index
