'''
Liveness and storage checks.
'''
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.api.deps import get_store
from app.db.session import get_db
from app.services.store import ResilientKeyValueStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SERVICE = "tiny-milestone-api"

@router.get("/health")
def health():
    """
    Simple health check. Does not require database connectivity.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "API is running",
        "service": SERVICE
    }

@router.get("/health/full")
def health_full(db: Session = Depends(get_db), store: ResilientKeyValueStore = Depends(get_store)):
    """
    Checks database connectivity and whether persistence has fallen back to memory.
    A failing database is reported, never raised: the API keeps working without it.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "unknown",
        "persistence": "memory" if store.degraded else "database",
        "service": SERVICE
    }

    try:
        db.execute(text("SELECT 1")).scalar()
        health_status["database"] = "connected"
    except Exception as e:
        logger.error("Database health check failed: %s", str(e))
        health_status["status"] = "degraded"
        health_status["database"] = "disconnected"
        health_status["error"] = str(e)

    if store.degraded:
        health_status["status"] = "degraded"
    return health_status
