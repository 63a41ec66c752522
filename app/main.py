from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from app.core.config import settings
from app.core.errors import InvalidTransition, NoMatchFound, SessionNotFound
from app.core.logging import configure_logging
from app.api.routes import health, activities, suggestions, sessions, data
from app.db.init_db import init_db
from app.schemas.common import ErrorResponse
import logging

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
    except Exception:
        # Storage is optional; the key-value store falls back to memory on first use
        logger.warning("Starting without a usable database")
    yield

def _error(status_code: int, error: str, detail: str | None, error_code: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, error_code=error_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(NoMatchFound)
    async def no_match_handler(request: Request, exc: NoMatchFound):
        logger.info("No match: %s", exc)
        return _error(404, exc.message, "Pick a different time or kind of reset and try again.", exc.error_code)

    @app.exception_handler(InvalidTransition)
    async def invalid_transition_handler(request: Request, exc: InvalidTransition):
        return _error(409, "Action not available right now", str(exc), exc.error_code)

    @app.exception_handler(SessionNotFound)
    async def session_not_found_handler(request: Request, exc: SessionNotFound):
        return _error(404, "Check-in session not found", str(exc), exc.error_code)

    @app.exception_handler(OperationalError)
    async def operational_error_handler(request: Request, exc: OperationalError):
        logger.error(f"Database operational error: {exc}")
        return _error(503, "Database connection error", "Unable to reach local storage. Please try again later.", "DATABASE_CONNECTION_ERROR")

    # routes
    app.include_router(health.router)
    app.include_router(activities.router)
    app.include_router(suggestions.router)
    app.include_router(sessions.router)
    app.include_router(data.router)
    return app

app = create_app()
