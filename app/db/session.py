import logging
from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)


def make_engine(url: str) -> Engine:
    """
    Build an engine for `url`. SQLite connections are shared across the
    thread pool FastAPI runs sync routes in.
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, echo=False, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL)
logger.info("Database URL: %s", engine.url.render_as_string(hide_password=True))

SessionLocal = sessionmaker(engine, expire_on_commit=False, class_=Session)


def get_db() -> Iterator[Session]:
    """
    Dependency that provides a database session.
    """
    with SessionLocal() as session:
        yield session
