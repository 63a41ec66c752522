from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import JSON, DateTime, String, func
from datetime import datetime
from typing import Any, Optional

class Base(DeclarativeBase):
    pass

class KeyValue(Base):
    """One persisted JSON value per key (completion history, session log)."""
    __tablename__ = "kv_entries"
    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
