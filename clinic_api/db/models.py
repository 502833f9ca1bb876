"""SQLAlchemy models mirroring the JSON documents of the file store."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, JSON, String, func

from .session import Base


class StoredDocument(Base):
    """One serialized collection (or the counters record) per key."""

    __tablename__ = "documents"

    key = Column(String(64), primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
