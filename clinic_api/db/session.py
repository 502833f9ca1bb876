"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from clinic_api.core.config import get_settings

Base = declarative_base()


def _resolve_url(url: str | None) -> str:
    value = (url or get_settings().database_url or "").strip()
    if not value:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return value


@lru_cache
def _engine_for(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # handlers run in FastAPI's threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


def get_engine(url: str | None = None) -> Engine:
    return _engine_for(_resolve_url(url))


@lru_cache
def _get_sessionmaker(url: str) -> sessionmaker:
    return sessionmaker(bind=_engine_for(url), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session(url: str | None = None) -> Iterator[Session]:
    session: Session = _get_sessionmaker(_resolve_url(url))()
    try:
        yield session
    finally:
        session.close()

