"""
Database plumbing for the remote history store.

One engine per process, built lazily from DATABASE_URL and cached. Each store
call opens a short-lived session with ``get_session``. ``reset_engine`` drops
the cached engine so app shutdown and tests with a fresh DATABASE_URL start
clean.
"""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from creator_api.core.config import get_settings

Base = declarative_base()


@lru_cache
def get_engine():
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return create_engine(url, future=True, pool_pre_ping=True)


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session() -> Session:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose the cached engine and forget it (tests, settings reloads)."""
    if get_engine.cache_info().currsize:
        try:
            get_engine().dispose()
        except RuntimeError:
            pass
    get_engine.cache_clear()
    _get_sessionmaker.cache_clear()
