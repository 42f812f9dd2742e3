"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from profile_api.core.config import Settings, get_settings

Base = declarative_base()


def _engine_options(url: str, *, pool_timeout: int, connect_timeout: int) -> dict:
    backend = make_url(url).get_backend_name()
    if backend == "sqlite":
        # sqlite waits on the database lock instead of a network connect
        return {"connect_args": {"timeout": connect_timeout, "check_same_thread": False}}
    return {"pool_timeout": pool_timeout, "connect_args": {"connect_timeout": connect_timeout}}


@lru_cache
def _build_engine(url: str, pool_timeout: int, connect_timeout: int) -> Engine:
    options = _engine_options(url, pool_timeout=pool_timeout, connect_timeout=connect_timeout)
    return create_engine(url, future=True, pool_pre_ping=True, **options)


def get_engine(settings: Settings | None = None) -> Engine:
    """Return the shared engine for ``settings`` (the environment when omitted)."""
    settings = settings or get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return _build_engine(url, settings.db_pool_timeout, settings.db_connect_timeout)


@lru_cache
def _sessionmaker_for(engine: Engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


def reset_engines() -> None:
    """Forget cached engines and session factories (callers dispose engines they hold)."""
    _sessionmaker_for.cache_clear()
    _build_engine.cache_clear()


@contextmanager
def get_session(settings: Settings | None = None) -> Iterator[Session]:
    session: Session = _sessionmaker_for(get_engine(settings))()
    try:
        yield session
    finally:
        session.close()
