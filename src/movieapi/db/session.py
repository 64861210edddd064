"""Database session management.

Provides a cached engine and session factory per database URL, with
SQLite thread-safety settings for FastAPI's threadpool.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from movieapi.db.schema import Base

# Default database URL
DEFAULT_DATABASE_URL = "sqlite:///data/movies.db"

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def get_engine(database_url: str | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by URL. For file-backed SQLite the parent
    directory is created on first use; in-memory SQLite gets a
    StaticPool so every session sees the same database.

    Args:
        database_url: SQLAlchemy URL. Defaults to sqlite:///data/movies.db.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if database_url is None:
        database_url = DEFAULT_DATABASE_URL

    if database_url in _engine_cache:
        return _engine_cache[database_url]

    url = make_url(database_url)
    kwargs: dict = {"echo": False}
    if url.get_backend_name() == "sqlite":
        # - check_same_thread=False: requests run on threadpool workers
        # - StaticPool: one shared connection, required for :memory:
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url, **kwargs)
    _engine_cache[database_url] = engine

    return engine


def _get_session_factory(database_url: str | None = None) -> sessionmaker:
    """Get cached session factory for the database."""
    if database_url is None:
        database_url = DEFAULT_DATABASE_URL

    if database_url in _session_factory_cache:
        return _session_factory_cache[database_url]

    factory = sessionmaker(bind=get_engine(database_url))
    _session_factory_cache[database_url] = factory

    return factory


def get_session(database_url: str | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use get_db_session() context manager instead.
    """
    factory = _get_session_factory(database_url)
    return factory()


@contextmanager
def get_db_session(database_url: str | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Example:
        with get_db_session() as session:
            repo.create_movie(session, entity)
            # Auto-commits on exit, rolls back on exception
    """
    session = get_session(database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: str | None = None) -> None:
    """Create the movies table if it does not exist.

    Call this once during application startup.
    """
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
