"""Database session management.

Provides session factory for SQLite database access with proper
thread-safety for FastAPI concurrency.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from spinwheel.db.schema import Base

# Default database path, overridable with SPINWHEEL_DB_PATH
DEFAULT_DB_PATH = Path("data/spinwheel.db")

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def resolve_db_path(db_path: Path | None = None) -> Path:
    """Resolve the database path.

    Explicit argument wins, then SPINWHEEL_DB_PATH, then DEFAULT_DB_PATH.
    """
    if db_path is not None:
        return Path(db_path)
    env_path = os.environ.get("SPINWHEEL_DB_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_DB_PATH


def get_engine(db_path: Path | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by resolved db_path to enable connection pooling.
    Subsequent calls with the same path return the cached engine.

    Args:
        db_path: Path to SQLite database file.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    db_path = resolve_db_path(db_path)
    cache_key = str(db_path.resolve())

    if cache_key in _engine_cache:
        return _engine_cache[cache_key]

    # Create parent directories only when creating a new engine
    db_path.parent.mkdir(parents=True, exist_ok=True)

    # SQLite thread-safety config for FastAPI concurrency
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _engine_cache[cache_key] = engine

    return engine


def _get_session_factory(db_path: Path | None = None) -> sessionmaker:
    """Get cached session factory for the database."""
    db_path = resolve_db_path(db_path)
    cache_key = str(db_path.resolve())

    if cache_key in _session_factory_cache:
        return _session_factory_cache[cache_key]

    engine = get_engine(db_path)
    factory = sessionmaker(bind=engine)
    _session_factory_cache[cache_key] = factory

    return factory


def get_session(db_path: Path | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use get_db_session() context manager instead.
    """
    factory = _get_session_factory(db_path)
    return factory()


@contextmanager
def get_db_session(db_path: Path | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Example:
        with get_db_session() as session:
            repo.append_spin(session, record)
    """
    session = get_session(db_path)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(db_path: Path | None = None) -> None:
    """Initialize database schema.

    Call this once during application startup to create tables.
    """
    engine = get_engine(db_path)
    Base.metadata.create_all(engine)


def dispose_engines() -> None:
    """Dispose every cached engine and forget cached factories."""
    for engine in _engine_cache.values():
        engine.dispose()
    _engine_cache.clear()
    _session_factory_cache.clear()
