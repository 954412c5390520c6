"""
Taskboard Database Session Management.

Provides the single entry point for DB initialisation plus a context
manager for unit-of-work access.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.db.base import Base

logger = logging.getLogger("taskboard.db.session")

_engine: Optional[Engine] = None
_session_factory: Optional[scoped_session] = None


def init_db(
    db_url: str,
    create_tables: bool = False,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 20,
    pool_timeout: int = 30,
    pool_recycle: int = 1800,
    pool_pre_ping: bool = True,
) -> sessionmaker:
    """
    Single entry point for database initialisation.

    All callers (app boot, ``taskboard init`` CLI, tests) go through here.

    1. Creates the engine. SQLite URLs get ``check_same_thread=False`` (server
       actions run in worker threads) and foreign key enforcement; in-memory
       SQLite shares one connection so every session sees the same data.
    2. Optionally runs ``Base.metadata.create_all()``.
    3. Stores a thread-safe ``scoped_session`` factory used by
       ``get_session()``.

    Returns:
        A plain ``sessionmaker`` bound to the engine.
    """
    global _engine, _session_factory

    if _engine is not None:
        close_all_sessions()

    kwargs: dict[str, Any] = {"echo": echo}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url or db_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            pool_pre_ping=pool_pre_ping,
        )

    engine = create_engine(db_url, **kwargs)

    if db_url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    if create_tables:
        Base.metadata.create_all(engine)
        logger.info("Database tables created")

    factory = sessionmaker(bind=engine, expire_on_commit=False)
    _engine = engine
    _session_factory = scoped_session(factory)
    return factory


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _engine


def get_session() -> Session:
    """Get a session for the current thread."""
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _session_factory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Context manager for DB sessions with auto-commit/rollback.

    Usage:
        with session_scope() as session:
            task = session.get(Task, task_id)
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def close_all_sessions() -> None:
    """Close all sessions and dispose the engine. Used during shutdown."""
    global _engine, _session_factory
    if _session_factory is not None:
        _session_factory.remove()
        _session_factory = None
    if _engine is not None:
        _engine.dispose()
        _engine = None
