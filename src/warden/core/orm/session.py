"""SQLAlchemy engine factory and transaction-scoped sessions.

This module provides:

* ``create_warden_engine``    -- Create a SA engine from a URL.
* ``WardenSession``           -- Session with ``expire_on_commit=False``.
* ``warden_session_factory``  -- ``sessionmaker`` producing ``WardenSession``.
* ``session_scope``           -- Context manager: one session, one
  transaction; commit on success, rollback on error, always closed.

Tags:
    orm, sqlalchemy, session, engine, unit-of-work
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def create_warden_engine(
    url: str = "sqlite:///warden.db",
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    pool_timeout: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql://…``, etc.)
    echo:
        If ``True``, log all SQL.
    pool_size, max_overflow, pool_timeout:
        Connection pool parameters (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``sqlalchemy.create_engine``.
    """

    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        in_memory = url in ("sqlite://", "sqlite:///:memory:")
        if in_memory:
            # Every session must see the same in-memory database
            kwargs.setdefault("poolclass", StaticPool)

        engine = _sa_create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if max_overflow is not None:
        pool_kwargs["max_overflow"] = max_overflow
    if pool_timeout is not None:
        pool_kwargs["pool_timeout"] = pool_timeout

    return _sa_create_engine(url, echo=echo, pool_pre_ping=True, **pool_kwargs, **kwargs)


class WardenSession(Session):
    """Pre-configured session with ``expire_on_commit=False``.

    Returned ORM objects stay readable after commit, so operations can
    build their response after the transaction has closed.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def warden_session_factory(engine: Engine) -> sessionmaker[WardenSession]:
    """Return a ``sessionmaker`` bound to *engine* that produces ``WardenSession`` instances."""
    return sessionmaker(bind=engine, class_=WardenSession)


@contextmanager
def session_scope(factory: sessionmaker[WardenSession]) -> Iterator[WardenSession]:
    """Provide a transactional scope around a series of operations.

    Usage::

        with session_scope(factory) as session:
            session.add(row)
        # committed here, or rolled back if the block raised
    """
    session = factory()
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()
