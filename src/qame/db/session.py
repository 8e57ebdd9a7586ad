"""SQLite engine and session helpers for the evaluation store.

One engine per database file is shared by every request; the API opens a
short-lived session per request on top of it.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from qame.db.schema import Base

DB_PATH_ENV = "QAME_DB_PATH"

# Keyed by absolute database path
_engines: dict[str, Engine] = {}
_session_factories: dict[str, sessionmaker] = {}


def default_db_path() -> Path:
    """Database path from ``QAME_DB_PATH``, or data/qame.db."""
    return Path(os.environ.get(DB_PATH_ENV, "data/qame.db"))


def _resolve(db_path: Path | None) -> tuple[Path, str]:
    """Return the database path and the key it is cached under."""
    path = Path(db_path) if db_path is not None else default_db_path()
    return path, str(path.resolve())


def get_engine(db_path: Path | None = None) -> Engine:
    """Return the engine for a database file, creating it on first use.

    The first call for a path also creates the file's directory. The
    engine holds one connection that any thread may use, which is what
    FastAPI's threadpool needs from SQLite.

    Args:
        db_path: SQLite file. Defaults to default_db_path().

    Returns:
        The engine shared by all callers for this file.
    """
    path, key = _resolve(db_path)
    engine = _engines.get(key)
    if engine is not None:
        return engine

    path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        f"sqlite:///{path}",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _engines[key] = engine
    return engine


def _get_session_factory(db_path: Path | None = None) -> sessionmaker:
    path, key = _resolve(db_path)
    if key not in _session_factories:
        _session_factories[key] = sessionmaker(bind=get_engine(path))
    return _session_factories[key]


def get_session(db_path: Path | None = None) -> Session:
    """Open a new session bound to the database file.

    The session is not closed for you; prefer get_db_session() unless
    the caller manages the lifetime itself.
    """
    return _get_session_factory(db_path)()


@contextmanager
def get_db_session(db_path: Path | None = None) -> Generator[Session, None, None]:
    """Yield a session that commits when the block finishes.

    Any exception raised inside the block discards pending writes and is
    re-raised. The session is closed either way.

    Example:
        with get_db_session() as session:
            repo.create_access_code(session, AccessCodeEntity(code="..."))
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
    """Create any missing tables. Run once when the app starts."""
    Base.metadata.create_all(get_engine(db_path))
