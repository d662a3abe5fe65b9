"""Database connection and session management.

The connection URL is ``STUDYTIMER_DATABASE_URL`` when set, otherwise a
SQLite file in the app data directory.  Session writes arrive from Qt's
thread pool, so SQLite connections are opened with
``check_same_thread=False`` and an in-memory database is held on a single
shared connection that every thread sees.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session as OrmSession
from sqlalchemy.pool import StaticPool

from ..settings import APP_DATA_DIR
from .models import Base

logger = logging.getLogger(__name__)

DB_PATH = APP_DATA_DIR / "studytimer.db"
DATABASE_URL_ENV = "STUDYTIMER_DATABASE_URL"

_engine: Optional[Engine] = None
_SessionFactory: Optional[sessionmaker] = None


def database_url() -> str:
    return os.environ.get(DATABASE_URL_ENV) or f"sqlite:///{DB_PATH}"


def _make_engine(url: str) -> Engine:
    parsed = make_url(url)
    options: dict = {}
    if parsed.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        else:
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Opening database %s", parsed.render_as_string(hide_password=True))
    return create_engine(parsed, **options)


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = _make_engine(database_url())
    return _engine


def _get_session_factory() -> sessionmaker:
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Point the app at *url*, closing any previous connection pool.
    Tests use ``sqlite:///:memory:``."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _SessionFactory = None
    _engine = _make_engine(url)


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(_get_engine())


@contextmanager
def get_session() -> Iterator[OrmSession]:
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    session: OrmSession = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
