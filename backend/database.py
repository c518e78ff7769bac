# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy engine, session factory, declarative base, and the FastAPI
dependency that provides a DB session per request.
"""

from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from core.config import settings
from core.logger import logger


def _build_engine(url: str):
    """
    Create the engine for *url*.  SQLite needs its parent directory to exist,
    must be usable from FastAPI's worker threads, and only enforces
    ``ON DELETE CASCADE`` when foreign keys are switched on per connection.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    if parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    sqlite_engine = create_engine(url, connect_args={"check_same_thread": False})

    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = _build_engine(settings.sqlalchemy_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def utcnow() -> datetime:
    # Python-side timestamps keep microseconds; SQLite's CURRENT_TIMESTAMP
    # only has second resolution.
    return datetime.now(timezone.utc)


def get_db():
    """
    FastAPI dependency.  Yields a session for the duration of the request,
    then closes it.  Use with Depends(get_db).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables.  Existing tables are left untouched."""
    # Every ORM model must be imported so Base.metadata knows about it
    import models.user  # noqa: F401
    import models.todo  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialised at %s", engine.url.render_as_string(hide_password=True))
