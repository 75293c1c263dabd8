"""SQLAlchemy engine, session factory and declarative base.

``get_db`` is the FastAPI dependency that yields one session per request
and always closes it afterwards.
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import get_settings

settings = get_settings()

# SQLite (local runs and tests) needs cross-thread access for FastAPI's
# threadpool; other drivers take no extra connect args.
_connect_args: dict = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

# An in-memory SQLite database lives inside one connection, so every
# session must share it.
_engine_kwargs: dict = (
    {"poolclass": StaticPool}
    if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:")
    else {"pool_pre_ping": True}
)

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args,
    **_engine_kwargs,
)

if settings.DATABASE_URL.startswith("sqlite"):

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
