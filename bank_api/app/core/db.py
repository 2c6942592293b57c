from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure models register with metadata
from .config import get_settings


def _serialize_sqlite_transactions(engine: Engine) -> None:
    # SQLite ignores FOR UPDATE; taking the write lock at BEGIN serializes
    # read-check-write sequences the same way row locks do.
    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine_for_url(
    database_url: str, lock_timeout_seconds: float | None = None
) -> Engine:
    if lock_timeout_seconds is None:
        lock_timeout_seconds = get_settings().lock_timeout_seconds

    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": lock_timeout_seconds}
    elif database_url.startswith("postgresql"):
        timeout_ms = int(lock_timeout_seconds * 1000)
        connect_args = {"options": f"-c lock_timeout={timeout_ms}"}

    engine = create_engine(
        database_url, echo=False, connect_args=connect_args, pool_pre_ping=True
    )
    if database_url.startswith("sqlite"):
        _serialize_sqlite_transactions(engine)
    return engine


settings = get_settings()
engine = create_engine_for_url(settings.database_url, settings.lock_timeout_seconds)


def init_db() -> None:
    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine, expire_on_commit=False) as session:
        yield session


def set_engine(new_engine: Engine) -> None:
    global engine
    engine = new_engine
