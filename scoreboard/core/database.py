"""Database configuration and engine helpers."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine

from .config import DATABASE_URL, DB_TIMEOUT_SEC


def _enable_wal(dbapi_connection, connection_record) -> None:
    # WAL lets leaderboard reads proceed while a submission burst holds the writer lock.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(url: str = DATABASE_URL, *, timeout: float = DB_TIMEOUT_SEC) -> Engine:
    """Create an engine for ``url``.

    SQLite files get their parent directory created, a busy timeout of
    ``timeout`` seconds and WAL journaling on every new connection.
    """

    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    database = parsed.database
    on_disk = bool(database) and database != ":memory:"
    if on_disk:
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        url, connect_args={"check_same_thread": False, "timeout": timeout}
    )
    if on_disk:
        event.listen(engine, "connect", _enable_wal)
    return engine


def create_tables(bind: Engine, *, reset: bool = False) -> None:
    """Create the schema, dropping it first when ``reset`` is set."""

    from .. import models  # noqa: F401 - ensure models are registered with SQLModel

    if reset:
        SQLModel.metadata.drop_all(bind)
    SQLModel.metadata.create_all(bind)


engine = build_engine()


__all__ = ["build_engine", "create_tables", "engine"]
