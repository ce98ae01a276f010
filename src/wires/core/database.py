"""Database engine and transaction management.

A ``Database`` is the explicit store handle every service receives. Each
handle owns its own engine, so tests can build an in-memory one and the CLI
builds a file-backed one per invocation.

SQLite transaction control is taken away from pysqlite and driven from the
SQLAlchemy ``begin`` event instead, so write transactions can open with
``BEGIN IMMEDIATE``. That takes the database write lock before anything is
read, which keeps check-then-insert sequences (the cycle check in particular)
atomic across processes sharing one file.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("wires.store")

MEMORY_URL = "sqlite://"


class Base(DeclarativeBase):
    pass


def _install_sqlite_hooks(engine: Engine, busy_timeout: float) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # BEGIN is emitted by _on_begin below, not by the driver
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.execute(f"PRAGMA busy_timeout = {int(busy_timeout * 1000)}")
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")


class Database:
    """Store handle: engine plus read and write session factories."""

    def __init__(self, url: str, busy_timeout: float = 30.0):
        self.url = url
        engine_kwargs = {}
        if url == MEMORY_URL:
            # one shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False, "timeout": busy_timeout},
            **engine_kwargs,
        )
        _install_sqlite_hooks(self.engine, busy_timeout)

        self._read_sessions = sessionmaker(self.engine, expire_on_commit=False)
        self._write_sessions = sessionmaker(
            self.engine.execution_options(sqlite_begin="IMMEDIATE"),
            expire_on_commit=False,
        )
        logger.debug(f"Database opened: {url}")

    @classmethod
    def from_path(cls, path: str | Path, busy_timeout: float = 30.0) -> "Database":
        return cls(f"sqlite:///{Path(path)}", busy_timeout=busy_timeout)

    @classmethod
    def in_memory(cls) -> "Database":
        db = cls(MEMORY_URL)
        db.create_tables()
        return db

    def create_tables(self) -> None:
        from wires import models  # noqa: F401  (registers the tables on Base)

        Base.metadata.create_all(self.engine)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Write unit of work: BEGIN IMMEDIATE, commit on success, rollback on error."""
        with self._write_sessions() as session, session.begin():
            yield session

    @contextmanager
    def snapshot(self) -> Iterator[Session]:
        """Read-only unit of work over a consistent view of the store."""
        with self._read_sessions() as session, session.begin():
            yield session

    def dispose(self) -> None:
        self.engine.dispose()
