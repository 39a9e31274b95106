"""Pooled database handle with scoped ACID transactions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine, URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from todo_service.errors import StorageError

logger = logging.getLogger(__name__)


def _describe(exc: SQLAlchemyError) -> str:
    # DBAPI errors wrap the driver exception; its text is the useful part
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class Database:
    """
    Wrapper around a SQLAlchemy engine and its connection pool.

    Implements the Unit-of-Work pattern: every statement goes through
    ``transaction()``, which checks a connection out of the pool, commits on
    success, rolls back on failure and always returns the connection.
    Driver and pool failures surface as :class:`StorageError`.
    """

    def __init__(
        self,
        url: Optional[str | URL] = None,
        *,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        echo: bool = False,
    ):
        if url is None:
            from todo_service.config import get_settings
            url = get_settings().DATABASE_URL
        self.url: URL = make_url(url)
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._pool_timeout = pool_timeout
        self._echo = echo
        self._engine: Optional[Engine] = None

    @classmethod
    def from_settings(cls, settings: Any) -> "Database":
        return cls(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            echo=settings.DB_ECHO,
        )

    # -- engine lifecycle ------------------------------------------------------

    @property
    def dialect(self) -> str:
        return self.url.get_backend_name()

    def _is_sqlite_memory(self) -> bool:
        return self.dialect == "sqlite" and self.url.database in (None, "", ":memory:")

    def _ensure_dir(self) -> None:
        if self.dialect == "sqlite" and not self._is_sqlite_memory():
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)

    def engine(self) -> Engine:
        if self._engine is None:
            self._ensure_dir()
            kwargs: dict[str, Any] = {"echo": self._echo, "pool_pre_ping": True}
            if self._is_sqlite_memory():
                # one shared connection, otherwise each thread sees its own empty database
                kwargs.update(
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                kwargs.update(
                    pool_size=self._pool_size,
                    max_overflow=self._max_overflow,
                    pool_timeout=self._pool_timeout,
                )
            self._engine = create_engine(self.url, **kwargs)
            if self.dialect == "sqlite":
                event.listen(self._engine, "connect", _sqlite_on_connect)
                event.listen(self._engine, "begin", _sqlite_on_begin)
            logger.info(
                f"Created connection pool for {self.url.render_as_string(hide_password=True)}"
            )
        return self._engine

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Disposed connection pool")

    def init(self) -> int:
        """Apply pending migrations. Returns the resulting schema version."""
        from todo_service.db.migrate import run_migrations
        return run_migrations(self)

    # -- transaction helpers ---------------------------------------------------

    @contextmanager
    def transaction(self) -> Generator[Connection, None, None]:
        """ACID transaction: commits on success, rolls back on exception."""
        try:
            with self.engine().begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            raise StorageError(_describe(e), original=e) from e

    # -- low-level query helpers -----------------------------------------------

    def execute(self, sql: str, params: Optional[dict[str, Any]] = None) -> int:
        """Run a single write statement; returns the affected row count."""
        with self.transaction() as conn:
            return conn.execute(text(sql), params or {}).rowcount

    def fetchone(self, sql: str, params: Optional[dict[str, Any]] = None) -> Optional[dict[str, Any]]:
        with self.transaction() as conn:
            row = conn.execute(text(sql), params or {}).mappings().first()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        with self.transaction() as conn:
            rows = conn.execute(text(sql), params or {}).mappings().all()
        return [dict(r) for r in rows]


def _sqlite_on_connect(dbapi_conn, _record) -> None:
    # Let SQLAlchemy issue BEGIN itself so DDL is transactional too
    dbapi_conn.isolation_level = None
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def _sqlite_on_begin(conn: Connection) -> None:
    conn.exec_driver_sql("BEGIN")
