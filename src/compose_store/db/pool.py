"""
compose_store.db.pool

Async connection pool handle.

Responsibilities:
- Open the pooled engine from a connection descriptor and fail fast when it is unusable.
- Hand out one connection per logical operation and reclaim it on every exit path.
- Dispose the pool at shutdown.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from compose_store.db.classify import translate_errors
from compose_store.errors import ConfigurationError, ConnectivityError
from compose_store.observability.logging import get_logger
from compose_store.settings import Settings

log = get_logger(__name__)


def _is_memory_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    # SQLite ignores REFERENCES clauses unless enabled per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(
    url: str | URL,
    *,
    pool_size: int = 10,
    max_overflow: int = 5,
    pool_timeout: float = 30.0,
    pool_recycle: int = -1,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """Build the pooled engine. Raises `ConfigurationError` on a malformed descriptor."""

    try:
        parsed = make_url(url)
        options: dict[str, Any] = {"pool_pre_ping": pool_pre_ping, "echo": echo}
        if not _is_memory_sqlite(parsed):
            options.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            )
        engine = create_async_engine(parsed, **options)
    except (ArgumentError, ImportError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"invalid database descriptor: {exc}") from exc

    if parsed.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """
    The single owned pool handle. Create it once at process start (`open_database`),
    inject it into repositories, and `close()` it at shutdown.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @classmethod
    async def open(cls, settings: Settings) -> Database:
        return await open_database(
            settings.database_url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_recycle=settings.pool_recycle,
            pool_pre_ping=settings.pool_pre_ping,
            echo=settings.echo_sql,
        )

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncConnection]:
        """Scoped read connection; returned to the pool however the block exits."""

        async with translate_errors():
            conn = await self._engine.connect()
        try:
            yield conn
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Scoped connection inside a transaction: commit on success, rollback on error."""

        async with self.acquire() as conn:
            async with conn.begin():
                yield conn

    async def ping(self) -> None:
        async with translate_errors():
            async with self.acquire() as conn:
                await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        # Dispose closes pooled connections/FDs; safe to call more than once.
        await self._engine.dispose()
        log.info("database.closed", backend=self._engine.url.get_backend_name())

    async def __aenter__(self) -> Database:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


async def open_database(url: str | URL, **options: Any) -> Database:
    """
    Open the pool from a connection descriptor and verify it with one `SELECT 1`.
    Raises `ConfigurationError` when the descriptor is malformed or the first
    connection cannot be established.
    """

    engine = create_engine(url, **options)
    db = Database(engine)
    try:
        await db.ping()
    except ConnectivityError as exc:
        await engine.dispose()
        raise ConfigurationError(f"cannot connect to database: {exc.message}") from exc

    log.info(
        "database.opened",
        backend=engine.url.get_backend_name(),
        driver=engine.url.get_driver_name(),
    )
    return db


# --- Module Notes -----------------------------------------------------------
# Reads use `acquire()` and never open an explicit transaction: a page query and
# its count query are two independent reads on the same connection.
