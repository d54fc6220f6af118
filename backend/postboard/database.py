"""
PostBoard Backend - Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       FastAPI session dependency.
How:   One engine per process with connection pooling; one AsyncSession per
       request that commits on success and rolls back on any error.
Who:   Route handlers receive sessions via Depends(get_db_session).
When:  Engine is created at module import; sessions are created per-request.

Transaction boundary:
    Every request is one transaction. Services only flush(); the commit
    happens here once the handler returns. A failure anywhere in the
    request (validation, ownership, constraint violation) rolls back every
    write that request made, so a bulk insert is all-or-nothing.

Timeouts:
    DB_POOL_TIMEOUT     waiting for a pooled connection (PostgreSQL only)
    DB_COMMAND_TIMEOUT  per statement, passed to the driver
                        (asyncpg: command_timeout, aiosqlite: timeout)
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from postboard.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """
    Build create_async_engine() keyword arguments for the configured backend.

    SQLite uses a single-connection pool that rejects pool sizing arguments,
    so those are only passed for server databases.
    """
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": 3600,
        # SQL echo only in DEBUG mode
        "echo": settings.log_level == "DEBUG",
    }
    if settings.is_sqlite:
        options["connect_args"] = {"timeout": settings.db_command_timeout}
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            connect_args={"command_timeout": settings.db_command_timeout},
        )
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ships with `PRAGMA foreign_keys` off, which would let posts and
    comments point at users/posts that do not exist. The pragma is per
    connection, so it is set from the pool's "connect" event.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())
if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: ORM objects stay readable after commit, which the
# response serialization relies on (no lazy refresh outside the session)
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, the startup schema sync
    and Alembic's autogenerate.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (which hands it to a service)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/posts/details")
        async def details(db: AsyncSession = Depends(get_db_session)):
            return await post_service.list_with_relations(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def sync_schema() -> None:
    """
    What:  Creates any missing tables for the registered models.
    When:  Called once during application startup when DB_SYNC_SCHEMA is true.
    How:   Runs Base.metadata.create_all on a connection; existing tables are
           left untouched (no ALTERs; use Alembic for schema changes).
    """
    # Importing the models package registers every table on Base.metadata
    import postboard.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema synchronized (%d tables)", len(Base.metadata.tables))


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
