"""
Async engine and session management.

One engine per process, built lazily from DatabaseSettings. Request handlers
get a session through get_async_db(); ChatService takes the session factory
because its stream outlives the request.

Dependencies: sqlalchemy, backend.configs
System role: Database connection lifecycle
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from backend.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Build the process-wide engine.

    PostgreSQL gets a sized pool with pre-ping so connections dropped by the
    server are replaced transparently. SQLite URLs use SQLAlchemy's default
    pool.

    Returns:
        AsyncEngine: Engine bound to DatabaseSettings.async_database_url
    """
    db_config = get_settings().database
    if db_config.is_sqlite:
        return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the engine.

    expire_on_commit=False keeps committed rows readable, since services
    convert them to dicts after commit.
    """
    return async_sessionmaker(bind=get_async_engine(), autoflush=False, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    The session is closed when the response has been sent; uncommitted work
    is rolled back on close.
    """
    async with get_async_session_factory()() as session:
        yield session
