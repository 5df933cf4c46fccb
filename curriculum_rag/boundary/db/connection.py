"""
Database connection management.

Provides the async SQLAlchemy engine and session factory used by CRUD
classes, the ingestion pipeline and the vector index.

Dependencies: sqlalchemy, curriculum_rag.configs
System role: Database connection lifecycle management
"""

from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from curriculum_rag.configs import get_settings
from curriculum_rag.configs.database import DatabaseSettings


def get_async_engine(db_config: DatabaseSettings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    PostgreSQL engines get a sized connection pool with pre-ping so that
    stale connections are detected before use. Other backends (SQLite for
    local development) use the driver's default pool.

    Args:
        db_config: Database settings, defaults to the cached application settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = db_config or get_settings().database

    if db_config.is_postgres:
        return create_async_engine(
            db_config.async_database_url,
            echo=db_config.echo_sql,
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_pre_ping=True,
        )
    return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)


def get_async_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Sessions use autoflush=False and expire_on_commit=False so that ORM
    instances stay readable after the transaction that produced them commits.

    Args:
        engine: Engine to bind, a fresh one from settings when omitted

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session, session.begin():
            session.add(obj)
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield an async session and close it afterwards, even if the caller raises.

    Yields:
        AsyncSession: Async SQLAlchemy database session
    """
    factory = session_factory or get_async_session_factory()
    async with factory() as session:
        yield session


async def enable_pgvector(engine: AsyncEngine) -> None:
    """Install the pgvector extension; no-op on non-PostgreSQL backends."""
    if engine.dialect.name != "postgresql":
        return
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
