"""
Database table creation script.

Enables the pgvector extension (PostgreSQL only) and creates all tables
defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, curriculum_rag.configs
System role: Database schema initialization

Usage:
    python -m curriculum_rag.scripts.create_tables
    python -m curriculum_rag.scripts.create_tables --drop
"""

import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from curriculum_rag.boundary.db.base import Base
from curriculum_rag.boundary.db.connection import enable_pgvector, get_async_engine
from curriculum_rag.configs import get_settings
from curriculum_rag.observability.logger import configure_logging

# Import all models to register them with Base.metadata
from curriculum_rag.boundary.db.models import ChunkModel, DocumentModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.
    """
    await enable_pgvector(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - All tables created successfully")


async def drop_all_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning(f"{__name__}:drop_all_tables - All tables dropped")


async def _run(drop: bool) -> None:
    engine = get_async_engine()
    try:
        if drop:
            await drop_all_tables(engine)
        await create_all_tables(engine)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Create curriculum RAG tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables first (destroys all data)",
    )
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)
    asyncio.run(_run(args.drop))


if __name__ == "__main__":
    main()
