"""
Database schema initialization.

Enables the pgvector extension and creates the chunk table and its indexes
(including the HNSW cosine index) from the ORM metadata.

Dependencies: sqlalchemy, lumen.boundary.db
System role: Database schema initialization

Usage:
    python -m lumen.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from lumen.boundary.db.base import Base
from lumen.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from lumen.boundary.db.models.article_chunk_model import ArticleChunkModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create the vector extension and all tables registered on Base.metadata.

    Idempotent: CREATE EXTENSION IF NOT EXISTS plus checkfirst table creation,
    so safe to run on every deploy.

    Args:
        engine: Engine to use (defaults to POSTGRES_* settings)

    Raises:
        SQLAlchemyError: If the connection fails or the extension is unavailable
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
            version = (
                await conn.execute(
                    text("SELECT extversion FROM pg_extension WHERE extname = 'vector'")
                )
            ).scalar_one_or_none()
            logger.info(f"{__name__}:create_all_tables - pgvector extension enabled (version={version})")
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created")


async def _main() -> None:
    engine = get_async_engine()
    try:
        await create_all_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    from lumen.observability.logger import configure_logging

    configure_logging()
    asyncio.run(_main())
