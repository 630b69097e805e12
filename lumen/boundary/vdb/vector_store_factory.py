"""
Vector store factory for selecting between in-memory (dev) and pgvector (prod).

Depends on the VECTOR_STORE_STORE_TYPE environment variable.
Provides a consistent interface regardless of the underlying implementation.

Dependencies: lumen.boundary.vdb, lumen.boundary.db, lumen.configs
System role: Vector store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lumen.boundary.db.connection import get_async_session_factory
from lumen.boundary.vdb.base_store import VectorStore
from lumen.boundary.vdb.memory_store import InMemoryVectorStore
from lumen.boundary.vdb.pgvector_store import PgVectorStore
from lumen.configs import get_settings

logger = logging.getLogger(__name__)


def get_vector_store(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> VectorStore:
    """
    Factory function to get vector store based on environment configuration.

    Args:
        session_factory: Session factory for the pgvector store (created from
            POSTGRES_* settings when None)

    Returns:
        VectorStore: PgVectorStore or InMemoryVectorStore

    Raises:
        ValueError: If the configured store type is invalid
        VectorStoreError: If pgvector is configured with a dimension other than
            the embedding column's
    """
    settings = get_settings()
    store_type = settings.vector_store.store_type.lower()
    dimension = settings.vector_store.embedding_dimension

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_store - Creating in-memory vector store (local dev mode)")
        return InMemoryVectorStore(embedding_dimension=dimension)

    elif store_type == "pgvector":
        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        return PgVectorStore(
            session_factory=session_factory or get_async_session_factory(),
            embedding_dimension=dimension,
        )

    else:
        raise ValueError(
            f"Invalid vector store type: {store_type}. "
            f"Must be 'memory' (dev) or 'pgvector' (production)."
        )
