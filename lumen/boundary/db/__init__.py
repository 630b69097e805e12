"""
Database boundary layer: ORM models and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - ArticleChunkModel: The embedded chunk table

Dependencies: sqlalchemy, pgvector, lumen.configs
System role: Database adapter for the chunk store
"""

from lumen.boundary.db.base import Base, TimestampMixin, UUIDMixin
from lumen.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from lumen.boundary.db.models.article_chunk_model import EMBEDDING_DIMENSION, ArticleChunkModel

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ArticleChunkModel",
    "EMBEDDING_DIMENSION",
]
