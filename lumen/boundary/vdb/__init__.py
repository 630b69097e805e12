"""
Vector database boundary layer.

Provides vector store clients for storage and retrieval operations.
- PgVectorStore: Production PostgreSQL + pgvector store
- InMemoryVectorStore: numpy-backed store for local dev and tests
- group_and_rank_by_article: chunk to article aggregation

Dependencies: sqlalchemy, pgvector, numpy
System role: Vector store adapter for RAG retrieval
"""

from lumen.boundary.vdb.base_store import VectorStore
from lumen.boundary.vdb.memory_store import InMemoryVectorStore
from lumen.boundary.vdb.pgvector_store import PgVectorStore
from lumen.boundary.vdb.ranking import group_and_rank_by_article
from lumen.boundary.vdb.vector_schemas import (
    ArticleChunk,
    ArticleSearchResult,
    ChunkRow,
    MatchingChunk,
    ScoredChunk,
    SearchOptions,
    SyncedArticle,
    SyncStats,
    validate_chunk_set,
)
from lumen.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "VectorStore",
    "PgVectorStore",
    "InMemoryVectorStore",
    "get_vector_store",
    "group_and_rank_by_article",
    "validate_chunk_set",
    "ArticleChunk",
    "ArticleSearchResult",
    "ChunkRow",
    "MatchingChunk",
    "ScoredChunk",
    "SearchOptions",
    "SyncedArticle",
    "SyncStats",
]
