"""
Vector store configuration settings.

Manages vector storage backend selection, embedding model settings,
and retrieval thresholds used by the content tools.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, pgvector for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pgvector",
        description="Vector store type: 'memory' for local dev, 'pgvector' for production",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID (gemini-embedding-001 supports 1536-dim)",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension shared by every stored chunk",
    )
    embedding_timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound for a single embedding provider call",
    )

    search_threshold: float = Field(
        default=0.5,
        ge=-1.0,
        le=1.0,
        description="Similarity threshold the tools actually search with (recall-oriented)",
    )
    recommendation_vector: Literal["first_chunk", "centroid"] = Field(
        default="first_chunk",
        description="How the reference vector for related-article lookups is built",
    )
