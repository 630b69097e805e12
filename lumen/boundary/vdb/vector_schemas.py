"""
Vector database schemas.

Pydantic models for vector operations: the chunk records written by the
sync pipeline, the rows read back by retrieval, search options, and the
article-level aggregates built from chunk matches.

Dependencies: pydantic, lumen.core.exceptions
System role: Type definitions for vector operations
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lumen.core.exceptions import ChunkValidationError


class ArticleChunk(BaseModel):
    """
    One embedded chunk ready to be stored.

    Every chunk of an (article_id, locale) pair carries the same article
    metadata and the same total_chunks value.
    """

    article_id: str = Field(description="CMS entry ID, stable across locales")
    slug: str = Field(description="Human-facing article slug")
    locale: str = Field(default="en-US", description="Locale tag")
    title: str = Field(description="Article title")
    short_description: str | None = Field(default=None, description="Optional summary")
    author_name: str | None = Field(default=None, description="Optional author name")
    published_date: datetime | None = Field(default=None, description="Optional publish time")
    chunk_content: str = Field(description="Raw chunk text without context header")
    chunk_index: int = Field(ge=0, description="0-based chunk position")
    total_chunks: int = Field(ge=1, description="Number of chunks for this article/locale")
    embedding: list[float] = Field(description="Embedding vector")
    tags: list[str] = Field(default_factory=list, description="CMS tags")
    last_synced_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When this chunk set was synced",
    )

    @field_validator("embedding", mode="before")
    @classmethod
    def _coerce_vector(cls, value: Any) -> Any:
        # pgvector and numpy hand back ndarrays
        if hasattr(value, "tolist"):
            return value.tolist()
        return value


class ChunkRow(ArticleChunk):
    """A stored chunk as read back from the vector store."""

    id: str = Field(description="Generated chunk identifier")
    created_at: datetime | None = Field(default=None, description="Row creation time")
    updated_at: datetime | None = Field(default=None, description="Row update time")


class ScoredChunk(ChunkRow):
    """A stored chunk returned by similarity search."""

    similarity: float = Field(description="1 - cosine distance to the query vector")


class SearchOptions(BaseModel):
    """Parameters for a chunk-level similarity search."""

    limit: int = Field(default=3, ge=1, le=500, description="Maximum rows to return")
    threshold: float = Field(
        default=0.5,
        ge=-1.0,
        le=1.0,
        description="Rows must score strictly above this similarity",
    )
    locale: str | None = Field(default=None, description="Restrict to one locale")
    exclude_slugs: list[str] = Field(default_factory=list, description="Slugs to leave out")


class MatchingChunk(BaseModel):
    """A chunk that matched a query, inside an article aggregate."""

    content: str
    chunk_index: int
    similarity: float


class ArticleSearchResult(BaseModel):
    """Chunk matches aggregated to one article."""

    slug: str
    locale: str
    title: str
    short_description: str | None = None
    author_name: str | None = None
    published_date: datetime | None = None
    max_similarity: float = Field(description="Highest chunk similarity")
    avg_similarity: float = Field(description="Mean similarity of matching chunks")
    matching_chunks: list[MatchingChunk] = Field(
        default_factory=list,
        description="Matching chunks, best first",
    )


class LocaleChunkCount(BaseModel):
    """Chunk count for one locale."""

    locale: str
    chunks: int


class SyncedArticle(BaseModel):
    """Per-article summary of what is currently stored."""

    article_id: str
    slug: str
    locale: str
    title: str
    author_name: str | None = None
    published_date: datetime | None = None
    last_synced_at: datetime | None = None
    total_chunks: int
    chunk_count: int


class SyncStats(BaseModel):
    """Aggregate statistics over the stored chunks."""

    total_chunks: int = 0
    unique_articles: int = 0
    by_locale: list[LocaleChunkCount] = Field(default_factory=list)
    recent_syncs: list[SyncedArticle] = Field(default_factory=list)


def validate_chunk_set(article_id: str, locale: str, chunks: Sequence[ArticleChunk]) -> None:
    """
    Check a chunk set before it is written for (article_id, locale).

    Args:
        article_id: Key the set is being written under
        locale: Locale the set is being written under
        chunks: Records to validate

    Raises:
        ChunkValidationError: When a record belongs to another key, the
            indices are not exactly 0..n-1, or total_chunks disagrees with
            the set size
    """
    foreign = [c.chunk_index for c in chunks if c.article_id != article_id or c.locale != locale]
    if foreign:
        raise ChunkValidationError(
            "Chunk set mixes article keys",
            details={"article_id": article_id, "locale": locale, "chunk_indices": foreign},
        )

    indices = sorted(c.chunk_index for c in chunks)
    if indices != list(range(len(chunks))):
        raise ChunkValidationError(
            "Chunk indices are not contiguous from 0",
            details={"article_id": article_id, "locale": locale, "chunk_indices": indices},
        )

    totals = {c.total_chunks for c in chunks}
    if chunks and totals != {len(chunks)}:
        raise ChunkValidationError(
            "total_chunks does not match the number of chunks",
            details={"article_id": article_id, "expected": len(chunks), "found": sorted(totals)},
        )
