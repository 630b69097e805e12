"""
Vector store interface.

Every store (pgvector in production, in-memory for local dev and tests)
implements the same async operations so the sync pipeline and the content
tools never care which one they talk to.

Dependencies: lumen.boundary.vdb.vector_schemas, lumen.boundary.vdb.ranking
System role: Contract between the pipeline/tools and vector storage
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from lumen.boundary.vdb.ranking import group_and_rank_by_article
from lumen.boundary.vdb.vector_schemas import (
    ArticleChunk,
    ArticleSearchResult,
    ChunkRow,
    ScoredChunk,
    SearchOptions,
    SyncedArticle,
    SyncStats,
)


class VectorStore(ABC):
    """Async chunk storage with cosine similarity search."""

    store_type: str = "base"

    @abstractmethod
    async def upsert_article_chunks(
        self,
        article_id: str,
        locale: str,
        chunks: Sequence[ArticleChunk],
    ) -> int:
        """
        Replace every stored chunk of (article_id, locale) with `chunks`.

        Readers see either the old set or the new one, never a mix.

        Returns:
            int: Number of rows inserted

        Raises:
            ChunkValidationError: When the set is mis-keyed or non-contiguous
            VectorStoreError: When the write fails (prior rows stay in place)
        """

    @abstractmethod
    async def delete_article(self, article_id: str, locale: str | None = None) -> int:
        """Delete an article's chunks (all locales when locale is None). Returns rows removed."""

    @abstractmethod
    async def similarity_search(
        self,
        query_vector: Sequence[float],
        options: SearchOptions,
    ) -> list[ScoredChunk]:
        """Chunks scoring strictly above options.threshold, best first, at most options.limit."""

    @abstractmethod
    async def get_article_chunks(self, slug: str, locale: str) -> list[ChunkRow]:
        """All chunks for (slug, locale) in ascending chunk_index order."""

    @abstractmethod
    async def list_all_article_ids(self) -> list[str]:
        """Distinct article ids currently stored."""

    @abstractmethod
    async def list_synced_articles(self, locale: str | None = None) -> list[SyncedArticle]:
        """One summary per stored (article_id, locale), most recently synced first."""

    @abstractmethod
    async def get_sync_stats(self) -> SyncStats:
        """Totals, per-locale counts and the ten most recent syncs."""

    def group_and_rank_by_article(
        self,
        rows: Sequence[ScoredChunk],
    ) -> list[ArticleSearchResult]:
        """Aggregate chunk matches to articles ranked by best chunk."""
        return group_and_rank_by_article(rows)
