"""
PostgreSQL + pgvector chunk store for production retrieval.

Stores one row per embedded chunk in `blog_embeddings` and serves cosine
similarity search through the pgvector `<=>` operator (HNSW index with
vector_cosine_ops). A resync replaces an article's rows with a
delete-then-insert inside one transaction, so a failure anywhere rolls back
and leaves the previous chunk set visible.

Dependencies: sqlalchemy, pgvector, lumen.boundary.db
System role: Production vector store
"""

import logging
from collections.abc import Sequence

from sqlalchemy import Select, delete, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lumen.boundary.db.models.article_chunk_model import EMBEDDING_DIMENSION, ArticleChunkModel
from lumen.boundary.vdb.base_store import VectorStore
from lumen.boundary.vdb.vector_schemas import (
    ArticleChunk,
    ChunkRow,
    LocaleChunkCount,
    ScoredChunk,
    SearchOptions,
    SyncedArticle,
    SyncStats,
    validate_chunk_set,
)
from lumen.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

RECENT_SYNC_LIMIT = 10


def _to_chunk_row(model: ArticleChunkModel) -> dict:
    return {
        "id": str(model.id),
        "article_id": model.article_id,
        "slug": model.slug,
        "locale": model.locale,
        "title": model.title,
        "short_description": model.short_description,
        "author_name": model.author_name,
        "published_date": model.published_date,
        "chunk_content": model.chunk_content,
        "chunk_index": model.chunk_index,
        "total_chunks": model.total_chunks,
        "embedding": model.embedding,
        "tags": model.tags or [],
        "last_synced_at": model.last_synced_at,
        "created_at": model.created_at,
        "updated_at": model.updated_at,
    }


class PgVectorStore(VectorStore):
    """
    Chunk store backed by a pgvector column.

    Each public method opens its own session from the injected factory, so
    one instance can be shared across requests.
    """

    store_type = "pgvector"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedding_dimension: int = EMBEDDING_DIMENSION,
    ) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Async session factory bound to the database engine
            embedding_dimension: Expected length of every vector

        Raises:
            VectorStoreError: If the dimension differs from the embedding column
        """
        if embedding_dimension != EMBEDDING_DIMENSION:
            raise VectorStoreError(
                f"Configured embedding dimension {embedding_dimension} does not match "
                f"the {EMBEDDING_DIMENSION}-dim embedding column",
                operation="init",
                details={"configured": embedding_dimension, "column": EMBEDDING_DIMENSION},
            )
        self._session_factory = session_factory
        self._embedding_dimension = embedding_dimension

    def _check_dimension(self, vector: Sequence[float], operation: str) -> None:
        if len(vector) != self._embedding_dimension:
            raise VectorStoreError(
                f"Expected {self._embedding_dimension}-dim vector, got {len(vector)}",
                operation=operation,
            )

    async def upsert_article_chunks(
        self,
        article_id: str,
        locale: str,
        chunks: Sequence[ArticleChunk],
    ) -> int:
        validate_chunk_set(article_id, locale, chunks)
        for chunk in chunks:
            self._check_dimension(chunk.embedding, "upsert")

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    removed = await session.execute(
                        delete(ArticleChunkModel).where(
                            ArticleChunkModel.article_id == article_id,
                            ArticleChunkModel.locale == locale,
                        )
                    )
                    session.add_all(
                        [
                            ArticleChunkModel(
                                article_id=chunk.article_id,
                                slug=chunk.slug,
                                locale=chunk.locale,
                                title=chunk.title,
                                short_description=chunk.short_description,
                                author_name=chunk.author_name,
                                published_date=chunk.published_date,
                                chunk_content=chunk.chunk_content,
                                chunk_index=chunk.chunk_index,
                                total_chunks=chunk.total_chunks,
                                embedding=chunk.embedding,
                                tags=chunk.tags,
                                last_synced_at=chunk.last_synced_at,
                            )
                            for chunk in chunks
                        ]
                    )
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:upsert_article_chunks - Rolled back: {type(e).__name__}: {e}",
                extra={"article_id": article_id, "locale": locale},
            )
            raise VectorStoreError(
                f"Failed to upsert chunks for {article_id}",
                operation="upsert",
                details={"article_id": article_id, "locale": locale, "error": str(e)},
            ) from e

        logger.info(
            f"{__name__}:upsert_article_chunks - Replaced {removed.rowcount} rows with {len(chunks)}",
            extra={"article_id": article_id, "locale": locale},
        )
        return len(chunks)

    async def delete_article(self, article_id: str, locale: str | None = None) -> int:
        stmt = delete(ArticleChunkModel).where(ArticleChunkModel.article_id == article_id)
        if locale is not None:
            stmt = stmt.where(ArticleChunkModel.locale == locale)

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to delete chunks for {article_id}",
                operation="delete",
                details={"article_id": article_id, "locale": locale, "error": str(e)},
            ) from e

        logger.info(
            f"{__name__}:delete_article - Deleted {result.rowcount} rows",
            extra={"article_id": article_id, "locale": locale},
        )
        return result.rowcount

    def build_similarity_query(
        self,
        query_vector: Sequence[float],
        options: SearchOptions,
    ) -> Select:
        """
        Build the similarity SELECT without executing it.

        similarity = 1 - cosine_distance; rows must score strictly above the
        threshold. Ordering by raw distance lets the HNSW index serve the scan.

        Args:
            query_vector: Query embedding
            options: Limit, threshold and filters

        Returns:
            Select: Statement yielding (ArticleChunkModel, similarity) pairs
        """
        distance = ArticleChunkModel.embedding.cosine_distance(list(query_vector))
        similarity = (1 - distance).label("similarity")

        stmt = select(ArticleChunkModel, similarity).where((1 - distance) > options.threshold)
        if options.locale:
            stmt = stmt.where(ArticleChunkModel.locale == options.locale)
        if options.exclude_slugs:
            stmt = stmt.where(ArticleChunkModel.slug.not_in(options.exclude_slugs))
        return stmt.order_by(distance).limit(options.limit)

    async def similarity_search(
        self,
        query_vector: Sequence[float],
        options: SearchOptions,
    ) -> list[ScoredChunk]:
        self._check_dimension(query_vector, "search")
        stmt = self.build_similarity_query(query_vector, options)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Similarity search failed",
                operation="search",
                details={"locale": options.locale, "error": str(e)},
            ) from e

        scored = [
            ScoredChunk(**_to_chunk_row(model), similarity=float(score)) for model, score in rows
        ]
        logger.info(
            f"{__name__}:similarity_search - Found {len(scored)} chunks",
            extra={"limit": options.limit, "threshold": options.threshold, "locale": options.locale},
        )
        return scored

    async def get_article_chunks(self, slug: str, locale: str) -> list[ChunkRow]:
        stmt = (
            select(ArticleChunkModel)
            .where(ArticleChunkModel.slug == slug, ArticleChunkModel.locale == locale)
            .order_by(ArticleChunkModel.chunk_index)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                models = result.scalars().all()
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to load chunks for {slug}",
                operation="get",
                details={"slug": slug, "locale": locale, "error": str(e)},
            ) from e

        return [ChunkRow(**_to_chunk_row(model)) for model in models]

    async def list_all_article_ids(self) -> list[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(distinct(ArticleChunkModel.article_id)))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Failed to list article ids",
                operation="list",
                details={"error": str(e)},
            ) from e

    def _synced_articles_query(self, locale: str | None) -> Select:
        last_synced = func.max(ArticleChunkModel.last_synced_at).label("last_synced_at")
        stmt = select(
            ArticleChunkModel.article_id,
            ArticleChunkModel.slug,
            ArticleChunkModel.locale,
            ArticleChunkModel.title,
            ArticleChunkModel.author_name,
            ArticleChunkModel.published_date,
            ArticleChunkModel.total_chunks,
            last_synced,
            func.count(ArticleChunkModel.id).label("chunk_count"),
        ).group_by(
            ArticleChunkModel.article_id,
            ArticleChunkModel.slug,
            ArticleChunkModel.locale,
            ArticleChunkModel.title,
            ArticleChunkModel.author_name,
            ArticleChunkModel.published_date,
            ArticleChunkModel.total_chunks,
        )
        if locale:
            stmt = stmt.where(ArticleChunkModel.locale == locale)
        return stmt.order_by(last_synced.desc())

    async def list_synced_articles(self, locale: str | None = None) -> list[SyncedArticle]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(self._synced_articles_query(locale))
                rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Failed to list synced articles",
                operation="list",
                details={"locale": locale, "error": str(e)},
            ) from e

        return [SyncedArticle(**row) for row in rows]

    async def get_sync_stats(self) -> SyncStats:
        try:
            async with self._session_factory() as session:
                total = await session.scalar(select(func.count(ArticleChunkModel.id)))
                unique = await session.scalar(
                    select(func.count(distinct(ArticleChunkModel.article_id)))
                )
                by_locale = await session.execute(
                    select(ArticleChunkModel.locale, func.count(ArticleChunkModel.id))
                    .group_by(ArticleChunkModel.locale)
                    .order_by(ArticleChunkModel.locale)
                )
                recent = await session.execute(
                    self._synced_articles_query(None).limit(RECENT_SYNC_LIMIT)
                )
                recent_rows = recent.mappings().all()
                locale_rows = by_locale.all()
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Failed to compute sync stats",
                operation="stats",
                details={"error": str(e)},
            ) from e

        return SyncStats(
            total_chunks=total or 0,
            unique_articles=unique or 0,
            by_locale=[LocaleChunkCount(locale=loc, chunks=count) for loc, count in locale_rows],
            recent_syncs=[SyncedArticle(**row) for row in recent_rows],
        )
