"""
In-memory chunk store for local development and tests.

Keeps chunk sets in a dict keyed by (article_id, locale) and scores them
with numpy cosine similarity. A resync swaps the whole list in one
assignment, so readers never see a partially replaced set.

Dependencies: numpy, lumen.boundary.vdb.vector_schemas
System role: Development vector store
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

import numpy as np

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


def cosine_similarity(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of one vector against each row of a matrix (zero vectors score 0)."""
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    return np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0)


class InMemoryVectorStore(VectorStore):
    """Vector store held in process memory."""

    store_type = "memory"

    def __init__(self, embedding_dimension: int | None = None) -> None:
        """
        Initialize an empty store.

        Args:
            embedding_dimension: Expected vector length (unchecked when None)
        """
        self._embedding_dimension = embedding_dimension
        self._articles: dict[tuple[str, str], list[ChunkRow]] = {}

    def _check_dimension(self, vector: Sequence[float], operation: str) -> None:
        if self._embedding_dimension is not None and len(vector) != self._embedding_dimension:
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

        now = datetime.now(timezone.utc)
        rows = [
            ChunkRow(**chunk.model_dump(), id=str(uuid.uuid4()), created_at=now, updated_at=now)
            for chunk in sorted(chunks, key=lambda c: c.chunk_index)
        ]
        if rows:
            self._articles[(article_id, locale)] = rows
        else:
            self._articles.pop((article_id, locale), None)

        logger.info(
            f"{__name__}:upsert_article_chunks - Stored {len(rows)} chunks",
            extra={"article_id": article_id, "locale": locale},
        )
        return len(rows)

    async def delete_article(self, article_id: str, locale: str | None = None) -> int:
        keys = [
            key
            for key in self._articles
            if key[0] == article_id and (locale is None or key[1] == locale)
        ]
        removed = sum(len(self._articles.pop(key)) for key in keys)
        logger.info(
            f"{__name__}:delete_article - Deleted {removed} rows",
            extra={"article_id": article_id, "locale": locale},
        )
        return removed

    async def similarity_search(
        self,
        query_vector: Sequence[float],
        options: SearchOptions,
    ) -> list[ScoredChunk]:
        self._check_dimension(query_vector, "search")

        excluded = set(options.exclude_slugs)
        candidates = [
            row
            for (_, locale), rows in self._articles.items()
            if options.locale is None or locale == options.locale
            for row in rows
            if row.slug not in excluded
        ]
        if not candidates:
            return []

        matrix = np.array([row.embedding for row in candidates], dtype=float)
        scores = cosine_similarity(np.asarray(query_vector, dtype=float), matrix)

        order = np.argsort(-scores, kind="stable")
        results = []
        for idx in order:
            score = float(scores[idx])
            if score <= options.threshold:
                break
            results.append(ScoredChunk(**candidates[idx].model_dump(), similarity=score))
            if len(results) >= options.limit:
                break
        return results

    async def get_article_chunks(self, slug: str, locale: str) -> list[ChunkRow]:
        for (_, stored_locale), rows in self._articles.items():
            if stored_locale == locale and rows[0].slug == slug:
                return list(rows)
        return []

    async def list_all_article_ids(self) -> list[str]:
        return sorted({article_id for article_id, _ in self._articles})

    async def list_synced_articles(self, locale: str | None = None) -> list[SyncedArticle]:
        summaries = [
            SyncedArticle(
                article_id=rows[0].article_id,
                slug=rows[0].slug,
                locale=rows[0].locale,
                title=rows[0].title,
                author_name=rows[0].author_name,
                published_date=rows[0].published_date,
                last_synced_at=max(row.last_synced_at for row in rows),
                total_chunks=rows[0].total_chunks,
                chunk_count=len(rows),
            )
            for (_, stored_locale), rows in self._articles.items()
            if locale is None or stored_locale == locale
        ]
        summaries.sort(key=lambda s: s.last_synced_at, reverse=True)
        return summaries

    async def get_sync_stats(self) -> SyncStats:
        per_locale: dict[str, int] = {}
        for (_, locale), rows in self._articles.items():
            per_locale[locale] = per_locale.get(locale, 0) + len(rows)

        synced = await self.list_synced_articles()
        return SyncStats(
            total_chunks=sum(per_locale.values()),
            unique_articles=len({article_id for article_id, _ in self._articles}),
            by_locale=[
                LocaleChunkCount(locale=locale, chunks=count)
                for locale, count in sorted(per_locale.items())
            ],
            recent_syncs=synced[:RECENT_SYNC_LIMIT],
        )
