"""Tests for InMemoryVectorStore and chunk ranking.

Dependencies: pytest, pytest-asyncio, numpy
System role: Vector store contract and article aggregation
"""

import numpy as np
import pytest

from lumen.boundary.vdb import (
    InMemoryVectorStore,
    ScoredChunk,
    SearchOptions,
    group_and_rank_by_article,
)
from lumen.boundary.vdb.memory_store import cosine_similarity
from lumen.core.exceptions import ChunkValidationError, VectorStoreError
from tests.factories import make_chunk, make_chunk_set


def _scored(slug: str, similarity: float, chunk_index: int = 0, **kwargs) -> ScoredChunk:
    chunk = make_chunk(article_id=f"id-{slug}", slug=slug, chunk_index=chunk_index, total_chunks=5, **kwargs)
    return ScoredChunk(**chunk.model_dump(), id=f"{slug}-{chunk_index}", similarity=similarity)


# ============================================================================
# Ranking
# ============================================================================


class TestGroupAndRankByArticle:
    """Chunk to article aggregation."""

    def test_ranked_by_best_chunk(self) -> None:
        """Should order articles by max similarity with avg and sorted chunks."""
        rows = [
            _scored("a", 0.9, 0),
            _scored("b", 0.8, 0),
            _scored("a", 0.6, 1),
            _scored("c", 0.7, 0),
            _scored("b", 0.75, 2),
        ]

        articles = group_and_rank_by_article(rows)

        assert [a.slug for a in articles] == ["a", "b", "c"]
        assert articles[0].max_similarity == pytest.approx(0.9)
        assert articles[0].avg_similarity == pytest.approx(0.75)
        assert [c.chunk_index for c in articles[1].matching_chunks] == [0, 2]
        assert [c.similarity for c in articles[0].matching_chunks] == [0.9, 0.6]

    def test_single_strong_chunk_outranks_many_weak(self) -> None:
        """Should rank by max, not by count or average."""
        rows = [_scored("weak", 0.6, i) for i in range(4)] + [_scored("strong", 0.95)]

        assert [a.slug for a in group_and_rank_by_article(rows)] == ["strong", "weak"]

    def test_empty(self) -> None:
        """Should return no articles for no rows."""
        assert group_and_rank_by_article([]) == []


# ============================================================================
# InMemoryVectorStore
# ============================================================================


class TestCosineSimilarity:
    """numpy cosine helper."""

    def test_zero_vector_scores_zero(self) -> None:
        """Should score zero rows as 0 instead of NaN."""
        scores = cosine_similarity(np.array([1.0, 0.0]), np.array([[1.0, 0.0], [0.0, 0.0], [0.0, 1.0]]))

        assert scores.tolist() == [1.0, 0.0, 0.0]


class TestInMemoryVectorStore:
    """Store contract on the in-memory implementation."""

    @pytest.mark.asyncio
    async def test_upsert_replaces_previous_set(self, memory_store) -> None:
        """Should replace all rows of (article_id, locale) on resync."""
        await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[1, 0]] * 3))
        count = await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[0, 1]]))

        rows = await memory_store.get_article_chunks("one", "en-US")
        assert count == 1
        assert len(rows) == 1
        assert rows[0].embedding == [0.0, 1.0]

    @pytest.mark.asyncio
    async def test_locales_independent(self, memory_store) -> None:
        """Should keep each locale's chunk set separate."""
        await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[1, 0]] * 2))
        await memory_store.upsert_article_chunks(
            "a1", "de-DE", make_chunk_set("a1", "one", [[1, 0]], locale="de-DE")
        )

        assert len(await memory_store.get_article_chunks("one", "en-US")) == 2
        assert len(await memory_store.get_article_chunks("one", "de-DE")) == 1

    @pytest.mark.asyncio
    async def test_invalid_chunk_sets_rejected(self, memory_store) -> None:
        """Should reject gaps, mismatched totals and foreign keys."""
        gap = [make_chunk(article_id="a1", chunk_index=0, total_chunks=2), make_chunk(article_id="a1", chunk_index=2, total_chunks=2)]
        wrong_total = [make_chunk(article_id="a1", chunk_index=0, total_chunks=3)]
        foreign = [make_chunk(article_id="a2", chunk_index=0, total_chunks=1)]

        for chunks in (gap, wrong_total, foreign):
            with pytest.raises(ChunkValidationError):
                await memory_store.upsert_article_chunks("a1", "en-US", chunks)

        assert await memory_store.list_all_article_ids() == []

    @pytest.mark.asyncio
    async def test_dimension_checked(self) -> None:
        """Should reject vectors of the wrong dimension when one is configured."""
        store = InMemoryVectorStore(embedding_dimension=3)

        with pytest.raises(VectorStoreError):
            await store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[1, 0]]))
        with pytest.raises(VectorStoreError):
            await store.similarity_search([1.0, 0.0], SearchOptions())

    @pytest.mark.asyncio
    async def test_search_threshold_strict(self, memory_store) -> None:
        """Should only return rows scoring strictly above the threshold."""
        await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "exact", [[1.0, 0.0]]))
        await memory_store.upsert_article_chunks("a2", "en-US", make_chunk_set("a2", "orthogonal", [[0.0, 1.0]]))

        at_threshold = await memory_store.similarity_search([1.0, 0.0], SearchOptions(limit=10, threshold=1.0))
        below = await memory_store.similarity_search([1.0, 0.0], SearchOptions(limit=10, threshold=0.0))

        assert at_threshold == []
        assert [r.slug for r in below] == ["exact"]
        assert below[0].similarity == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_search_filters(self, memory_store) -> None:
        """Should honor locale, exclusions and limit, best first."""
        await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[1.0, 0.1]]))
        await memory_store.upsert_article_chunks("a2", "en-US", make_chunk_set("a2", "two", [[1.0, 0.3]]))
        await memory_store.upsert_article_chunks("a3", "en-US", make_chunk_set("a3", "three", [[1.0, 0.0]]))
        await memory_store.upsert_article_chunks(
            "a4", "de-DE", make_chunk_set("a4", "vier", [[1.0, 0.0]], locale="de-DE")
        )

        rows = await memory_store.similarity_search(
            [1.0, 0.0],
            SearchOptions(limit=2, threshold=0.0, locale="en-US", exclude_slugs=["three"]),
        )

        assert [r.slug for r in rows] == ["one", "two"]
        assert rows[0].similarity >= rows[1].similarity

    @pytest.mark.asyncio
    async def test_delete_article(self, memory_store) -> None:
        """Should delete every locale of an article, or just one when given."""
        await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[1, 0]] * 2))
        await memory_store.upsert_article_chunks("a1", "de-DE", make_chunk_set("a1", "one", [[1, 0]], locale="de-DE"))

        assert await memory_store.delete_article("a1", "de-DE") == 1
        assert await memory_store.delete_article("a1") == 2
        assert await memory_store.delete_article("a1") == 0

    @pytest.mark.asyncio
    async def test_listing_and_stats(self, memory_store) -> None:
        """Should summarize stored articles per locale."""
        await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[1, 0]] * 2))
        await memory_store.upsert_article_chunks("a2", "en-US", make_chunk_set("a2", "two", [[1, 0]]))
        await memory_store.upsert_article_chunks("a1", "de-DE", make_chunk_set("a1", "one", [[1, 0]], locale="de-DE"))

        assert await memory_store.list_all_article_ids() == ["a1", "a2"]

        synced = await memory_store.list_synced_articles("en-US")
        assert {(s.slug, s.chunk_count, s.total_chunks) for s in synced} == {("one", 2, 2), ("two", 1, 1)}

        stats = await memory_store.get_sync_stats()
        assert stats.total_chunks == 4
        assert stats.unique_articles == 2
        assert [(l.locale, l.chunks) for l in stats.by_locale] == [("de-DE", 1), ("en-US", 3)]
        assert len(stats.recent_syncs) == 3
