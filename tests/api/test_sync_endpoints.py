"""Tests for the admin sync endpoints.

Dependencies: pytest, fastapi, unittest.mock
System role: Manual sync HTTP contract
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from lumen.api.deps import get_sync_pipeline, get_vector_store
from lumen.core.content_processing import BatchSyncResult, SyncOutcome, SyncResult
from lumen.core.exceptions import ContentSourceError
from tests.factories import make_chunk_set


@pytest.fixture
def pipeline(app) -> MagicMock:
    mock = MagicMock()
    app.dependency_overrides[get_sync_pipeline] = lambda: mock
    return mock


def test_sync_single_article(client, pipeline):
    pipeline.sync_article = AsyncMock(
        return_value=SyncResult(
            outcome=SyncOutcome.SYNCED,
            article_id="entry-1",
            slug="slow-living",
            locale="de-DE",
            chunk_count=4,
            message="Synced 4 chunks",
        )
    )

    response = client.post("/api/v1/sync/articles/slow-living", params={"locale": "de-DE"})

    assert response.status_code == 200
    assert response.json()["outcome"] == "synced"
    assert response.json()["chunk_count"] == 4
    pipeline.sync_article.assert_awaited_once_with("slow-living", "de-DE")


def test_sync_missing_article_reported_in_body(client, pipeline):
    pipeline.sync_article = AsyncMock(
        return_value=SyncResult(
            outcome=SyncOutcome.FAILED, slug="ghost", locale="en-US", message="Blog post not found: ghost"
        )
    )

    response = client.post("/api/v1/sync/articles/ghost")

    assert response.status_code == 200
    assert response.json()["outcome"] == "failed"


def test_sync_all(client, pipeline):
    pipeline.sync_all_articles = AsyncMock(
        return_value=BatchSyncResult(locale="en-US", synced=2, failed=1, deleted=1, errors=["two: boom"])
    )

    response = client.post("/api/v1/sync/all")

    assert response.status_code == 200
    body = response.json()
    assert (body["synced"], body["failed"], body["deleted"]) == (2, 1, 1)
    pipeline.sync_all_articles.assert_awaited_once_with("en-US")


def test_sync_all_source_down(client, pipeline):
    pipeline.sync_all_articles = AsyncMock(side_effect=ContentSourceError("Contentful returned HTTP 503"))

    response = client.post("/api/v1/sync/all")

    assert response.status_code == 502
    assert response.json()["detail"] == "Contentful returned HTTP 503"


@pytest.mark.asyncio
async def test_status_and_listing(app, client, memory_store):
    await memory_store.upsert_article_chunks("a1", "en-US", make_chunk_set("a1", "one", [[1.0, 0.0]] * 2))
    await memory_store.upsert_article_chunks("a2", "de-DE", make_chunk_set("a2", "zwei", [[1.0, 0.0]], locale="de-DE"))
    app.dependency_overrides[get_vector_store] = lambda: memory_store

    status = client.get("/api/v1/sync/status").json()
    listing = client.get("/api/v1/sync/articles", params={"locale": "de-DE"}).json()

    assert status["total_chunks"] == 3
    assert status["unique_articles"] == 2
    assert [article["slug"] for article in listing] == ["zwei"]
    assert listing[0]["chunk_count"] == 1
