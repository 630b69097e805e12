"""
Admin sync API endpoints.

Routes:
- POST /sync/articles/{slug} - Sync one article
- POST /sync/all - Sync a whole locale with reconciliation
- GET /sync/status - Stored chunk statistics
- GET /sync/articles - Synced article list

Dependencies: lumen.core.content_processing, lumen.boundary.vdb
System role: Manual sync trigger and status HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from lumen.api.deps import get_sync_pipeline, get_vector_store
from lumen.boundary.vdb import SyncedArticle, SyncStats, VectorStore
from lumen.core.content_processing import ArticleSyncPipeline, BatchSyncResult, SyncResult
from lumen.core.exceptions import ContentSourceError, VectorStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/articles/{slug}", response_model=SyncResult)
async def sync_article(
    slug: str,
    locale: str = Query(default="en-US"),
    pipeline: ArticleSyncPipeline = Depends(get_sync_pipeline),
) -> SyncResult:
    """Sync one article; failures are reported in the result, not as HTTP errors."""
    return await pipeline.sync_article(slug, locale)


@router.post("/all", response_model=BatchSyncResult)
async def sync_all(
    locale: str = Query(default="en-US"),
    pipeline: ArticleSyncPipeline = Depends(get_sync_pipeline),
) -> BatchSyncResult:
    """
    Sync every article of a locale.

    Raises:
        HTTPException(502): The CMS collection could not be listed
    """
    try:
        return await pipeline.sync_all_articles(locale)
    except ContentSourceError as e:
        logger.error(f"{__name__}:sync_all - {e}")
        raise HTTPException(status_code=502, detail=e.message) from e


@router.get("/status", response_model=SyncStats)
async def sync_status(vector_store: VectorStore = Depends(get_vector_store)) -> SyncStats:
    """Stored chunk statistics."""
    try:
        return await vector_store.get_sync_stats()
    except VectorStoreError as e:
        raise HTTPException(status_code=503, detail=e.message) from e


@router.get("/articles", response_model=list[SyncedArticle])
async def synced_articles(
    locale: str | None = Query(default=None),
    vector_store: VectorStore = Depends(get_vector_store),
) -> list[SyncedArticle]:
    """Articles currently stored, most recently synced first."""
    try:
        return await vector_store.list_synced_articles(locale)
    except VectorStoreError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
