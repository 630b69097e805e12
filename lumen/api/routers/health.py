"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/vector-store

Dependencies: lumen.boundary
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lumen.api.deps import get_vector_store
from lumen.boundary.db.connection import get_async_db
from lumen.boundary.vdb import VectorStore
from lumen.core.exceptions import VectorStoreError
from lumen.models.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Database health check (runs SELECT 1)."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:health_check_db - {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable") from e
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    vector_store: VectorStore = Depends(get_vector_store),
) -> HealthResponse:
    """Vector store health check."""
    try:
        stats = await vector_store.get_sync_stats()
    except VectorStoreError as e:
        logger.error(f"{__name__}:health_check_vector_store - {e}")
        raise HTTPException(status_code=503, detail="Vector store unavailable") from e
    return HealthResponse(
        status="healthy",
        message="Vector store accessible",
        details={
            "store_type": vector_store.store_type,
            "total_chunks": stats.total_chunks,
            "unique_articles": stats.unique_articles,
        },
    )
