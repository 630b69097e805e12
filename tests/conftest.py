"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory and SQLite-backed stores, embedding fakes, CMS client mocks
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def memory_store():
    """Empty in-memory vector store without a dimension check."""
    from lumen.boundary.vdb import InMemoryVectorStore

    return InMemoryVectorStore()


@pytest.fixture
async def sqlite_session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Session factory bound to a fresh schema
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from lumen.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def fake_embeddings():
    """Deterministic LangChain embeddings with 8 dimensions."""
    from langchain_core.embeddings import DeterministicFakeEmbedding

    return DeterministicFakeEmbedding(size=8)


@pytest.fixture
def embedding_client(fake_embeddings):
    """EmbeddingClient over the deterministic fake provider."""
    from lumen.core.content_processing.tasks import EmbeddingClient

    return EmbeddingClient(fake_embeddings, dimension=8, timeout_seconds=5.0)


@pytest.fixture
def mock_cms_client():
    """
    Create mock ContentfulClient for testing.

    Returns:
        MagicMock: Client with async fetch methods
    """
    client = MagicMock()
    client.fetch_article_by_slug = AsyncMock(return_value=None)
    client.fetch_article_collection = AsyncMock(return_value=[])
    client.aclose = AsyncMock()
    return client
