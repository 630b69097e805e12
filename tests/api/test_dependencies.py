"""
Test suite for the dependency injection container.

Verifies the FastAPI dependency helpers always hand out the instances the
service cache currently holds.

System role: Verification of DI container
"""

import pytest

from lumen.api.deps import get_service_cache, get_vector_store
from lumen.boundary.vdb import InMemoryVectorStore


@pytest.fixture
def cache():
    cache = get_service_cache()
    cache.clear()
    yield cache
    cache.clear()


class TestGetVectorStore:
    """Test suite for get_vector_store."""

    def test_returns_cached_store(self, cache) -> None:
        """Should return the store held by the service cache."""
        store = InMemoryVectorStore()
        cache._vector_store = store

        assert get_vector_store() is store

    def test_follows_cache_after_clear(self, cache) -> None:
        """Should hand out the rebuilt store once the cache is cleared."""
        first = InMemoryVectorStore()
        cache._vector_store = first
        assert get_vector_store() is first

        cache.clear()
        second = InMemoryVectorStore()
        cache._vector_store = second

        assert get_vector_store() is second
