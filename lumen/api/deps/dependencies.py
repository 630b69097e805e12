"""
Dependency injection container.

Lazily constructed, explicitly torn down service instances and the FastAPI
dependency functions that hand them to routers.

Dependencies: lumen.configs, lumen.application, lumen.boundary, lumen.core
System role: DI container for service injection
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from lumen.configs import get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._engine = None
        self._session_factory = None
        self._vector_store = None
        self._embedding_client = None
        self._cms_client = None
        self._sync_pipeline = None
        self._content_tools = None
        self._content_agent = None
        self._webhook_service = None

    @property
    def engine(self) -> AsyncEngine:
        """Get cached database engine."""
        if self._engine is None:
            from lumen.boundary.db.connection import get_async_engine
            self._engine = get_async_engine()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get cached session factory bound to the shared engine."""
        if self._session_factory is None:
            from lumen.boundary.db.connection import get_async_session_factory
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def vector_store(self):
        """Get cached vector store."""
        if self._vector_store is None:
            from lumen.boundary.vdb.vector_store_factory import get_vector_store
            store_type = get_settings().vector_store.store_type.lower()
            self._vector_store = get_vector_store(
                session_factory=self.session_factory if store_type == "pgvector" else None,
            )
        return self._vector_store

    @property
    def embedding_client(self):
        """Get cached embedding client."""
        if self._embedding_client is None:
            from lumen.core.content_processing.tasks import EmbeddingClient
            self._embedding_client = EmbeddingClient.from_settings()
        return self._embedding_client

    @property
    def cms_client(self):
        """Get cached Contentful client."""
        if self._cms_client is None:
            from lumen.boundary.contentful import ContentfulClient
            self._cms_client = ContentfulClient(settings=get_settings().contentful)
        return self._cms_client

    @property
    def sync_pipeline(self):
        """Get cached sync pipeline (one instance, so one lock table)."""
        if self._sync_pipeline is None:
            from lumen.core.content_processing import ArticleSyncPipeline
            self._sync_pipeline = ArticleSyncPipeline(
                cms_client=self.cms_client,
                vector_store=self.vector_store,
                embedding_client=self.embedding_client,
            )
        return self._sync_pipeline

    @property
    def content_tools(self):
        """Get cached content tools."""
        if self._content_tools is None:
            from lumen.core.agentic_system.content_agent import ContentTools
            config = get_settings().vector_store
            self._content_tools = ContentTools(
                vector_store=self.vector_store,
                embedding_client=self.embedding_client,
                search_threshold=config.search_threshold,
                recommendation_vector=config.recommendation_vector,
            )
        return self._content_tools

    @property
    def content_agent(self):
        """Get cached content agent."""
        if self._content_agent is None:
            from lumen.core.agentic_system.content_agent import ContentAgent
            config = get_settings().agent
            self._content_agent = ContentAgent(
                content_tools=self.content_tools,
                model_id=config.model_id,
                temperature=config.temperature,
                timeout_seconds=config.timeout_seconds,
            )
        return self._content_agent

    @property
    def webhook_service(self):
        """Get cached webhook service."""
        if self._webhook_service is None:
            from lumen.application.services import WebhookService
            self._webhook_service = WebhookService(
                pipeline=self.sync_pipeline,
                vector_store=self.vector_store,
                settings=get_settings().contentful,
            )
        return self._webhook_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._vector_store = None
        self._embedding_client = None
        self._cms_client = None
        self._sync_pipeline = None
        self._content_tools = None
        self._content_agent = None
        self._webhook_service = None

    async def aclose(self) -> None:
        """Close network resources, then clear the cache."""
        if self._cms_client is not None:
            await self._cms_client.aclose()
        if self._engine is not None:
            await self._engine.dispose()
        self.clear()


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_vector_store():
    """Get the shared vector store."""
    return get_service_cache().vector_store


def get_sync_pipeline():
    """Get the shared sync pipeline."""
    return get_service_cache().sync_pipeline


def get_content_tools():
    """Get the content tool surface."""
    return get_service_cache().content_tools


def get_content_agent():
    """Get the conversational content agent."""
    return get_service_cache().content_agent


def get_webhook_service():
    """Get the Contentful webhook service."""
    return get_service_cache().webhook_service
