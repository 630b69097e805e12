"""FastAPI dependencies."""

from lumen.api.deps.dependencies import (
    ServiceCache,
    get_content_agent,
    get_content_tools,
    get_service_cache,
    get_sync_pipeline,
    get_vector_store,
    get_webhook_service,
)

__all__ = [
    "ServiceCache",
    "get_content_agent",
    "get_content_tools",
    "get_service_cache",
    "get_sync_pipeline",
    "get_vector_store",
    "get_webhook_service",
]
