"""
FastAPI application with assembled routers.

Initializes the FastAPI app with all API routers and configures the uvicorn server.

Dependencies: fastapi, lumen.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lumen import __version__
from lumen.api.deps.dependencies import get_service_cache
from lumen.configs import get_settings
from lumen.observability import configure_logging
from lumen.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    chat_router,
    health_router,
    sync_router,
    tools_router,
    webhooks_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and pre-warms the service cache on startup; closes
    the CMS client and database pool on shutdown.
    """
    configure_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    logger.info(f"{__name__}:lifespan - Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.vector_store
    _ = cache.cms_client
    _ = cache.webhook_service
    logger.info(f"{__name__}:lifespan - Service cache pre-warmed")

    yield

    await cache.aclose()
    logger.info(f"{__name__}:lifespan - Service cache closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Lumen Content RAG API",
        description="Contentful-backed semantic search, recommendations and chat",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added runs outermost
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(webhooks_router, prefix="/api/v1")
    app.include_router(sync_router, prefix="/api/v1")
    app.include_router(tools_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "lumen.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
