"""API routers."""

from .chat import router as chat_router
from .health import router as health_router
from .sync import router as sync_router
from .tools import router as tools_router
from .webhooks import router as webhooks_router

__all__ = [
    "chat_router",
    "health_router",
    "sync_router",
    "tools_router",
    "webhooks_router",
]
