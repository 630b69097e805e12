"""API request/response models."""

from lumen.models.chat import ChatMessage, ChatRequest, ChatResponse
from lumen.models.common import ErrorResponse, HealthResponse
from lumen.models.webhook import LocaleSyncCounts, WebhookResponse

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "LocaleSyncCounts",
    "WebhookResponse",
]
