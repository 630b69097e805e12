"""
Application services.

Exports: WebhookService
"""

from lumen.application.services.webhook_service import WebhookService

__all__ = ["WebhookService"]
