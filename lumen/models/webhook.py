"""
Webhook response models.

Dependencies: pydantic
System role: Contentful webhook API structures
"""

from pydantic import BaseModel, Field


class LocaleSyncCounts(BaseModel):
    """Per-locale sync outcome counts for one webhook event."""

    successful: int = 0
    skipped: int = 0
    failed: int = 0


class WebhookResponse(BaseModel):
    """Acknowledgement sent back to Contentful."""

    success: bool = True
    message: str
    entry_id: str | None = None
    locales: list[str] | None = None
    results: LocaleSyncCounts | None = None
    deleted_chunks: int | None = Field(default=None, description="Rows removed on unpublish/delete")
    idempotency_key: str | None = None
