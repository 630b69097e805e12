"""
Common response models.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    details: dict | None = Field(default=None, description="Component-specific detail")


class ErrorResponse(BaseModel):
    """Error body returned by the webhook endpoint."""

    error: str = Field(description="Error message")
    message: str | None = Field(default=None, description="Underlying cause")
