"""
Chat request/response models.

Dependencies: pydantic
System role: Chat API structures
"""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One conversation turn."""

    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Conversation sent to the content agent."""

    messages: list[ChatMessage] = Field(min_length=1, description="Conversation, oldest first")
    current_slug: str | None = Field(default=None, description="Slug of the page the reader is on")
    locale: str | None = Field(default=None, description="Locale of that page")


class ChatResponse(BaseModel):
    """Final agent answer."""

    answer: str
