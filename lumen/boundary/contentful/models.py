"""
Contentful article schemas.

Pydantic models for the article shapes the sync pipeline reads from the CMS.

Dependencies: pydantic
System role: Type definitions for CMS content
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CmsArticleSummary(BaseModel):
    """Collection entry: enough to enumerate and resolve ids to slugs."""

    id: str = Field(description="Contentful entry ID (sys.id)")
    slug: str | None = Field(default=None, description="Article slug, may be missing on drafts")
    title: str | None = Field(default=None, description="Article title")


class CmsArticle(BaseModel):
    """Full article as fetched by slug."""

    id: str = Field(description="Contentful entry ID (sys.id)")
    slug: str
    title: str = ""
    short_description: str | None = None
    author_name: str | None = None
    published_date: datetime | None = None
    rich_content: dict[str, Any] | None = Field(
        default=None,
        description="Rich text document (content.json)",
    )
    tags: list[str] = Field(default_factory=list)
