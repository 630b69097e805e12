"""
Content tool schemas.

Argument schemas the LLM binds to and the result shapes it receives back.
Field names are part of the tool contract and must stay stable. Result
shapes never carry similarity scores.

Dependencies: pydantic
System role: Tool argument/result schema definitions
"""

from pydantic import BaseModel, Field


class SearchKnowledgeBaseInput(BaseModel):
    """Arguments for searchKnowledgeBase."""

    query: str = Field(description="The search query - a question, topic, or keywords")
    limit: int = Field(default=5, ge=1, le=20, description="Number of articles to return (default: 5)")
    threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Minimum relevance between 0 and 1 (nominally 0.7; leave empty for the broader service default)",
    )
    locale: str = Field(default="en-US", description="Content locale")


class GetArticleContentInput(BaseModel):
    """Arguments for getArticleContent."""

    slug: str = Field(description="The article slug/URL identifier")
    locale: str = Field(default="en-US", description="Content locale")


class RecommendRelatedArticlesInput(BaseModel):
    """Arguments for recommendRelatedArticles."""

    slug: str = Field(description="The reference article slug")
    limit: int = Field(default=3, ge=1, le=10, description="Number of recommendations (default: 3)")
    locale: str = Field(default="en-US", description="Content locale")


class ArticleSummary(BaseModel):
    """An article as shown in search results."""

    title: str
    slug: str
    locale: str
    description: str | None = None
    author: str | None = None
    published_date: str | None = None
    relevant_excerpt: str | None = None


class SearchKnowledgeBaseResult(BaseModel):
    success: bool
    message: str
    results: list[ArticleSummary] = Field(default_factory=list)


class ArticleContent(BaseModel):
    """A full article reassembled from its chunks."""

    title: str
    slug: str
    locale: str
    description: str | None = None
    content: str
    author: str | None = None
    published_date: str | None = None
    total_chunks: int


class GetArticleContentResult(BaseModel):
    success: bool
    message: str | None = None
    article: ArticleContent | None = None


class ReferenceArticle(BaseModel):
    title: str
    slug: str
    locale: str


class Recommendation(BaseModel):
    title: str
    slug: str
    locale: str
    description: str | None = None
    author: str | None = None


class RecommendRelatedArticlesResult(BaseModel):
    success: bool
    message: str
    reference_article: ReferenceArticle | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)
