"""
Content retrieval tools for the Lumen agent.

Three read-only operations over the vector store: semantic search,
full-article reconstruction, and related-article recommendations. Every
failure is turned into a `{success: false, message}` result so the agent
can always answer the reader.

Dependencies: langchain_core.tools, numpy, lumen.boundary.vdb
System role: Retrieval tool surface bound by the content agent and the tools API
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, Literal

import numpy as np
from langchain_core.tools import StructuredTool
from pydantic import BaseModel

from lumen.boundary.vdb import ArticleSearchResult, SearchOptions, VectorStore
from lumen.core.agentic_system.content_agent.content_tool_schema import (
    ArticleContent,
    ArticleSummary,
    GetArticleContentInput,
    GetArticleContentResult,
    Recommendation,
    RecommendRelatedArticlesInput,
    RecommendRelatedArticlesResult,
    ReferenceArticle,
    SearchKnowledgeBaseInput,
    SearchKnowledgeBaseResult,
)
from lumen.core.content_processing.tasks import EmbeddingClient

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 200


def _describe(article: ArticleSearchResult) -> str | None:
    if article.short_description:
        return article.short_description
    if article.matching_chunks:
        return article.matching_chunks[0].content[:EXCERPT_LENGTH] + "..."
    return None


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class ContentTools:
    """Search, fetch and recommend operations exposed to the agent."""

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_client: EmbeddingClient,
        search_threshold: float = 0.5,
        recommendation_vector: Literal["first_chunk", "centroid"] = "first_chunk",
    ) -> None:
        """
        Initialize the tool surface.

        Args:
            vector_store: Store queried by every tool
            embedding_client: Embeds search queries
            search_threshold: Similarity threshold used when the caller gives none
            recommendation_vector: Reference vector for recommendations, the
                first chunk's embedding or the centroid of all chunk embeddings
        """
        self._vector_store = vector_store
        self._embedding_client = embedding_client
        self._search_threshold = search_threshold
        self._recommendation_vector = recommendation_vector

    async def search_knowledge_base(
        self,
        query: str,
        limit: int = 5,
        locale: str = "en-US",
        threshold: float | None = None,
    ) -> dict[str, Any]:
        """
        Find the articles most relevant to a query.

        Over-fetches limit*3 chunks so enough distinct articles survive grouping.

        Args:
            query: Free-text query
            limit: Number of articles to return
            locale: Content locale
            threshold: Similarity floor (service default when None)

        Returns:
            dict: {success, message, results}
        """
        try:
            query_vector = await self._embedding_client.embed(query)
            rows = await self._vector_store.similarity_search(
                query_vector,
                SearchOptions(
                    limit=limit * 3,
                    threshold=self._search_threshold if threshold is None else threshold,
                    locale=locale,
                ),
            )
            if not rows:
                return SearchKnowledgeBaseResult(
                    success=False,
                    message="No relevant articles found in the knowledge base.",
                ).model_dump()

            articles = self._vector_store.group_and_rank_by_article(rows)[:limit]
            results = [
                ArticleSummary(
                    title=article.title,
                    slug=article.slug,
                    locale=article.locale,
                    description=_describe(article),
                    author=article.author_name,
                    published_date=_iso(article.published_date),
                    relevant_excerpt=article.matching_chunks[0].content if article.matching_chunks else None,
                )
                for article in articles
            ]
            logger.info(
                f"{__name__}:search_knowledge_base - {len(rows)} chunks -> {len(results)} articles",
                extra={"locale": locale, "limit": limit},
            )
            return SearchKnowledgeBaseResult(
                success=True,
                message=f"Found {len(results)} relevant article(s)",
                results=results,
            ).model_dump()
        except Exception as e:
            logger.error(f"{__name__}:search_knowledge_base - {type(e).__name__}: {e}", exc_info=e)
            return SearchKnowledgeBaseResult(
                success=False,
                message="Error searching the knowledge base.",
            ).model_dump()

    async def get_article_content(self, slug: str, locale: str = "en-US") -> dict[str, Any]:
        """
        Reassemble a full article from its stored chunks.

        Args:
            slug: Article slug
            locale: Content locale

        Returns:
            dict: {success, article} or {success: false, message}
        """
        try:
            chunks = await self._vector_store.get_article_chunks(slug, locale)
            if not chunks:
                return GetArticleContentResult(
                    success=False,
                    message=f"Article not found: {slug}",
                ).model_dump(exclude={"article"})

            first = chunks[0]
            ordered = sorted(chunks, key=lambda chunk: chunk.chunk_index)
            article = ArticleContent(
                title=first.title,
                slug=first.slug,
                locale=first.locale,
                description=first.short_description,
                content="\n\n".join(chunk.chunk_content for chunk in ordered),
                author=first.author_name,
                published_date=_iso(first.published_date),
                total_chunks=first.total_chunks,
            )
            return GetArticleContentResult(success=True, article=article).model_dump(exclude={"message"})
        except Exception as e:
            logger.error(f"{__name__}:get_article_content - {type(e).__name__}: {e}", exc_info=e)
            return GetArticleContentResult(
                success=False,
                message="Error retrieving article content.",
            ).model_dump(exclude={"article"})

    async def recommend_related_articles(
        self,
        slug: str,
        limit: int = 3,
        locale: str = "en-US",
    ) -> dict[str, Any]:
        """
        Recommend articles similar to a reference article.

        The reference article is excluded from the search and from the results.

        Args:
            slug: Reference article slug
            limit: Number of recommendations
            locale: Content locale

        Returns:
            dict: {success, message, reference_article, recommendations}
        """
        try:
            reference_chunks = await self._vector_store.get_article_chunks(slug, locale)
            if not reference_chunks:
                return RecommendRelatedArticlesResult(
                    success=False,
                    message=f"Reference article not found: {slug}",
                ).model_dump()

            reference = reference_chunks[0]
            if self._recommendation_vector == "centroid":
                vector = np.mean([chunk.embedding for chunk in reference_chunks], axis=0).tolist()
            else:
                vector = reference.embedding

            rows = await self._vector_store.similarity_search(
                vector,
                SearchOptions(
                    limit=(limit + 1) * 3,
                    threshold=self._search_threshold,
                    locale=locale,
                    exclude_slugs=[slug],
                ),
            )
            articles = [
                article
                for article in self._vector_store.group_and_rank_by_article(rows)
                if article.slug != slug
            ][:limit]
            recommendations = [
                Recommendation(
                    title=article.title,
                    slug=article.slug,
                    locale=article.locale,
                    description=_describe(article),
                    author=article.author_name,
                )
                for article in articles
            ]

            if not recommendations:
                message = (
                    f'No related articles found for "{reference.title}". '
                    "The archive may not have closely matching content yet."
                )
            elif len(recommendations) < limit:
                message = (
                    f'Found {len(recommendations)} related article(s) for "{reference.title}" '
                    "(fewer than requested, but these are the most relevant matches)"
                )
            else:
                message = f'Found {len(recommendations)} related article(s) for "{reference.title}"'

            return RecommendRelatedArticlesResult(
                success=bool(recommendations),
                message=message,
                reference_article=ReferenceArticle(
                    title=reference.title,
                    slug=reference.slug,
                    locale=reference.locale,
                ),
                recommendations=recommendations,
            ).model_dump()
        except Exception as e:
            logger.error(f"{__name__}:recommend_related_articles - {type(e).__name__}: {e}", exc_info=e)
            return RecommendRelatedArticlesResult(
                success=False,
                message="Error finding related articles.",
            ).model_dump()

    def registry(self) -> dict[str, tuple[type[BaseModel], Callable[..., Awaitable[dict[str, Any]]]]]:
        """Stable tool name -> (argument schema, coroutine)."""
        return {
            "searchKnowledgeBase": (SearchKnowledgeBaseInput, self.search_knowledge_base),
            "getArticleContent": (GetArticleContentInput, self.get_article_content),
            "recommendRelatedArticles": (RecommendRelatedArticlesInput, self.recommend_related_articles),
        }

    async def invoke(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Run a tool by its stable name with a JSON argument object.

        Raises:
            KeyError: Unknown tool name
            pydantic.ValidationError: Arguments do not match the tool schema
        """
        schema, coroutine = self.registry()[tool_name]
        args = schema.model_validate(arguments)
        return await coroutine(**args.model_dump())


TOOL_DESCRIPTIONS = {
    "searchKnowledgeBase": (
        "Search the content knowledge base for articles related to a user's query. "
        "Use this tool to find relevant blog posts when users ask questions or request "
        "recommendations. Returns top matching articles with their most relevant excerpts."
    ),
    "getArticleContent": (
        "Retrieve the full content of a specific article by its slug. Use this tool when "
        "you need to read the complete article to answer detailed questions or create summaries."
    ),
    "recommendRelatedArticles": (
        "Find articles related to a specific article by slug. Use this tool to recommend "
        "similar content based on what the reader is currently viewing. The reference "
        "article is never part of the results."
    ),
}


def create_content_tools(content_tools: ContentTools) -> list[StructuredTool]:
    """
    Bind the content tools as LangChain StructuredTools.

    Args:
        content_tools: Tool implementation bound to a vector store

    Returns:
        list[StructuredTool]: searchKnowledgeBase, getArticleContent, recommendRelatedArticles
    """
    return [
        StructuredTool.from_function(
            coroutine=coroutine,
            name=name,
            description=TOOL_DESCRIPTIONS[name],
            args_schema=schema,
        )
        for name, (schema, coroutine) in content_tools.registry().items()
    ]
