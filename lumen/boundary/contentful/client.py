"""
Contentful GraphQL Content API client.

Fetches articles by slug and enumerates the article collection for a locale.
Transport failures are retried with tenacity; anything that still fails,
HTTP errors and GraphQL errors surface as ContentSourceError.

Dependencies: httpx, tenacity, lumen.configs
System role: Read-only adapter to the content management source
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from lumen.boundary.contentful.models import CmsArticle, CmsArticleSummary
from lumen.configs.contentful import ContentfulSettings
from lumen.core.exceptions import ContentSourceError

logger = logging.getLogger(__name__)

ARTICLE_BY_SLUG_QUERY = """
query ArticleBySlug($slug: String!, $locale: String) {
  %(collection)s(where: { slug: $slug }, locale: $locale, limit: 1) {
    items {
      sys { id }
      slug
      title
      shortDescription
      publishedDate
      author { name }
      content { json }
      contentfulMetadata { tags { id name } }
    }
  }
}
"""

ARTICLE_COLLECTION_QUERY = """
query ArticleCollection($locale: String, $limit: Int) {
  %(collection)s(locale: $locale, limit: $limit) {
    items {
      sys { id }
      slug
      title
    }
  }
}
"""


class ContentfulClient:
    """Async client for the Contentful GraphQL Content API."""

    def __init__(
        self,
        settings: ContentfulSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Contentful settings (loaded from CONTENTFUL_* env if None)
            http_client: Preconfigured httpx client (created if None)
        """
        self._settings = settings or ContentfulSettings()
        self._collection_field = f"{self._settings.content_type}Collection"
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.timeout_seconds),
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=0.2, max=2, jitter=0.2),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:_post - Retry {retry_state.attempt_number}/3 after transport error"
        ),
        reraise=True,
    )
    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        return await self._client.post(
            self._settings.endpoint,
            json=payload,
            headers={
                "Authorization": f"Bearer {self._settings.access_token}",
                "Content-Type": "application/json",
            },
        )

    async def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """
        Run a GraphQL query and return its data object.

        Raises:
            ContentSourceError: On transport, HTTP or GraphQL errors
        """
        try:
            response = await self._post({"query": query, "variables": variables})
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{__name__}:_execute - HTTP {e.response.status_code}: {e.response.text[:200]}")
            raise ContentSourceError(
                f"Contentful returned HTTP {e.response.status_code}",
                details={"variables": variables},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:_execute - {type(e).__name__}: {e}")
            raise ContentSourceError(
                f"Contentful request failed: {type(e).__name__}",
                details={"variables": variables},
            ) from e
        except ValueError as e:
            raise ContentSourceError("Contentful returned invalid JSON") from e

        if body.get("errors"):
            messages = [err.get("message", "") for err in body["errors"]]
            raise ContentSourceError(
                "Contentful GraphQL query failed",
                details={"errors": messages, "variables": variables},
            )
        return body.get("data") or {}

    def _items(self, data: dict[str, Any]) -> list[dict[str, Any]]:
        collection = data.get(self._collection_field) or {}
        return [item for item in collection.get("items") or [] if item]

    async def fetch_article_by_slug(self, slug: str, locale: str) -> CmsArticle | None:
        """
        Fetch one article by slug.

        Args:
            slug: Article slug
            locale: Locale tag

        Returns:
            CmsArticle | None: The article, or None when no entry has this slug
        """
        data = await self._execute(
            ARTICLE_BY_SLUG_QUERY % {"collection": self._collection_field},
            {"slug": slug, "locale": locale},
        )
        items = self._items(data)
        if not items:
            return None

        item = items[0]
        tags = ((item.get("contentfulMetadata") or {}).get("tags")) or []
        try:
            return CmsArticle(
                id=item["sys"]["id"],
                slug=item.get("slug") or slug,
                title=item.get("title") or "",
                short_description=item.get("shortDescription"),
                author_name=(item.get("author") or {}).get("name"),
                published_date=item.get("publishedDate"),
                rich_content=(item.get("content") or {}).get("json"),
                tags=[tag.get("name") or tag.get("id") for tag in tags if tag],
            )
        except ValidationError as e:
            raise ContentSourceError(
                f"Contentful returned a malformed entry for {slug}",
                details={"slug": slug, "locale": locale, "errors": e.errors(include_url=False)},
            ) from e

    async def fetch_article_collection(
        self,
        locale: str,
        limit: int | None = None,
    ) -> list[CmsArticleSummary]:
        """
        List the articles of a locale.

        Args:
            locale: Locale tag
            limit: Maximum entries (defaults to CONTENTFUL_COLLECTION_LIMIT)

        Returns:
            list[CmsArticleSummary]: Entries in CMS order
        """
        data = await self._execute(
            ARTICLE_COLLECTION_QUERY % {"collection": self._collection_field},
            {"locale": locale, "limit": limit or self._settings.collection_limit},
        )
        articles = [
            CmsArticleSummary(id=item["sys"]["id"], slug=item.get("slug"), title=item.get("title"))
            for item in self._items(data)
        ]
        logger.info(
            f"{__name__}:fetch_article_collection - Listed {len(articles)} articles",
            extra={"locale": locale},
        )
        return articles
