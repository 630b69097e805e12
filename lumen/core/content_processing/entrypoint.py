"""
Article sync pipeline orchestrator.

Coordinates CMS fetch, plain-text extraction, segmentation, context
composition, embedding and the vector store upsert for one article, and
drives full-collection syncs with reconciliation of articles deleted at
the source.

Dependencies: All task modules, configs, lumen.boundary.contentful, lumen.boundary.vdb, tenacity
System role: Pipeline orchestration (coordinates only)
"""

import logging
from datetime import datetime, timezone

from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential_jitter

from lumen.boundary.contentful import (
    CmsArticle,
    ContentfulClient,
    extract_plain_text,
    truncate_to_token_limit,
)
from lumen.boundary.vdb import ArticleChunk, VectorStore
from lumen.core.exceptions import (
    ContentSourceError,
    EmbeddingProviderError,
    EmptyContentError,
    SourceNotFoundError,
    VectorStoreError,
)
from lumen.core.keyed_lock import KeyedLock
from lumen.observability.log_utils import log_exception_with_context

from .configs import SyncPipelineSettings, get_pipeline_settings
from .models import BatchSyncResult, SyncOutcome, SyncResult
from .tasks import ArticleContext, ContextCompositor, EmbeddingClient, TextSegmenter

logger = logging.getLogger(__name__)


class ArticleSyncPipeline:
    """Orchestrate article sync: fetch -> extract -> segment -> compose -> embed -> upsert."""

    def __init__(
        self,
        cms_client: ContentfulClient,
        vector_store: VectorStore,
        embedding_client: EmbeddingClient,
        settings: SyncPipelineSettings | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            cms_client: Content source client
            vector_store: Chunk store written to
            embedding_client: Embedding provider facade
            settings: Pipeline settings (uses defaults if None)
            locks: Per-(article_id, locale) lock table (created if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._cms_client = cms_client
        self._vector_store = vector_store
        self._embedding_client = embedding_client
        self._locks = locks or KeyedLock()

        self._segmenter = TextSegmenter(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
            separators=self._settings.separators,
        )
        self._compositor = ContextCompositor()

    @property
    def locks(self) -> KeyedLock:
        return self._locks

    async def sync_article(self, slug: str, locale: str) -> SyncResult:
        """
        Sync one article from the CMS into the vector store.

        Never raises for per-article problems: missing articles and pipeline
        failures become `failed` results, empty content becomes `skipped`.

        Args:
            slug: Article slug
            locale: Locale tag

        Returns:
            SyncResult: Outcome with chunk count and message
        """
        try:
            article = await self._cms_client.fetch_article_by_slug(slug, locale)
        except ContentSourceError as e:
            log_exception_with_context(
                logger, f"{__name__}:sync_article - CMS fetch failed", e, slug=slug, locale=locale
            )
            return SyncResult(outcome=SyncOutcome.FAILED, slug=slug, locale=locale, message=e.message)

        if article is None:
            error = SourceNotFoundError(slug, locale)
            logger.warning(f"{__name__}:sync_article - {error}", extra={"locale": locale})
            return SyncResult(
                outcome=SyncOutcome.FAILED,
                slug=slug,
                locale=locale,
                message=error.message,
            )

        async with self._locks.hold((article.id, locale)):
            return await self._sync_fetched(article, locale)

    async def _sync_fetched(self, article: CmsArticle, locale: str) -> SyncResult:
        base = {"article_id": article.id, "slug": article.slug, "locale": locale}

        text = extract_plain_text(article.rich_content)
        if not text:
            error = EmptyContentError(article.slug, locale)
            logger.warning(f"{__name__}:sync_article - {error}", extra=base)
            return SyncResult(outcome=SyncOutcome.SKIPPED, message=error.message, **base)

        chunks = self._segmenter.split(text)
        if not chunks:
            return SyncResult(
                outcome=SyncOutcome.SKIPPED,
                message="Content produced no chunks",
                **base,
            )

        composed = self._compositor.compose(
            ArticleContext(
                title=article.title,
                author_name=article.author_name,
                short_description=article.short_description,
            ),
            chunks,
        )

        try:
            vectors = await self._embedding_client.embed_batch(
                [truncate_to_token_limit(value) for value in composed.embedding_ready]
            )
            synced_at = datetime.now(timezone.utc)
            records = [
                ArticleChunk(
                    article_id=article.id,
                    slug=article.slug,
                    locale=locale,
                    title=article.title,
                    short_description=article.short_description,
                    author_name=article.author_name,
                    published_date=article.published_date,
                    chunk_content=content,
                    chunk_index=index,
                    total_chunks=len(composed.stored),
                    embedding=vector,
                    tags=article.tags,
                    last_synced_at=synced_at,
                )
                for index, (content, vector) in enumerate(zip(composed.stored, vectors))
            ]
            inserted = await self._vector_store.upsert_article_chunks(article.id, locale, records)
        except (EmbeddingProviderError, VectorStoreError) as e:
            log_exception_with_context(
                logger, f"{__name__}:sync_article - Sync failed", e, **base
            )
            return SyncResult(outcome=SyncOutcome.FAILED, message=e.message, **base)

        logger.info(
            f"{__name__}:sync_article - Synced '{article.title}' ({article.slug}) - {inserted} chunks",
            extra=base,
        )
        return SyncResult(
            outcome=SyncOutcome.SYNCED,
            chunk_count=inserted,
            message=f"Synced {inserted} chunks",
            **base,
        )

    async def sync_article_by_id(self, article_id: str, locale: str) -> SyncResult:
        """
        Sync an article identified by its CMS entry id.

        The content API is slug-keyed, so the id is resolved through a
        collection scan first.

        Args:
            article_id: Contentful entry ID
            locale: Locale tag

        Returns:
            SyncResult: `failed` when the id is not in the collection
        """
        try:
            collection = await self._cms_client.fetch_article_collection(locale)
        except ContentSourceError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:sync_article_by_id - Collection scan failed",
                e,
                article_id=article_id,
                locale=locale,
            )
            return SyncResult(
                outcome=SyncOutcome.FAILED,
                article_id=article_id,
                locale=locale,
                message=e.message,
            )

        match = next((entry for entry in collection if entry.id == article_id), None)
        if match is None or not match.slug:
            error = SourceNotFoundError(article_id, locale)
            logger.warning(f"{__name__}:sync_article_by_id - {error}")
            return SyncResult(
                outcome=SyncOutcome.FAILED,
                article_id=article_id,
                locale=locale,
                message=error.message,
            )

        return await self.sync_article(match.slug, locale)

    async def sync_all_articles(self, locale: str) -> BatchSyncResult:
        """
        Sync every article of a locale, then remove orphaned articles.

        Individual failures, expected or not, are recorded and the batch
        continues. When the
        collection cannot be listed the error propagates and nothing is
        reconciled.

        Args:
            locale: Locale tag

        Returns:
            BatchSyncResult: Counters, per-article results, reconciliation outcome

        Raises:
            ContentSourceError: When the collection listing fails
        """
        collection = await self._cms_client.fetch_article_collection(locale)
        logger.info(f"{__name__}:sync_all_articles - Syncing {len(collection)} articles for {locale}")

        batch = BatchSyncResult(locale=locale)
        for entry in collection:
            if not entry.slug:
                continue
            try:
                result = await self.sync_article(entry.slug, locale)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:sync_all_articles - Unexpected error syncing {entry.slug}",
                    e,
                    article_id=entry.id,
                    slug=entry.slug,
                    locale=locale,
                )
                result = SyncResult(
                    outcome=SyncOutcome.FAILED,
                    article_id=entry.id,
                    slug=entry.slug,
                    locale=locale,
                    message=f"Unexpected error: {type(e).__name__}: {e}",
                )
            batch.record(result)

        live_ids = {entry.id for entry in collection}
        await self._reconcile(live_ids, batch)

        logger.info(
            f"{__name__}:sync_all_articles - Sync complete for {locale}: "
            f"{batch.synced} synced, {batch.skipped} skipped, {batch.failed} failed, "
            f"{batch.deleted} deleted"
        )
        return batch

    async def _reconcile(self, live_ids: set[str], batch: BatchSyncResult) -> None:
        try:
            stored_ids = await self._vector_store.list_all_article_ids()
        except VectorStoreError as e:
            log_exception_with_context(
                logger, f"{__name__}:_reconcile - Could not list stored articles", e
            )
            batch.errors.append(f"reconciliation: {e}")
            return

        for article_id in stored_ids:
            if article_id in live_ids:
                continue
            try:
                async for attempt in AsyncRetrying(
                    stop=stop_after_attempt(self._settings.reconciliation_attempts),
                    wait=wait_exponential_jitter(initial=0.5, max=5, jitter=0.5),
                    reraise=True,
                ):
                    with attempt:
                        await self._vector_store.delete_article(article_id)
            except VectorStoreError as e:
                logger.error(
                    f"{__name__}:_reconcile - Orphaned article {article_id} could not be deleted: {e}",
                    extra={"article_id": article_id},
                )
                batch.reconciliation_failures.append(article_id)
                continue

            batch.deleted += 1
            logger.info(f"{__name__}:_reconcile - Deleted embeddings for removed article {article_id}")
