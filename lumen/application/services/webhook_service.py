"""
Contentful webhook service.

Verifies signed webhook requests and translates entry lifecycle events into
sync pipeline calls. Publish and save events resync every locale present on
the entry; auto-save is ignored; unpublish and delete keep the embeddings
unless deletion is enabled in settings.

Verification follows Contentful's request signing scheme: a hex
HMAC-SHA256 over "\\n".join([method, path, signed_headers, body]).

Dependencies: hmac, hashlib, lumen.core.content_processing, lumen.boundary.vdb
System role: Webhook ingress orchestration
"""

import hashlib
import hmac
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from lumen.boundary.vdb import VectorStore
from lumen.configs.contentful import ContentfulSettings
from lumen.core.content_processing import ArticleSyncPipeline, SyncOutcome
from lumen.core.exceptions import SignatureVerificationError
from lumen.models.webhook import LocaleSyncCounts, WebhookResponse

logger = logging.getLogger(__name__)

TOPIC_PUBLISH = "ContentManagement.Entry.publish"
TOPIC_SAVE = "ContentManagement.Entry.save"
TOPIC_AUTO_SAVE = "ContentManagement.Entry.auto_save"
TOPIC_UNPUBLISH = "ContentManagement.Entry.unpublish"
TOPIC_DELETE = "ContentManagement.Entry.delete"

SIGNATURE_HEADER = "x-contentful-signature"
TIMESTAMP_HEADER = "x-contentful-timestamp"
SIGNED_HEADERS_HEADER = "x-contentful-signed-headers"


def compute_signature(
    secret: str,
    method: str,
    path: str,
    headers: Mapping[str, str],
    signed_header_names: list[str],
    body: str,
) -> str:
    """
    Compute the request signature Contentful sends in x-contentful-signature.

    Args:
        secret: Shared signing secret
        method: HTTP method
        path: Request path without scheme, host or port
        headers: Request headers with lower-cased names
        signed_header_names: Names listed in x-contentful-signed-headers
        body: Raw request body

    Returns:
        str: Hex HMAC-SHA256 digest
    """
    canonical_headers = ";".join(
        f"{name.lower()}:{headers.get(name.lower(), '')}" for name in signed_header_names
    )
    canonical = "\n".join([method, path, canonical_headers, body])
    return hmac.new(secret.encode("utf-8"), canonical.encode("utf-8"), hashlib.sha256).hexdigest()


class WebhookService:
    """
    Contentful webhook orchestrator.

    Shares the sync pipeline (and so its per-article locks) with the admin
    sync endpoints.
    """

    def __init__(
        self,
        pipeline: ArticleSyncPipeline,
        vector_store: VectorStore,
        settings: ContentfulSettings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize webhook service.

        Args:
            pipeline: Sync pipeline used for publish/save events
            vector_store: Store used when unpublish deletion is enabled
            settings: Contentful settings (secret, TTL, content type)
            clock: Seconds-since-epoch source
        """
        self._pipeline = pipeline
        self._vector_store = vector_store
        self._settings = settings
        self._clock = clock

    @property
    def verification_enabled(self) -> bool:
        return bool(self._settings.webhook_secret)

    def verify_signature(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        body: str,
    ) -> None:
        """
        Verify a webhook request.

        Without a configured secret the request is accepted and a warning is logged.

        Args:
            method: HTTP method
            path: Request path
            headers: Request headers (any case)
            body: Raw request body

        Raises:
            SignatureVerificationError: Signature missing, stale or wrong
        """
        secret = self._settings.webhook_secret
        if not secret:
            logger.warning(
                f"{__name__}:verify_signature - CONTENTFUL_WEBHOOK_SECRET not set, "
                "signature verification is DISABLED"
            )
            return

        lowered = {name.lower(): value for name, value in headers.items()}
        signature = lowered.get(SIGNATURE_HEADER)
        if not signature:
            raise SignatureVerificationError("missing signature")

        timestamp = lowered.get(TIMESTAMP_HEADER)
        if timestamp:
            try:
                request_ms = int(timestamp)
            except ValueError as e:
                raise SignatureVerificationError("malformed timestamp") from e
            now_ms = int(self._clock() * 1000)
            if request_ms + self._settings.webhook_ttl_seconds * 1000 < now_ms:
                raise SignatureVerificationError(
                    "timestamp outside TTL",
                    details={"age_ms": now_ms - request_ms},
                )

        signed_names = [
            name.strip()
            for name in (lowered.get(SIGNED_HEADERS_HEADER) or "").split(",")
            if name.strip()
        ]
        expected = compute_signature(secret, method, path, lowered, signed_names, body)
        if not hmac.compare_digest(expected, signature):
            raise SignatureVerificationError("signature mismatch")

        logger.info(f"{__name__}:verify_signature - Webhook signature verified")

    async def handle_event(
        self,
        topic: str | None,
        payload: dict[str, Any],
        idempotency_key: str | None = None,
    ) -> WebhookResponse:
        """
        Dispatch a verified webhook payload by topic.

        Args:
            topic: x-contentful-topic header
            payload: Parsed JSON body
            idempotency_key: x-contentful-idempotency-key header

        Returns:
            WebhookResponse: Acknowledgement body
        """
        entry_sys = payload.get("sys") or {}
        entry_id = entry_sys.get("id")
        content_type = ((entry_sys.get("contentType") or {}).get("sys") or {}).get("id")

        logger.info(
            f"{__name__}:handle_event - Contentful webhook received",
            extra={
                "topic": topic,
                "idempotency_key": idempotency_key,
                "entry_id": entry_id,
                "content_type": content_type,
            },
        )

        if content_type != self._settings.content_type:
            logger.info(f"{__name__}:handle_event - Ignoring content type {content_type or entry_sys.get('type')}")
            return WebhookResponse(message="Ignored non-blog-post content")

        if topic in (TOPIC_PUBLISH, TOPIC_SAVE):
            return await self._sync_entry(entry_id, payload, idempotency_key)

        if topic == TOPIC_AUTO_SAVE:
            return WebhookResponse(message="Auto-save event ignored (will sync on publish/save)")

        if topic in (TOPIC_UNPUBLISH, TOPIC_DELETE):
            return await self._retire_entry(entry_id, topic, idempotency_key)

        logger.info(f"{__name__}:handle_event - Unhandled topic {topic}")
        return WebhookResponse(
            message="Webhook received but not processed",
            idempotency_key=idempotency_key,
        )

    async def _sync_entry(
        self,
        entry_id: str,
        payload: dict[str, Any],
        idempotency_key: str | None,
    ) -> WebhookResponse:
        title_field = (payload.get("fields") or {}).get("title")
        locales = list(title_field.keys()) if isinstance(title_field, dict) and title_field else ["en-US"]
        logger.info(f"{__name__}:_sync_entry - Syncing {entry_id} for locales: {', '.join(locales)}")

        counts = LocaleSyncCounts()
        for locale in locales:
            result = await self._pipeline.sync_article_by_id(entry_id, locale)
            if result.outcome == SyncOutcome.SYNCED:
                counts.successful += 1
            elif result.outcome == SyncOutcome.SKIPPED:
                counts.skipped += 1
            else:
                counts.failed += 1

        logger.info(
            f"{__name__}:_sync_entry - Sync complete: {counts.successful} succeeded, "
            f"{counts.skipped} skipped, {counts.failed} failed"
        )
        return WebhookResponse(
            message=f"Blog post {entry_id} synced to vector database",
            entry_id=entry_id,
            locales=locales,
            results=counts,
            idempotency_key=idempotency_key,
        )

    async def _retire_entry(
        self,
        entry_id: str,
        topic: str,
        idempotency_key: str | None,
    ) -> WebhookResponse:
        action = "unpublished" if topic == TOPIC_UNPUBLISH else "deleted"

        if not self._settings.webhook_delete_on_unpublish:
            logger.info(f"{__name__}:_retire_entry - Blog post {entry_id} was {action}, embeddings kept")
            return WebhookResponse(
                message=f"Blog post {entry_id} {action} - embeddings preserved",
                entry_id=entry_id,
                idempotency_key=idempotency_key,
            )

        removed = await self._vector_store.delete_article(entry_id)
        logger.info(f"{__name__}:_retire_entry - Blog post {entry_id} was {action}, removed {removed} chunks")
        return WebhookResponse(
            message=f"Blog post {entry_id} {action} - embeddings removed",
            entry_id=entry_id,
            deleted_chunks=removed,
            idempotency_key=idempotency_key,
        )
