"""Tests for WebhookService.

Dependencies: pytest, pytest-asyncio, unittest.mock
System role: Webhook verification and topic dispatch
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from lumen.application.services import WebhookService
from lumen.application.services.webhook_service import (
    TOPIC_AUTO_SAVE,
    TOPIC_DELETE,
    TOPIC_PUBLISH,
    TOPIC_SAVE,
    TOPIC_UNPUBLISH,
    compute_signature,
)
from lumen.configs.contentful import ContentfulSettings
from lumen.core.content_processing import SyncOutcome, SyncResult
from lumen.core.exceptions import SignatureVerificationError

SECRET = "s3cret"
NOW = 1_700_000_000.0
PATH = "/api/v1/webhooks/contentful"
BODY = '{"sys": {"id": "entry-1"}}'


def signed_headers(body: str = BODY, timestamp_ms: int | None = None, secret: str = SECRET) -> dict[str, str]:
    timestamp = str(timestamp_ms if timestamp_ms is not None else int(NOW * 1000))
    headers = {
        "x-contentful-timestamp": timestamp,
        "x-contentful-signed-headers": "x-contentful-signed-headers,x-contentful-timestamp",
    }
    headers["x-contentful-signature"] = compute_signature(
        secret,
        "POST",
        PATH,
        headers,
        ["x-contentful-signed-headers", "x-contentful-timestamp"],
        body,
    )
    return headers


def entry_payload(entry_id: str = "entry-1", content_type: str = "pageBlogPost", locales=("en-US", "de-DE")) -> dict:
    return {
        "sys": {
            "id": entry_id,
            "type": "Entry",
            "contentType": {"sys": {"id": content_type, "type": "Link", "linkType": "ContentType"}},
        },
        "fields": {"title": {locale: f"Title {locale}" for locale in locales}},
    }


@pytest.fixture
def pipeline() -> MagicMock:
    mock = MagicMock()
    mock.sync_article_by_id = AsyncMock(
        side_effect=lambda article_id, locale: SyncResult(
            outcome=SyncOutcome.SYNCED, article_id=article_id, locale=locale, chunk_count=2
        )
    )
    return mock


@pytest.fixture
def vector_store() -> MagicMock:
    store = MagicMock()
    store.delete_article = AsyncMock(return_value=4)
    return store


def make_service(pipeline, vector_store, **settings) -> WebhookService:
    config = ContentfulSettings(webhook_secret=SECRET, webhook_ttl_seconds=30, **settings)
    return WebhookService(pipeline, vector_store, config, clock=lambda: NOW)


# ============================================================================
# Signature verification
# ============================================================================


class TestVerifySignature:
    """Request signing checks."""

    def test_valid_signature_accepted(self, pipeline, vector_store) -> None:
        """Should accept a correctly signed fresh request."""
        make_service(pipeline, vector_store).verify_signature("POST", PATH, signed_headers(), BODY)

    def test_header_names_case_insensitive(self, pipeline, vector_store) -> None:
        """Should match header names regardless of case."""
        headers = {name.upper(): value for name, value in signed_headers().items()}

        make_service(pipeline, vector_store).verify_signature("POST", PATH, headers, BODY)

    def test_wrong_signature_rejected(self, pipeline, vector_store) -> None:
        """Should reject a signature computed with another secret."""
        headers = signed_headers(secret="other")

        with pytest.raises(SignatureVerificationError, match="signature mismatch"):
            make_service(pipeline, vector_store).verify_signature("POST", PATH, headers, BODY)

    def test_tampered_body_rejected(self, pipeline, vector_store) -> None:
        """Should reject a body that differs from the signed one."""
        with pytest.raises(SignatureVerificationError):
            make_service(pipeline, vector_store).verify_signature(
                "POST", PATH, signed_headers(), BODY.replace("entry-1", "entry-2")
            )

    def test_missing_signature_rejected(self, pipeline, vector_store) -> None:
        """Should reject requests without a signature when a secret is configured."""
        headers = signed_headers()
        del headers["x-contentful-signature"]

        with pytest.raises(SignatureVerificationError, match="missing signature"):
            make_service(pipeline, vector_store).verify_signature("POST", PATH, headers, BODY)

    def test_stale_timestamp_rejected(self, pipeline, vector_store) -> None:
        """Should reject a correctly signed request older than the TTL."""
        headers = signed_headers(timestamp_ms=int((NOW - 31) * 1000))

        with pytest.raises(SignatureVerificationError, match="outside TTL"):
            make_service(pipeline, vector_store).verify_signature("POST", PATH, headers, BODY)

    def test_malformed_timestamp_rejected(self, pipeline, vector_store) -> None:
        """Should reject a non-numeric timestamp."""
        headers = signed_headers()
        headers["x-contentful-timestamp"] = "yesterday"

        with pytest.raises(SignatureVerificationError, match="malformed timestamp"):
            make_service(pipeline, vector_store).verify_signature("POST", PATH, headers, BODY)

    def test_no_secret_accepts_with_warning(self, pipeline, vector_store, caplog) -> None:
        """Should accept unsigned requests and warn when no secret is configured."""
        service = WebhookService(pipeline, vector_store, ContentfulSettings(webhook_secret=None))

        with caplog.at_level(logging.WARNING):
            service.verify_signature("POST", PATH, {}, BODY)

        assert not service.verification_enabled
        assert "DISABLED" in caplog.text


# ============================================================================
# Topic dispatch
# ============================================================================


class TestHandleEvent:
    """Lifecycle event handling."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic", [TOPIC_PUBLISH, TOPIC_SAVE])
    async def test_publish_syncs_every_locale(self, pipeline, vector_store, topic) -> None:
        """Should sync the entry once per locale found on the title field."""
        response = await make_service(pipeline, vector_store).handle_event(topic, entry_payload(), "key-1")

        assert [c.args for c in pipeline.sync_article_by_id.await_args_list] == [
            ("entry-1", "en-US"),
            ("entry-1", "de-DE"),
        ]
        assert response.success is True
        assert response.message == "Blog post entry-1 synced to vector database"
        assert response.locales == ["en-US", "de-DE"]
        assert response.results.successful == 2
        assert response.idempotency_key == "key-1"

    @pytest.mark.asyncio
    async def test_default_locale_without_title(self, pipeline, vector_store) -> None:
        """Should fall back to en-US when the payload has no localized title."""
        payload = entry_payload()
        payload["fields"] = {}

        response = await make_service(pipeline, vector_store).handle_event(TOPIC_PUBLISH, payload)

        assert response.locales == ["en-US"]

    @pytest.mark.asyncio
    async def test_failed_locales_counted(self, pipeline, vector_store) -> None:
        """Should count skipped and failed locales separately."""
        outcomes = iter([SyncOutcome.SKIPPED, SyncOutcome.FAILED])
        pipeline.sync_article_by_id.side_effect = lambda article_id, locale: SyncResult(
            outcome=next(outcomes), article_id=article_id, locale=locale
        )

        response = await make_service(pipeline, vector_store).handle_event(TOPIC_PUBLISH, entry_payload())

        assert (response.results.successful, response.results.skipped, response.results.failed) == (0, 1, 1)

    @pytest.mark.asyncio
    async def test_other_content_type_ignored(self, pipeline, vector_store) -> None:
        """Should acknowledge and ignore entries of other content types."""
        response = await make_service(pipeline, vector_store).handle_event(
            TOPIC_PUBLISH, entry_payload(content_type="author")
        )

        assert response.message == "Ignored non-blog-post content"
        pipeline.sync_article_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_auto_save_ignored(self, pipeline, vector_store) -> None:
        """Should not sync on auto-save."""
        response = await make_service(pipeline, vector_store).handle_event(TOPIC_AUTO_SAVE, entry_payload())

        assert response.message == "Auto-save event ignored (will sync on publish/save)"
        pipeline.sync_article_by_id.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic,action", [(TOPIC_UNPUBLISH, "unpublished"), (TOPIC_DELETE, "deleted")])
    async def test_retire_preserves_embeddings(self, pipeline, vector_store, topic, action) -> None:
        """Should keep embeddings on unpublish and delete by default."""
        response = await make_service(pipeline, vector_store).handle_event(topic, entry_payload())

        assert response.message == f"Blog post entry-1 {action} - embeddings preserved"
        vector_store.delete_article.assert_not_called()

    @pytest.mark.asyncio
    async def test_retire_deletes_when_enabled(self, pipeline, vector_store) -> None:
        """Should delete embeddings when deletion on unpublish is enabled."""
        service = make_service(pipeline, vector_store, webhook_delete_on_unpublish=True)

        response = await service.handle_event(TOPIC_UNPUBLISH, entry_payload())

        vector_store.delete_article.assert_awaited_once_with("entry-1")
        assert response.deleted_chunks == 4

    @pytest.mark.asyncio
    async def test_unknown_topic(self, pipeline, vector_store) -> None:
        """Should acknowledge topics it does not handle."""
        response = await make_service(pipeline, vector_store).handle_event(
            "ContentManagement.Entry.archive", entry_payload()
        )

        assert response.message == "Webhook received but not processed"
        pipeline.sync_article_by_id.assert_not_called()
