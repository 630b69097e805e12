"""
Contentful webhook endpoints.

Routes:
- POST /webhooks/contentful - Signed entry lifecycle events
- GET /webhooks/contentful - Endpoint liveness for Contentful

Dependencies: lumen.application.services.webhook_service
System role: Webhook ingress HTTP API
"""

import json
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from lumen.api.deps import get_webhook_service
from lumen.application.services import WebhookService
from lumen.core.exceptions import SignatureVerificationError
from lumen.models.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/contentful")
async def contentful_webhook(
    request: Request,
    webhook_service: WebhookService = Depends(get_webhook_service),
):
    """
    Receive a Contentful webhook.

    Returns:
        JSONResponse: 200 acknowledgement, 400 undecodable or non-object body, 401 bad
        signature (nothing processed), 500 processing failure
    """
    try:
        raw_body = (await request.body()).decode("utf-8")
    except UnicodeDecodeError as e:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Invalid payload encoding", message=str(e)).model_dump(),
        )

    try:
        webhook_service.verify_signature(
            request.method,
            request.url.path,
            request.headers,
            raw_body,
        )
    except SignatureVerificationError as e:
        logger.error(f"{__name__}:contentful_webhook - {e}")
        return JSONResponse(
            status_code=401,
            content=ErrorResponse(error="Invalid signature").model_dump(exclude_none=True),
        )

    try:
        payload = json.loads(raw_body)
    except json.JSONDecodeError as e:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Invalid JSON payload", message=str(e)).model_dump(),
        )
    if not isinstance(payload, dict):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="Invalid JSON payload",
                message="Payload must be a JSON object",
            ).model_dump(),
        )

    try:
        response = await webhook_service.handle_event(
            topic=request.headers.get("x-contentful-topic"),
            payload=payload,
            idempotency_key=request.headers.get("x-contentful-idempotency-key"),
        )
    except Exception as e:
        logger.exception(f"{__name__}:contentful_webhook - Error processing Contentful webhook")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Failed to process webhook", message=str(e)).model_dump(),
        )

    return response.model_dump(exclude_none=True)


@router.get("/contentful")
async def contentful_webhook_status() -> dict:
    """Status check Contentful calls when the webhook is configured."""
    return {
        "message": "Contentful webhook endpoint is active",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
