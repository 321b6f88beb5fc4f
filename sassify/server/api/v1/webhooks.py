"""
Payment Provider Webhook Endpoint.

Receives Stripe events, verifies their signature against the raw body and
applies checkout and invoice events to the billing tables.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from sassify.core.logging_config import get_logger
from sassify.server.core.config import StripeConfig, settings
from sassify.server.services.deps import get_webhook_handler
from sassify.server.services.errors import StripeApiError, WebhookError
from sassify.server.services.stripe_webhook import StripeWebhookHandler, parse_event, verify_signature

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])


def get_stripe_config() -> StripeConfig:
    return settings.stripe


@router.post(
    "/stripe",
    summary="Stripe Webhook",
    description="Handle `checkout.session.completed` and `invoice.paid` events from Stripe.",
    response_description="`{\"status\": \"success\"}` when the event was applied.",
    responses={
        200: {"description": "Event processed"},
        400: {"description": "Invalid payload or unhandled event type"},
        403: {"description": "Invalid or missing signature"},
        404: {"description": "User or plan referenced by the event not found"},
        502: {"description": "A Stripe API call made while handling the event failed"},
    },
)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    config: StripeConfig = Depends(get_stripe_config),
    handler: StripeWebhookHandler = Depends(get_webhook_handler),
) -> JSONResponse:
    payload = await request.body()
    try:
        verify_signature(payload, stripe_signature, config.webhook_secret, tolerance=config.webhook_tolerance)
        event = parse_event(payload)
        await handler.handle(event)
    except WebhookError as e:
        logger.info("Stripe webhook rejected (%s): %s", e.status_code, e.message)
        return JSONResponse(status_code=e.status_code, content={"status": "error", "detail": e.message})
    except StripeApiError as e:
        logger.error("Stripe webhook: Stripe API call failed: %s", e)
        return JSONResponse(status_code=502, content={"status": "error", "detail": e.message})
    return JSONResponse(status_code=200, content={"status": "success"})
