"""
Stripe billing webhook handling.

``verify_signature`` authenticates a delivery; ``StripeWebhookHandler``
applies the two events the site reacts to:

- ``checkout.session.completed``: replace the customer's active subscription
  with the purchased plan and record the first invoice.
- ``invoice.paid``: record the invoice, attached to its subscription when
  it has one.
"""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import json
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from sassify.core.database.entities.invoices import Invoice
from sassify.core.database.entities.subscriptions import Subscription
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.logging_config import get_logger
from sassify.core.monitoring import log_webhook_event

from .errors import (
    UnhandledWebhookEventError,
    WebhookNotFoundError,
    WebhookPayloadError,
    WebhookSignatureError,
)
from .stripe_client import StripeClient

logger = get_logger(__name__)

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
INVOICE_PAID = "invoice.paid"

SIGNATURE_SCHEME = "v1"


def _parse_signature_header(header: str) -> Tuple[int, List[str]]:
    timestamp: Optional[int] = None
    signatures: List[str] = []
    for part in header.split(","):
        key, sep, value = part.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError as e:
                raise WebhookSignatureError("Invalid timestamp in signature header") from e
        elif key == SIGNATURE_SCHEME:
            signatures.append(value)
    if timestamp is None:
        raise WebhookSignatureError("No timestamp in signature header")
    if not signatures:
        raise WebhookSignatureError("No v1 signature in signature header")
    return timestamp, signatures


def compute_signature(payload: bytes, timestamp: int, secret: str) -> str:
    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    return hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()


def verify_signature(
    payload: bytes,
    header: Optional[str],
    secret: Optional[str],
    *,
    tolerance: int = 300,
    now: Optional[float] = None,
) -> None:
    """Check a ``Stripe-Signature`` header against the raw request body.

    Raises:
        WebhookSignatureError: if the secret or header is missing, no ``v1``
            signature matches, or the timestamp is older than ``tolerance`` seconds.
    """
    if not secret:
        raise WebhookSignatureError("Webhook signing secret is not configured")
    if not header:
        raise WebhookSignatureError("Missing Stripe-Signature header")

    timestamp, signatures = _parse_signature_header(header)
    expected = compute_signature(payload, timestamp, secret)
    if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
        raise WebhookSignatureError("No signature matches the expected signature for the payload")

    current = time.time() if now is None else now
    if tolerance > 0 and timestamp < current - tolerance:
        raise WebhookSignatureError("Timestamp outside the tolerance zone")


def parse_event(payload: bytes) -> Dict[str, Any]:
    try:
        event = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise WebhookPayloadError(f"Invalid payload: {e}") from e
    if not isinstance(event, dict) or not isinstance(event.get("type"), str):
        raise WebhookPayloadError("Invalid payload: not an event object")
    data = event.get("data")
    obj = data.get("object") if isinstance(data, dict) else None
    if not isinstance(obj, dict):
        raise WebhookPayloadError("Invalid payload: missing data.object")
    return event


def from_unix(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc).replace(tzinfo=None)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise WebhookPayloadError(f"Invalid payload: bad timestamp {value!r}") from e


def _object_id(obj: Dict[str, Any], kind: str) -> str:
    value = obj.get("id")
    if not isinstance(value, str) or not value:
        raise WebhookPayloadError(f"Invalid payload: {kind} has no id")
    return value


def _plan_id(subscription: Dict[str, Any]) -> Optional[str]:
    plan = subscription.get("plan")
    if isinstance(plan, dict) and plan.get("id"):
        return plan["id"]
    items = (subscription.get("items") or {}).get("data") or []
    if items:
        price = items[0].get("price") or items[0].get("plan") or {}
        return price.get("id")
    return None


def _period(subscription: Dict[str, Any], field: str) -> Optional[datetime]:
    # Newer API versions only expose the billing period on subscription items.
    value = subscription.get(field)
    if value is None:
        items = (subscription.get("items") or {}).get("data") or []
        if items:
            value = items[0].get(field)
    return from_unix(value)


def _invoice_subscription_id(invoice: Dict[str, Any]) -> Optional[str]:
    value = invoice.get("subscription")
    if isinstance(value, dict):
        return value.get("id")
    if value:
        return value
    parent = invoice.get("parent") or {}
    details = parent.get("subscription_details") or {}
    return details.get("subscription")


class StripeWebhookHandler:
    """Applies verified Stripe events to the local billing tables."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        stripe: StripeClient,
        *,
        lookup_attempts: int = 5,
        lookup_delay: float = 5.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.repos = repos
        self.stripe = stripe
        self.lookup_attempts = max(1, lookup_attempts)
        self.lookup_delay = lookup_delay
        self._sleep = sleep

    async def handle(self, event: Dict[str, Any]) -> str:
        """Dispatch ``event`` and return a short description of what was done."""
        event_type = event["type"]
        obj = event["data"]["object"]
        logger.info("Stripe webhook event received: %s", event_type)

        if event_type == CHECKOUT_SESSION_COMPLETED:
            outcome = await self.handle_checkout_completed(obj)
        elif event_type == INVOICE_PAID:
            outcome = await self.handle_invoice_paid(obj)
        else:
            log_webhook_event("stripe", event_type, "unhandled")
            raise UnhandledWebhookEventError(event_type)

        log_webhook_event("stripe", event_type, outcome)
        return outcome

    async def handle_checkout_completed(self, session: Dict[str, Any]) -> str:
        subscription_id = session.get("subscription")
        if not subscription_id:
            raise WebhookPayloadError("Checkout session has no subscription")

        stripe_subscription = await self.stripe.retrieve_subscription(subscription_id)
        plan_stripe_id = _plan_id(stripe_subscription)

        email = ((session.get("customer_details") or {}).get("email") or "").strip().lower()
        user = await self.repos.users.get_by_email(email) if email else None
        if user is None:
            logger.info("Stripe webhook: user not found for %r", email)
            raise WebhookNotFoundError("User not found")

        active = await self.repos.subscriptions.find_active_for_user(user.id)
        if active is not None:
            logger.info("Stripe webhook: cancelling previous subscription %s at period end", active.stripe_id)
            if active.stripe_id:
                await self.stripe.update_subscription(active.stripe_id, cancel_at_period_end=True)
            active.is_active = False
            self.repos.subscriptions.session.add(active)

        plan = await self.repos.plans.get_by_stripe_id(plan_stripe_id) if plan_stripe_id else None
        if plan is None:
            logger.info("Stripe webhook: plan not found for %r", plan_stripe_id)
            raise WebhookNotFoundError("Plan not found")

        subscription = Subscription(
            stripe_id=stripe_subscription.get("id") or subscription_id,
            user_id=user.id,
            plan_id=plan.id,
            current_period_start=_period(stripe_subscription, "current_period_start"),
            current_period_end=_period(stripe_subscription, "current_period_end"),
            is_active=True,
        )
        user.stripe_id = session.get("customer")
        self.repos.users.session.add(user)
        subscription = await self.repos.subscriptions.create(subscription)
        logger.info("Stripe webhook: subscription %s created for user %s (plan %s)", subscription.id, user.id, plan.name)

        await self._record_checkout_invoice(subscription_id, subscription)
        return "subscription_created"

    async def _record_checkout_invoice(self, stripe_subscription_id: str, subscription: Subscription) -> None:
        try:
            invoices = await self.stripe.list_invoices(subscription=stripe_subscription_id, limit=1)
            if not invoices:
                return
            await self._upsert_invoice(invoices[0], subscription)
        except Exception as e:
            # The subscription is already committed; a missing invoice is recovered by invoice.paid.
            await self.repos.invoices.session.rollback()
            logger.error("Stripe webhook: error while recording the checkout invoice: %s", e)

    async def handle_invoice_paid(self, invoice: Dict[str, Any]) -> str:
        invoice_id = _object_id(invoice, "invoice")
        stripe_subscription_id = _invoice_subscription_id(invoice)
        if not stripe_subscription_id:
            if await self.repos.invoices.get_by_stripe_id(invoice_id) is not None:
                logger.info("Stripe webhook: invoice %s already recorded", invoice_id)
                return "invoice_exists"
            await self._upsert_invoice(invoice, None)
            return "invoice_created"

        subscription = await self._find_subscription(stripe_subscription_id)
        if subscription is None:
            logger.info("Stripe webhook: subscription %s not found in the database", stripe_subscription_id)
            return "subscription_not_found"

        return await self._upsert_invoice(invoice, subscription)

    async def _find_subscription(self, stripe_subscription_id: str) -> Optional[Subscription]:
        # checkout.session.completed may still be in flight for the same purchase.
        for attempt in range(1, self.lookup_attempts + 1):
            subscription = await self.repos.subscriptions.get_by_stripe_id(stripe_subscription_id)
            if subscription is not None:
                return subscription
            if attempt < self.lookup_attempts:
                logger.debug(
                    "Stripe webhook: subscription %s not found (attempt %d/%d)",
                    stripe_subscription_id,
                    attempt,
                    self.lookup_attempts,
                )
                await self._sleep(self.lookup_delay)
        return None

    async def _upsert_invoice(self, data: Dict[str, Any], subscription: Optional[Subscription]) -> str:
        invoice_id = _object_id(data, "invoice")
        existing = await self.repos.invoices.get_by_stripe_id(invoice_id)
        if existing is not None:
            existing.subscription_id = subscription.id if subscription is not None else existing.subscription_id
            await self.repos.invoices.update(existing)
            logger.info("Stripe webhook: invoice %s linked to subscription", existing.id)
            return "invoice_linked"

        invoice = await self.repos.invoices.create(
            Invoice(
                stripe_id=invoice_id,
                subscription_id=subscription.id if subscription is not None else None,
                number=data.get("number"),
                amount_paid=data.get("amount_paid"),
                hosted_invoice_url=data.get("hosted_invoice_url"),
            )
        )
        logger.info("Stripe webhook: invoice %s created", invoice.id)
        return "invoice_created"
