"""Error types raised by the Sassify services.

Purpose:
- Provide typed exceptions thrown by the OpenAI, blog generation and Stripe
  services.
- Expose HTTP-oriented context (status code, error body) so routers can map
  failures onto responses without inspecting messages.

Usage:
- Catch ``OpenAIServiceError`` or ``StripeApiError`` for upstream failures and
  inspect ``status_code`` or ``details``.
- Catch ``WebhookError`` in the webhook router; its ``status_code`` is the
  response code to return.
"""

from __future__ import annotations

from typing import Any, Optional


class ServiceError(Exception):
    """Base error for service failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload (e.g. an upstream response body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class OpenAIServiceError(ServiceError):
    """Raised when a chat-completion call fails or returns unusable content."""


class BlogGenerationError(ServiceError):
    """Raised when an article cannot be generated or fails validation."""


class StripeApiError(ServiceError):
    """Raised when a Stripe REST call fails."""


class WebhookError(ServiceError):
    """Base error for rejected webhook deliveries. ``status_code`` is always set."""

    default_status = 400

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message, status_code=status_code or self.default_status, details=details)


class WebhookPayloadError(WebhookError):
    """The body is not a valid event."""

    default_status = 400


class WebhookSignatureError(WebhookError):
    """The ``Stripe-Signature`` header is missing, stale, or does not match."""

    default_status = 403


class WebhookNotFoundError(WebhookError):
    """An entity referenced by the event (user, plan) does not exist locally."""

    default_status = 404


class UnhandledWebhookEventError(WebhookError):
    """The event type is not one the endpoint processes."""

    default_status = 400

    def __init__(self, event_type: str) -> None:
        super().__init__(f"Unhandled event type: {event_type}")
        self.event_type = event_type
