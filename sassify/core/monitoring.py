"""
Monitoring and Tracing Configuration Module.

Optional Pydantic Logfire integration for the Sassify server. When enabled it
traces the FastAPI endpoints, the SQLAlchemy engine and the outbound httpx
calls to OpenAI and Stripe, and records a few domain events (chat-completion
usage, payment webhooks, unhandled errors).

With Logfire disabled or not installed every helper is a no-op, so callers
never guard their monitoring calls.
"""

import logging
import os
from typing import Any, Callable, Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _env_flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "sassify-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

LOGFIRE_TRACE_SQLALCHEMY = _env_flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_HTTPX = _env_flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _env_flag("LOGFIRE_TRACE_FASTAPI", "true")


def _instrument(label: str, enabled: bool, hook: Callable[[], Any]) -> None:
    if not enabled:
        return
    try:
        hook()
        logger.info(f"Logfire: {label} instrumentation enabled")
    except Exception as e:
        logger.warning(f"Failed to instrument {label}: {e}")


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Configure Logfire and instrument the libraries the server relies on.

    Args:
        app: FastAPI application whose endpoints should be traced, if any.

    Nothing happens unless LOGFIRE_ENABLED is set and a LOGFIRE_TOKEN is present.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return
    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return

    try:
        import logfire
    except ImportError:
        logger.warning("Logfire is enabled but 'logfire' package is not installed.")
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    _instrument("SQLAlchemy", LOGFIRE_TRACE_SQLALCHEMY, logfire.instrument_sqlalchemy)
    _instrument("HTTPX", LOGFIRE_TRACE_HTTPX, logfire.instrument_httpx)
    _instrument("FastAPI", LOGFIRE_TRACE_FASTAPI and app is not None, lambda: logfire.instrument_fastapi(app=app))

    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")


def _emit(level: str, message: str, **attributes: Any) -> None:
    """Send one record to Logfire; failures only reach the debug log."""
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        getattr(logfire, level)(message, **attributes)
    except Exception:
        logger.debug(f"Could not send {message!r} to Logfire")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Record a served HTTP request and how long it took."""
    _emit("info", "API request completed", method=method, path=path, status_code=status_code, duration_ms=duration_ms)


def log_llm_call(model: str, tokens_used: int, purpose: Optional[str] = None) -> None:
    """
    Record a chat-completion call.

    Args:
        model: The model name
        tokens_used: Total tokens reported by the provider
        purpose: What the call was for (estimation, blog)
    """
    logger.debug(f"LLM call completed: model={model} tokens={tokens_used} purpose={purpose}")
    _emit("info", "LLM call completed", model=model, tokens_used=tokens_used, purpose=purpose)


def log_webhook_event(provider: str, event_type: str, outcome: str) -> None:
    _emit("info", "Webhook processed", provider=provider, event_type=event_type, outcome=outcome)


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """Record an error, flattening ``context`` into span attributes."""
    _emit("error", f"{error_type}: {error_message}", **(context or {}))
