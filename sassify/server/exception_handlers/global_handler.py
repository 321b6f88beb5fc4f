"""
Application-wide exception handlers.

- Calls to OpenAI or Stripe that fail outside a router's own handling become
  a 502 carrying the upstream message.
- Anything else becomes a generic 500 with a short error ID that is logged
  alongside the traceback, so a client report can be matched to the logs.
"""

import traceback
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sassify.core.logging_config import get_logger
from sassify.core.monitoring import log_error
from sassify.server.services.errors import OpenAIServiceError, StripeApiError

logger = get_logger(__name__)


async def upstream_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Upstream service failed in {request.method} {request.url.path}: {exc}")
    log_error(type(exc).__name__, str(exc), {"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": getattr(exc, "message", str(exc)), "error_type": type(exc).__name__},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and return a 500 response carrying its error ID.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised
    """
    error_id = uuid.uuid4().hex[:12]
    error_type = type(exc).__name__
    path = request.url.path

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {path}: {exc}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": error_type,
            "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        },
    )
    log_error(error_type, str(exc), {"error_id": error_id, "path": path})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error_id": error_id, "error_type": error_type},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the upstream-error and catch-all handlers on ``app``."""
    app.add_exception_handler(OpenAIServiceError, upstream_error_handler)
    app.add_exception_handler(StripeApiError, upstream_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
