"""
Request timing middleware.

Every request is timed and reported to monitoring. The duration is echoed in
the ``X-Process-Time`` header (milliseconds), and requests slower than
``SLOW_REQUEST_MS`` are logged as warnings; Stripe retries webhooks that take
too long, so those are worth spotting.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from sassify.core.logging_config import get_logger
from sassify.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class LogfireMiddleware(BaseHTTPMiddleware):
    """Times requests and reports them to Logfire."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        method, path = request.method, request.url.path
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.error(f"API request failed: {method} {path}: {e}", extra={"method": method, "path": path})
            raise
        finally:
            duration_ms = _elapsed_ms(start)
            log_api_request(method=method, path=path, status_code=status_code, duration_ms=duration_ms)

        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"
        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={"method": method, "path": path, "duration_ms": duration_ms, "status_code": status_code},
            )
        return response
