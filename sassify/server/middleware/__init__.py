"""HTTP middleware for the Sassify server."""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
