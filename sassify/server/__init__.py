"""
Sassify HTTP server package.

Holds the FastAPI application, its routers, middleware, exception handlers and
the services the routers depend on.
"""
