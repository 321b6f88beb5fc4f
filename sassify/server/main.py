"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers the exception handlers and includes all routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sassify.core.database import init_db
from sassify.core.logging_config import get_logger, setup_logging
from sassify.core.monitoring import initialize_logfire

from .api.v1 import accounts, admin, blog, estimations, health, home, webhooks
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.deps import close_clients

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the tables of local SQLite databases on startup and closes the
    outbound HTTP clients on shutdown.
    """
    try:
        logger.info("Starting up Sassify Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Sassify Server...")
    await close_clients()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Sassify Server API

    Backend of the Sassify SaaS incubator: public site and blog, AI project estimations and
    article generation, Stripe subscription billing, and the administration back-office.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(home.router)
app.include_router(accounts.router)
app.include_router(blog.router, prefix="/blog")
app.include_router(webhooks.router, prefix="/webhook")
app.include_router(estimations.router, prefix=f"{constant.API_V1_STR}/estimations")
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin")


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "sassify.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
