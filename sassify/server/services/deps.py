"""
Service dependencies for the routers.

Long-lived HTTP clients (OpenAI, Stripe) are process-wide singletons so the
estimation cache and connection pools survive across requests. Tests replace
these providers through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sassify.core.database import get_session
from sassify.core.database.repositories.bundle import SqlRepoBundle, build_sql_repos
from sassify.server.core.config import settings

from .blog_generator import BlogGeneratorService
from .mailer import Mailer
from .openai_service import OpenAIService
from .stripe_client import StripeClient
from .stripe_webhook import StripeWebhookHandler


@lru_cache(maxsize=1)
def get_openai_service() -> OpenAIService:
    config = settings.openai
    return OpenAIService(
        config.api_key,
        base_url=config.base_url,
        default_model=config.model,
        timeout=config.timeout,
    )


@lru_cache(maxsize=1)
def get_stripe_client() -> StripeClient:
    config = settings.stripe
    return StripeClient(config.secret_key, api_base=config.api_base)


def get_mailer() -> Mailer:
    return Mailer(settings.mail)


def get_repos(session: AsyncSession = Depends(get_session)) -> SqlRepoBundle:
    return build_sql_repos(session)


def get_blog_generator(
    openai_service: OpenAIService = Depends(get_openai_service),
    repos: SqlRepoBundle = Depends(get_repos),
) -> BlogGeneratorService:
    return BlogGeneratorService(openai_service, repos.blogs)


def get_webhook_handler(
    repos: SqlRepoBundle = Depends(get_repos),
    stripe: StripeClient = Depends(get_stripe_client),
) -> StripeWebhookHandler:
    config = settings.stripe
    return StripeWebhookHandler(
        repos,
        stripe,
        lookup_attempts=config.subscription_lookup_attempts,
        lookup_delay=config.subscription_lookup_delay,
    )


async def close_clients() -> None:
    """Close the singleton HTTP clients that were created, on shutdown."""
    if get_openai_service.cache_info().currsize:
        await get_openai_service().aclose()
        get_openai_service.cache_clear()
    if get_stripe_client.cache_info().currsize:
        await get_stripe_client().aclose()
        get_stripe_client.cache_clear()
