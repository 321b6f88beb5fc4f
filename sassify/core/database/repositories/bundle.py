"""
Repository bundle.

Groups one repository per entity around a single session so services that
touch several tables (billing webhooks, blog generation) share a unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .blogs import BlogRepository
from .clients import ClientRepository
from .invoices import InvoiceRepository
from .plans import PlanRepository
from .quotes import QuoteRepository
from .subscriptions import SubscriptionRepository
from .users import UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    users: UserRepository
    clients: ClientRepository
    quotes: QuoteRepository
    plans: PlanRepository
    subscriptions: SubscriptionRepository
    invoices: InvoiceRepository
    blogs: BlogRepository


def build_sql_repos(session: AsyncSession) -> SqlRepoBundle:
    """Build a ``SqlRepoBundle`` bound to ``session``."""
    return SqlRepoBundle(
        users=UserRepository(session),
        clients=ClientRepository(session),
        quotes=QuoteRepository(session),
        plans=PlanRepository(session),
        subscriptions=SubscriptionRepository(session),
        invoices=InvoiceRepository(session),
        blogs=BlogRepository(session),
    )
