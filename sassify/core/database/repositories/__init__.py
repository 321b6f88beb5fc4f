"""
Repositories for the centralized database layer.

One async repository per entity, all sharing the CRUD operations of
``AsyncBaseRepository``.
"""

from .base import AsyncBaseRepository, QueryBuilder
from .blogs import BlogRepository
from .bundle import SqlRepoBundle, build_sql_repos
from .clients import ClientRepository
from .invoices import InvoiceRepository
from .plans import PlanRepository
from .quotes import QuoteRepository
from .subscriptions import SubscriptionRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "BlogRepository",
    "ClientRepository",
    "InvoiceRepository",
    "PlanRepository",
    "QueryBuilder",
    "QuoteRepository",
    "SqlRepoBundle",
    "SubscriptionRepository",
    "UserRepository",
    "build_sql_repos",
]
