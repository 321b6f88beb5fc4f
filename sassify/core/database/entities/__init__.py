"""
Database entity models.

Modules:
- users: Registered accounts and their roles
- clients: Customer records owned by users
- quotes: Quotes and their priced lines
- plans: Sellable subscription plans
- subscriptions: User subscriptions created by checkout webhooks
- invoices: Paid provider invoices
- blogs: Blog articles
"""

from .blogs import Blog
from .clients import Client
from .invoices import Invoice
from .plans import Plan
from .quotes import Quote, QuoteItem, QuoteStatus
from .subscriptions import Subscription
from .users import User

__all__ = [
    "Blog",
    "Client",
    "Invoice",
    "Plan",
    "Quote",
    "QuoteItem",
    "QuoteStatus",
    "Subscription",
    "User",
]
