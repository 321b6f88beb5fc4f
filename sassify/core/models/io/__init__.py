"""
I/O models for API requests and responses.

Pydantic schemas that define the contract between the HTTP API and its
clients. Persistence lives in ``sassify.core.database.entities``.
"""

from .blogs import (
    BlogCreate,
    BlogGenerateRequest,
    BlogGenerateResponse,
    BlogListResponse,
    BlogPostResponse,
    BlogRead,
    BlogSummary,
    BlogUpdate,
    GeneratedArticle,
    Pagination,
)
from .clients import ClientCreate, ClientRead, ClientUpdate
from .estimations import EstimationRequest
from .home import HomeResponse
from .invoices import InvoiceRead
from .plans import PlanCreate, PlanRead, PlanUpdate
from .quotes import QuoteCreate, QuoteItemCreate, QuoteItemRead, QuoteRead, QuoteUpdate
from .subscriptions import SubscriptionCreate, SubscriptionRead, SubscriptionUpdate
from .users import (
    LoginRequest,
    MessageResponse,
    RegistrationResponse,
    TokenResponse,
    UserCreate,
    UserProfile,
    UserRead,
    UserRegister,
    UserUpdate,
)

__all__ = [
    "BlogCreate",
    "BlogGenerateRequest",
    "BlogGenerateResponse",
    "BlogListResponse",
    "BlogPostResponse",
    "BlogRead",
    "BlogSummary",
    "BlogUpdate",
    "ClientCreate",
    "ClientRead",
    "ClientUpdate",
    "EstimationRequest",
    "GeneratedArticle",
    "HomeResponse",
    "InvoiceRead",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "PlanCreate",
    "PlanRead",
    "PlanUpdate",
    "QuoteCreate",
    "QuoteItemCreate",
    "QuoteItemRead",
    "QuoteRead",
    "QuoteUpdate",
    "RegistrationResponse",
    "SubscriptionCreate",
    "SubscriptionRead",
    "SubscriptionUpdate",
    "TokenResponse",
    "UserCreate",
    "UserProfile",
    "UserRead",
    "UserRegister",
    "UserUpdate",
]
