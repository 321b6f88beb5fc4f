"""
Back-office routers.

Every route below ``/api/v1/admin`` requires a bearer token whose user has
``ROLE_ADMIN``.
"""

from fastapi import APIRouter, Depends

from sassify.server.services.auth import require_admin

from . import blogs, clients, invoices, plans, quotes, subscriptions, users

router = APIRouter(dependencies=[Depends(require_admin)])
router.include_router(users.router, prefix="/users")
router.include_router(clients.router, prefix="/clients")
router.include_router(quotes.router, prefix="/quotes")
router.include_router(plans.router, prefix="/plans")
router.include_router(subscriptions.router, prefix="/subscriptions")
router.include_router(invoices.router, prefix="/invoices")
router.include_router(blogs.router, prefix="/blogs")
