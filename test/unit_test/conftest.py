"""Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database with all tables created,
plus small factories that insert ready-to-use rows.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import AsyncGenerator, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from sassify.core.database.entities.blogs import Blog
from sassify.core.database.entities.clients import Client
from sassify.core.database.entities.invoices import Invoice
from sassify.core.database.entities.plans import Plan
from sassify.core.database.entities.quotes import Quote
from sassify.core.database.entities.subscriptions import Subscription
from sassify.core.database.entities.users import User
from sassify.core.database.utils import create_all, create_sessionmaker
from sassify.core.security import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

LONG_CONTENT = "<h2>Section</h2>" + "<p>" + "Estimating web projects well pays off. " * 20 + "</p>"


@pytest_asyncio.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create an in-memory SQLite engine with every table."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(name="session", scope="function")
async def session_fixture(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a session on the in-memory database."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


async def _save(session: AsyncSession, entity):
    session.add(entity)
    await session.commit()
    await session.refresh(entity)
    return entity


@pytest.fixture
def make_user(session: AsyncSession):
    async def _make(
        email: str = "user@example.com",
        password: str = "secret123",
        roles: Optional[List[str]] = None,
        **fields,
    ) -> User:
        user = User(
            email=email,
            password_hash=hash_password(password, iterations=1000),
            roles=roles or [],
            **fields,
        )
        return await _save(session, user)

    return _make


@pytest.fixture
def make_plan(session: AsyncSession):
    async def _make(name: str = "Pro", stripe_id: str = "price_pro", price: int = 2900, **fields) -> Plan:
        fields.setdefault("slug", name.lower())
        return await _save(session, Plan(name=name, stripe_id=stripe_id, price=price, **fields))

    return _make


@pytest.fixture
def make_client(session: AsyncSession):
    async def _make(user: User, name: str = "ACME", **fields) -> Client:
        values = {
            "email": "contact@acme.test",
            "address": "1 rue de la Paix",
            "city": "Paris",
            "postal_code": "75002",
        }
        values.update(fields)
        return await _save(session, Client(user_id=user.id, name=name, **values))

    return _make


@pytest.fixture
def make_quote(session: AsyncSession):
    async def _make(user: User, client: Client, quote_number: str = "DEV-2025-001", **fields) -> Quote:
        values = {
            "title": "Website redesign",
            "total_ht": Decimal("1000.00"),
            "tva_rate": Decimal("20.00"),
            "total_ttc": Decimal("1200.00"),
            "expires_at": datetime(2030, 1, 1),
        }
        values.update(fields)
        return await _save(session, Quote(user_id=user.id, client_id=client.id, quote_number=quote_number, **values))

    return _make


@pytest.fixture
def make_subscription(session: AsyncSession):
    async def _make(user: User, plan: Plan, stripe_id: str = "sub_1", is_active: bool = True, **fields) -> Subscription:
        return await _save(
            session,
            Subscription(user_id=user.id, plan_id=plan.id, stripe_id=stripe_id, is_active=is_active, **fields),
        )

    return _make


@pytest.fixture
def make_invoice(session: AsyncSession):
    async def _make(stripe_id: str = "in_1", subscription: Optional[Subscription] = None, **fields) -> Invoice:
        return await _save(
            session,
            Invoice(stripe_id=stripe_id, subscription_id=subscription.id if subscription else None, **fields),
        )

    return _make


@pytest.fixture
def make_blog(session: AsyncSession):
    counter = {"n": 0}

    async def _make(slug: Optional[str] = None, published: bool = True, **fields) -> Blog:
        counter["n"] += 1
        values = {
            "title": f"Article {counter['n']}",
            "content": LONG_CONTENT,
            "author": "Sassify",
            "keywords": ["web-development"],
            "created_at": datetime(2025, 1, 1) + timedelta(days=counter["n"]),
        }
        values.update(fields)
        return await _save(session, Blog(slug=slug or f"article-{counter['n']}", published=published, **values))

    return _make
