"""Fixtures for server tests.

Outbound HTTP to OpenAI and Stripe goes through ``httpx.MockTransport``
recorders, so tests queue the responses they need and inspect the requests
that were made.
"""

from __future__ import annotations

import json
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Union

import httpx
import pytest
import pytest_asyncio
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from sassify.core.database.entities.users import User
from sassify.core.security import create_access_token
from sassify.server.core.config import MailConfig, StripeConfig
from sassify.server.services.estimation_cache import EstimationCache
from sassify.server.services.mailer import Mailer
from sassify.server.services.openai_service import OpenAIService
from sassify.server.services.stripe_client import StripeClient
from sassify.server.services.stripe_webhook import StripeWebhookHandler

OPENAI_BASE_URL = "http://mock/openai"
STRIPE_API_BASE = "http://mock/stripe"
WEBHOOK_SECRET = "whsec_test_secret"

ResponseFactory = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class RecordingTransport:
    """Queue of canned responses that records every request it answers."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responses: List[ResponseFactory] = []

    def queue(self, *responses: ResponseFactory) -> None:
        self._responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(500, json={"error": {"message": "no response queued"}})
        response = self._responses.pop(0)
        return response(request) if callable(response) else response

    def json_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


def chat_completion(content: Union[Dict[str, Any], str], total_tokens: int = 42) -> httpx.Response:
    """A successful ``/chat/completions`` answer whose message is ``content``."""
    text = content if isinstance(content, str) else json.dumps(content)
    return httpx.Response(
        200,
        json={
            "choices": [{"message": {"role": "assistant", "content": text}}],
            "usage": {"total_tokens": total_tokens},
        },
    )


class FakeMailer(Mailer):
    """Records activation e-mails instead of talking to an SMTP server."""

    def __init__(self, sent_result: bool = True) -> None:
        super().__init__(MailConfig(smtp_server="mock-smtp", public_base_url="http://localhost:8000"))
        self.sent_result = sent_result
        self.sent: List[tuple] = []

    async def send_verification_email(self, user: User, token: str) -> bool:
        self.sent.append((user.email, token))
        return self.sent_result


@pytest.fixture
def openai_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def stripe_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest_asyncio.fixture
async def openai_service(openai_transport) -> AsyncGenerator[OpenAIService, None]:
    service = OpenAIService(
        "sk-test",
        base_url=OPENAI_BASE_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(openai_transport)),
        cache=EstimationCache(),
    )
    yield service
    await service.aclose()


@pytest_asyncio.fixture
async def stripe_client(stripe_transport) -> AsyncGenerator[StripeClient, None]:
    client = StripeClient(
        "sk_test_stripe",
        api_base=STRIPE_API_BASE,
        client=httpx.AsyncClient(transport=httpx.MockTransport(stripe_transport)),
    )
    yield client
    await client.aclose()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def stripe_config() -> StripeConfig:
    return StripeConfig(webhook_secret=WEBHOOK_SECRET, api_base=STRIPE_API_BASE)


@pytest.fixture
def projects_file(tmp_path):
    path = tmp_path / "saas.json"
    path.write_text(
        json.dumps({"saas": [{"name": "Devis Express"}], "technologies": ["Python"]}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def blog_page_size() -> int:
    return 2


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession,
    openai_service: OpenAIService,
    stripe_client: StripeClient,
    mailer: FakeMailer,
    stripe_config: StripeConfig,
    projects_file,
    blog_page_size: int,
    sleeps: List[float],
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client on the app with every outer dependency overridden."""
    from sassify.core.database import get_session
    from sassify.core.database.repositories.bundle import SqlRepoBundle
    from sassify.server.api.v1.blog import get_blog_page_size
    from sassify.server.api.v1.home import get_projects_data_path
    from sassify.server.api.v1.webhooks import get_stripe_config
    from sassify.server.main import app
    from sassify.server.services.deps import (
        get_mailer,
        get_openai_service,
        get_repos,
        get_stripe_client,
        get_webhook_handler,
    )

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    async def record_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    def get_webhook_handler_override(repos: SqlRepoBundle = Depends(get_repos)) -> StripeWebhookHandler:
        return StripeWebhookHandler(repos, stripe_client, lookup_attempts=3, lookup_delay=5.0, sleep=record_sleep)

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_openai_service] = lambda: openai_service
    app.dependency_overrides[get_stripe_client] = lambda: stripe_client
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_stripe_config] = lambda: stripe_config
    app.dependency_overrides[get_projects_data_path] = lambda: str(projects_file)
    app.dependency_overrides[get_blog_page_size] = lambda: blog_page_size
    app.dependency_overrides[get_webhook_handler] = get_webhook_handler_override

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(make_user) -> User:
    return await make_user(email="admin@sassify.test", roles=["ROLE_ADMIN"], is_verified=True)


@pytest.fixture
def admin_headers(admin_user) -> Dict[str, str]:
    token = create_access_token(admin_user.id, admin_user.get_roles())
    return {"Authorization": f"Bearer {token}"}


def _auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.get_roles())}"}


@pytest.fixture
def bearer_for() -> Callable[[User], Dict[str, str]]:
    return _auth_headers


def stripe_signature_header(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    import time

    from sassify.server.services.stripe_webhook import compute_signature

    ts = int(time.time()) if timestamp is None else timestamp
    return f"t={ts},v1={compute_signature(payload, ts, secret)}"


@pytest.fixture(name="chat_completion")
def chat_completion_fixture() -> Callable[..., httpx.Response]:
    return chat_completion


@pytest.fixture
def sign_payload() -> Callable[..., str]:
    return stripe_signature_header
