"""Session-wide test setup.

Settings are read once at import time, so the test environment is put in place
here, before any ``sassify`` module is imported. Every test also runs behind an
httpx guard that refuses to reach real hosts: OpenAI and Stripe calls must go
through mock transports.
"""

from __future__ import annotations

import os
from pathlib import Path

import httpx
import pytest
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env", override=False)

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENABLE_FILE_LOGGING"] = "false"
os.environ["LOGFIRE_ENABLED"] = "false"
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes")
os.environ.pop("SMTP_SERVER", None)

OFFLINE_ALLOWED_PREFIXES = (
    "http://mock",
    "https://mock",
    "http://localhost",
    "http://127.0.0.1",
    "http://0.0.0.0",
    "/",  # relative URLs used with the ASGI transport
)


def _allowed(url) -> bool:
    return str(url).startswith(OFFLINE_ALLOWED_PREFIXES)


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    original_sync = httpx.Client.request
    original_async = httpx.AsyncClient.request

    def guarded_sync(self, method, url, *args, **kwargs):
        if not _allowed(url):
            raise RuntimeError(f"External HTTP blocked by global offline guard: {url}")
        return original_sync(self, method, url, *args, **kwargs)

    async def guarded_async(self, method, url, *args, **kwargs):
        if not _allowed(url):
            raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url}")
        return await original_async(self, method, url, *args, **kwargs)

    monkeypatch.setattr(httpx.Client, "request", guarded_sync)
    monkeypatch.setattr(httpx.AsyncClient, "request", guarded_async)
