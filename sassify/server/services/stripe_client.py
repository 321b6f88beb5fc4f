"""
Stripe REST client.

Only the three calls the billing webhook needs are implemented. Stripe takes
form-encoded bodies and answers JSON; the secret key is sent as a bearer
token.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from sassify.core.logging_config import get_logger

from .errors import StripeApiError

logger = get_logger(__name__)


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class StripeClient:
    """
    Thin async HTTP client for the Stripe API.

    Responsibilities:
    - retrieve_subscription
    - update_subscription
    - list_invoices
    """

    def __init__(
        self,
        secret_key: Optional[str],
        *,
        api_base: str = "https://api.stripe.com/v1",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.secret_key:
            headers["Authorization"] = f"Bearer {self.secret_key}"
        return headers

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.api_base}{path}"
        try:
            logger.debug("StripeClient: %s %s", method, url)
            r = await self._client.request(
                method,
                url,
                headers=self._headers(),
                params={k: _form_value(v) for k, v in (params or {}).items()} or None,
                data={k: _form_value(v) for k, v in (data or {}).items()} or None,
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StripeApiError(
                f"Stripe {method} {path} failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise StripeApiError(f"Stripe {method} {path} failed: {e}") from e
        payload = r.json()
        if not isinstance(payload, dict):
            raise StripeApiError(f"Unexpected response shape from {path}", status_code=r.status_code, details=payload)
        return payload

    async def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/subscriptions/{subscription_id}")

    async def update_subscription(self, subscription_id: str, **fields: Any) -> Dict[str, Any]:
        """Update a subscription, e.g. ``update_subscription(sid, cancel_at_period_end=True)``."""
        return await self._request("POST", f"/subscriptions/{subscription_id}", data=fields)

    async def list_invoices(self, *, subscription: Optional[str] = None, limit: int = 10) -> list[Dict[str, Any]]:
        """Most recent invoices first, optionally for one subscription."""
        params: Dict[str, Any] = {"limit": limit}
        if subscription:
            params["subscription"] = subscription
        payload = await self._request("GET", "/invoices", params=params)
        return list(payload.get("data") or [])
