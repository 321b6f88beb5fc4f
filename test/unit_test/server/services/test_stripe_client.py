"""Unit tests for the Stripe REST client."""

import httpx
import pytest

from sassify.server.services.errors import StripeApiError


class TestStripeClient:
    async def test_retrieve_subscription(self, stripe_client, stripe_transport):
        stripe_transport.queue(httpx.Response(200, json={"id": "sub_1", "plan": {"id": "price_pro"}}))

        subscription = await stripe_client.retrieve_subscription("sub_1")

        request = stripe_transport.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "http://mock/stripe/subscriptions/sub_1"
        assert request.headers["Authorization"] == "Bearer sk_test_stripe"
        assert subscription["plan"]["id"] == "price_pro"

    async def test_update_subscription_form_encodes_booleans(self, stripe_client, stripe_transport):
        stripe_transport.queue(httpx.Response(200, json={"id": "sub_1", "cancel_at_period_end": True}))

        await stripe_client.update_subscription("sub_1", cancel_at_period_end=True)

        request = stripe_transport.requests[0]
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.content == b"cancel_at_period_end=true"

    async def test_list_invoices(self, stripe_client, stripe_transport):
        stripe_transport.queue(httpx.Response(200, json={"object": "list", "data": [{"id": "in_1"}]}))

        invoices = await stripe_client.list_invoices(subscription="sub_1", limit=1)

        request = stripe_transport.requests[0]
        assert request.url.params["subscription"] == "sub_1"
        assert request.url.params["limit"] == "1"
        assert invoices == [{"id": "in_1"}]

    async def test_http_error(self, stripe_client, stripe_transport):
        stripe_transport.queue(httpx.Response(404, json={"error": {"message": "No such subscription"}}))

        with pytest.raises(StripeApiError) as exc_info:
            await stripe_client.retrieve_subscription("sub_missing")

        assert exc_info.value.status_code == 404
        assert "No such subscription" in exc_info.value.details

    async def test_unexpected_shape(self, stripe_client, stripe_transport):
        stripe_transport.queue(httpx.Response(200, json=[1, 2, 3]))

        with pytest.raises(StripeApiError, match="Unexpected response shape"):
            await stripe_client.retrieve_subscription("sub_1")
