"""Unit tests for the read-only back-office invoice endpoints."""

from httpx import AsyncClient

BASE = "/api/v1/admin/invoices"


class TestInvoicesAdmin:
    async def test_list_and_filter(
        self, client: AsyncClient, admin_headers, admin_user, make_plan, make_subscription, make_invoice
    ):
        subscription = await make_subscription(admin_user, await make_plan())
        await make_invoice(stripe_id="in_orphan")
        await make_invoice(stripe_id="in_linked", subscription=subscription, amount_paid=2900)

        everything = await client.get(BASE, headers=admin_headers)
        linked = await client.get(BASE, params={"subscription_id": subscription.id}, headers=admin_headers)

        assert [i["stripe_id"] for i in everything.json()] == ["in_orphan", "in_linked"]
        assert [i["stripe_id"] for i in linked.json()] == ["in_linked"]
        assert linked.json()[0]["amount_paid"] == 2900

    async def test_get(self, client: AsyncClient, admin_headers, make_invoice):
        invoice = await make_invoice(number="INV-7")

        response = await client.get(f"{BASE}/{invoice.id}", headers=admin_headers)

        assert response.json()["number"] == "INV-7"

    async def test_get_missing(self, client: AsyncClient, admin_headers):
        assert (await client.get(f"{BASE}/999", headers=admin_headers)).status_code == 404

    async def test_no_write_routes(self, client: AsyncClient, admin_headers, make_invoice):
        invoice = await make_invoice()

        assert (await client.post(BASE, json={"stripe_id": "in_x"}, headers=admin_headers)).status_code == 405
        assert (await client.delete(f"{BASE}/{invoice.id}", headers=admin_headers)).status_code == 405
