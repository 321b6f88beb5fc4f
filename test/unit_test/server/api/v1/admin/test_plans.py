"""Unit tests for back-office plan management."""

from httpx import AsyncClient

BASE = "/api/v1/admin/plans"


class TestPlansAdmin:
    async def test_create_derives_slug(self, client: AsyncClient, admin_headers):
        response = await client.post(
            BASE,
            json={"name": "Plan Pro Été", "stripe_id": "price_pro", "price": 2900},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "plan-pro-ete"
        assert data["price"] == 2900
        assert data["created_at"] is not None

    async def test_create_keeps_given_slug(self, client: AsyncClient, admin_headers):
        response = await client.post(BASE, json={"name": "Pro", "slug": "pro-monthly"}, headers=admin_headers)

        assert response.json()["slug"] == "pro-monthly"

    async def test_negative_price(self, client: AsyncClient, admin_headers):
        response = await client.post(BASE, json={"name": "Pro", "price": -1}, headers=admin_headers)

        assert response.status_code == 422

    async def test_update(self, client: AsyncClient, admin_headers, make_plan):
        plan = await make_plan()

        response = await client.patch(
            f"{BASE}/{plan.id}", json={"price": 3900, "payment_link": "https://buy.stripe.com/x"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["price"] == 3900
        assert response.json()["payment_link"] == "https://buy.stripe.com/x"

    async def test_clearing_slug_regenerates_it(self, client: AsyncClient, admin_headers, make_plan):
        plan = await make_plan(name="Business", slug="old")

        response = await client.patch(f"{BASE}/{plan.id}", json={"slug": ""}, headers=admin_headers)

        assert response.json()["slug"] == "business"

    async def test_list_get_delete(self, client: AsyncClient, admin_headers, make_plan):
        plan = await make_plan()

        assert [p["id"] for p in (await client.get(BASE, headers=admin_headers)).json()] == [plan.id]
        assert (await client.get(f"{BASE}/{plan.id}", headers=admin_headers)).json()["name"] == "Pro"
        assert (await client.delete(f"{BASE}/{plan.id}", headers=admin_headers)).status_code == 204
        assert (await client.get(f"{BASE}/{plan.id}", headers=admin_headers)).status_code == 404
