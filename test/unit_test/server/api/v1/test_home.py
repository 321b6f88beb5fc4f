"""Unit tests for the public home page endpoints."""

from httpx import AsyncClient

from sassify.server.core import constant


class TestHome:
    async def test_home_lists_plans_and_portfolio(self, client: AsyncClient, make_plan):
        await make_plan(name="Starter", stripe_id="price_starter", price=900)
        await make_plan(name="Pro", stripe_id="price_pro", price=2900)

        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["page_title"] == constant.HOME_PAGE_TITLE
        assert data["meta_description"] == constant.HOME_META_DESCRIPTION
        assert [p["name"] for p in data["plans"]] == ["Starter", "Pro"]
        assert data["plans"][1]["price"] == 2900
        assert data["projects_data"] == {"saas": [{"name": "Devis Express"}], "technologies": ["Python"]}

    async def test_home_without_plans(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["plans"] == []

    async def test_home_with_scalar_saas_entry(self, client: AsyncClient, projects_file):
        projects_file.write_text('{"saas": 5, "technologies": []}', encoding="utf-8")

        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["projects_data"] == {"saas": 5, "technologies": []}


class TestProjects:
    async def test_projects(self, client: AsyncClient):
        response = await client.get("/api/v1/projects")

        assert response.status_code == 200
        assert response.json()["technologies"] == ["Python"]

    async def test_missing_file_gives_empty_lists(self, client: AsyncClient, projects_file):
        projects_file.unlink()

        response = await client.get("/api/v1/projects")

        assert response.json() == {"saas": [], "technologies": []}
