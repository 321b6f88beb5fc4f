"""Unit tests for the public blog endpoints (page size 2 in these tests)."""

from httpx import AsyncClient

from sassify.server.core import constant


class TestListArticles:
    async def test_first_page(self, client: AsyncClient, make_blog):
        first = await make_blog(title="First")
        await make_blog(title="Draft", published=False)
        second = await make_blog(title="Second")
        await make_blog(title="Third")

        response = await client.get("/blog")

        assert response.status_code == 200
        data = response.json()
        assert data["page_title"] == constant.BLOG_PAGE_TITLE
        assert [a["id"] for a in data["articles"]] == [first.id, second.id]
        assert data["pagination"] == {
            "current_page": 1,
            "total_pages": 2,
            "total_items": 3,
            "limit": 2,
            "has_previous": False,
            "has_next": True,
            "previous_page": 0,
            "next_page": 2,
        }

    async def test_intro_is_plain_text_excerpt(self, client: AsyncClient, make_blog):
        await make_blog(content="<h2>Title</h2><p>" + "x" * 300 + "</p>")

        article = (await client.get("/blog")).json()["articles"][0]

        assert article["intro"] == "Title" + "x" * 145 + "..."

    async def test_last_page(self, client: AsyncClient, make_blog):
        for _ in range(3):
            await make_blog()

        data = (await client.get("/blog", params={"page": 2})).json()

        assert len(data["articles"]) == 1
        assert data["pagination"]["has_previous"] is True
        assert data["pagination"]["has_next"] is False

    async def test_page_below_one_is_clamped(self, client: AsyncClient, make_blog):
        await make_blog()

        data = (await client.get("/blog", params={"page": -3})).json()

        assert data["pagination"]["current_page"] == 1
        assert len(data["articles"]) == 1

    async def test_page_past_the_end_is_empty(self, client: AsyncClient, make_blog):
        await make_blog()

        response = await client.get("/blog", params={"page": 10**19})

        assert response.status_code == 200
        data = response.json()
        assert data["articles"] == []
        assert data["pagination"]["current_page"] == 10**19
        assert data["pagination"]["total_items"] == 1
        assert data["pagination"]["has_next"] is False

    async def test_empty_blog(self, client: AsyncClient):
        data = (await client.get("/blog")).json()

        assert data["articles"] == []
        assert data["pagination"]["total_pages"] == 0
        assert data["pagination"]["has_next"] is False


class TestGetArticle:
    async def test_get_by_slug(self, client: AsyncClient, make_blog):
        await make_blog(slug="estimation-guide", title="Estimation guide")

        response = await client.get("/blog/estimation-guide")

        assert response.status_code == 200
        data = response.json()
        assert data["page_title"] == "Article - Estimation guide"
        assert data["article"]["slug"] == "estimation-guide"
        assert data["article"]["keywords"] == ["web-development"]

    async def test_unknown_slug(self, client: AsyncClient):
        response = await client.get("/blog/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "Article not found"

    async def test_draft_is_hidden(self, client: AsyncClient, make_blog):
        await make_blog(slug="draft", published=False)

        assert (await client.get("/blog/draft")).status_code == 404
