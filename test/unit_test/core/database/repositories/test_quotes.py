"""Unit tests for the quote repository."""

from __future__ import annotations

from decimal import Decimal

from sassify.core.database.entities.quotes import QuoteItem


def _item(description: str, sort_order: int) -> QuoteItem:
    return QuoteItem(
        description=description,
        quantity=Decimal("2"),
        unit="day",
        unit_price=Decimal("400"),
        total_price=Decimal("800.00"),
        sort_order=sort_order,
    )


class TestQuoteRepository:
    async def test_get_by_number(self, repos, make_user, make_client, make_quote):
        user = await make_user()
        client = await make_client(user)
        quote = await make_quote(user, client, quote_number="DEV-42")

        assert (await repos.quotes.get_by_number("DEV-42")).id == quote.id
        assert await repos.quotes.get_by_number("DEV-404") is None

    async def test_create_with_items_orders_items(self, repos, make_user, make_client):
        from datetime import datetime

        from sassify.core.database.entities.quotes import Quote

        user = await make_user()
        client = await make_client(user)
        quote = Quote(
            user_id=user.id,
            client_id=client.id,
            quote_number="DEV-1",
            title="Shop",
            expires_at=datetime(2030, 1, 1),
        )

        quote = await repos.quotes.create_with_items(quote, [_item("Second", 2), _item("First", 1)])

        items = await repos.quotes.list_items(quote.id)
        assert [i.description for i in items] == ["First", "Second"]
        assert all(i.quote_id == quote.id for i in items)

    async def test_replace_items(self, repos, make_user, make_client, make_quote):
        user = await make_user()
        client = await make_client(user)
        quote = await make_quote(user, client)
        await repos.quotes.replace_items(quote, [_item("Old", 0)])

        await repos.quotes.replace_items(quote, [_item("New A", 0), _item("New B", 1)])

        assert [i.description for i in await repos.quotes.list_items(quote.id)] == ["New A", "New B"]

    async def test_delete_removes_items(self, repos, make_user, make_client, make_quote):
        user = await make_user()
        client = await make_client(user)
        quote = await make_quote(user, client)
        await repos.quotes.replace_items(quote, [_item("Line", 0)])

        assert await repos.quotes.delete(quote.id) is True

        assert await repos.quotes.get_by_id(quote.id) is None
        assert await repos.quotes.list_items(quote.id) == []

    async def test_delete_missing(self, repos):
        assert await repos.quotes.delete(12345) is False
