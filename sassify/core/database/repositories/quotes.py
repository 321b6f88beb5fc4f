"""
Quote repository.

Quotes and their items are written together: ``create_with_items`` and
``replace_items`` keep the lines of a quote consistent in one commit.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.quotes import Quote, QuoteItem
from .base import AsyncBaseRepository


class QuoteRepository(AsyncBaseRepository[Quote]):
    """Data access for quotes and their lines."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Quote)

    async def get_by_number(self, quote_number: str) -> Optional[Quote]:
        return await self.find_one_by(quote_number=quote_number)

    async def list_items(self, quote_id: int) -> List[QuoteItem]:
        """Items of a quote ordered by ``sort_order`` then id."""
        stmt = (
            select(QuoteItem)
            .where(QuoteItem.quote_id == quote_id)
            .order_by(QuoteItem.sort_order, QuoteItem.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_with_items(self, quote: Quote, items: List[QuoteItem]) -> Quote:
        """Persist a quote and its items atomically."""
        self.session.add(quote)
        await self.session.flush()
        for item in items:
            item.quote_id = quote.id
            self.session.add(item)
        await self.session.commit()
        await self.session.refresh(quote)
        return quote

    async def replace_items(self, quote: Quote, items: List[QuoteItem]) -> Quote:
        """Replace every item of ``quote`` and save the quote in the same commit."""
        await self.session.execute(delete(QuoteItem).where(QuoteItem.quote_id == quote.id))
        for item in items:
            item.quote_id = quote.id
            self.session.add(item)
        self.session.add(quote)
        await self.session.commit()
        await self.session.refresh(quote)
        return quote

    async def delete(self, entity_id: int) -> bool:
        quote = await self.session.get(Quote, entity_id)
        if quote is None:
            return False
        await self.session.execute(delete(QuoteItem).where(QuoteItem.quote_id == entity_id))
        await self.session.delete(quote)
        await self.session.commit()
        return True
