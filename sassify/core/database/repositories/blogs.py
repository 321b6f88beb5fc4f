"""
Blog repository.

Public listing only ever sees published articles, ordered by id so that
page boundaries stay stable as new articles are generated.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.blogs import Blog
from .base import AsyncBaseRepository


class BlogRepository(AsyncBaseRepository[Blog]):
    """Data access for blog articles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Blog)

    async def get_by_slug(self, slug: str) -> Optional[Blog]:
        return await self.find_one_by(slug=slug)

    async def slug_exists(self, slug: str) -> bool:
        return await self.get_by_slug(slug) is not None

    async def list_published(self, page: int, limit: int) -> List[Blog]:
        """One page (1-based) of published articles."""
        return await self.list(limit=limit, offset=limit * (page - 1), filters={"published": True})

    async def count_published(self) -> int:
        return await self.count(filters={"published": True})
