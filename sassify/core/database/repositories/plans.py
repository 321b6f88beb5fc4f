"""Plan repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.plans import Plan
from .base import AsyncBaseRepository


class PlanRepository(AsyncBaseRepository[Plan]):
    """Data access for plans."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Plan)

    async def get_by_stripe_id(self, stripe_id: str) -> Optional[Plan]:
        return await self.find_one_by(stripe_id=stripe_id)

    async def get_by_slug(self, slug: str) -> Optional[Plan]:
        return await self.find_one_by(slug=slug)
