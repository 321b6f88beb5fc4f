"""Subscription repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.subscriptions import Subscription
from .base import AsyncBaseRepository


class SubscriptionRepository(AsyncBaseRepository[Subscription]):
    """Data access for subscriptions."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Subscription)

    async def get_by_stripe_id(self, stripe_id: str) -> Optional[Subscription]:
        return await self.find_one_by(stripe_id=stripe_id)

    async def find_active_for_user(self, user_id: int) -> Optional[Subscription]:
        """The user's most recent active subscription, if any."""
        stmt = (
            select(Subscription)
            .where(Subscription.user_id == user_id)
            .where(Subscription.is_active == True)  # noqa: E712
            .order_by(Subscription.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
