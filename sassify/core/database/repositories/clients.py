"""Client repository."""

from __future__ import annotations

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.clients import Client
from .base import AsyncBaseRepository


class ClientRepository(AsyncBaseRepository[Client]):
    """Data access for clients."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Client)

    async def list_for_user(self, user_id: int) -> List[Client]:
        return await self.list(filters={"user_id": user_id})
