"""User repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.users import User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Data access for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by e-mail. Addresses are compared case-insensitively."""
        return await self.find_one_by(email=email.strip().lower())
