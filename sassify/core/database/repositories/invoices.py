"""Invoice repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.invoices import Invoice
from .base import AsyncBaseRepository


class InvoiceRepository(AsyncBaseRepository[Invoice]):
    """Data access for invoices."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Invoice)

    async def get_by_stripe_id(self, stripe_id: str) -> Optional[Invoice]:
        return await self.find_one_by(stripe_id=stripe_id)
