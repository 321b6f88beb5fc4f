"""
Subscription plan entity.

``stripe_id`` is the payment provider's plan/price identifier; checkout
webhooks resolve plans through it. ``price`` is stored in cents.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, naive_datetime


class Plan(Base, table=True):
    """Sellable plan shown on the home page.

    Table: plan
    """

    __tablename__ = "plan"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255, index=True)
    stripe_id: Optional[str] = Field(default=None, max_length=255, index=True)
    price: Optional[int] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None, sa_column=naive_datetime())
    payment_link: Optional[str] = Field(default=None, max_length=255)

    def __repr__(self) -> str:
        return f"Plan(id={self.id}, name={self.name}, stripe_id={self.stripe_id})"
