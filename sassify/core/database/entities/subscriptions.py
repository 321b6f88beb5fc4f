"""
Subscription entity.

Created by the checkout webhook; at most one subscription per user is
active, older ones are flagged inactive when a new checkout completes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, naive_datetime


class Subscription(Base, table=True):
    """A user's subscription to a plan.

    Table: subscription
    """

    __tablename__ = "subscription"

    id: Optional[int] = Field(default=None, primary_key=True)
    stripe_id: Optional[str] = Field(default=None, max_length=255, index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    plan_id: int = Field(foreign_key="plan.id", index=True)
    current_period_start: Optional[datetime] = Field(default=None, sa_column=naive_datetime())
    current_period_end: Optional[datetime] = Field(default=None, sa_column=naive_datetime())
    is_active: bool = Field(default=False, index=True)

    def __repr__(self) -> str:
        return f"Subscription(id={self.id}, stripe_id={self.stripe_id}, active={self.is_active})"
