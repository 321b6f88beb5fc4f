"""
Invoice entity.

Mirrors paid provider invoices. ``subscription_id`` is empty for one-time
payments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, naive_datetime, utc_now


class Invoice(Base, table=True):
    """Paid invoice.

    Table: invoice
    """

    __tablename__ = "invoice"

    id: Optional[int] = Field(default=None, primary_key=True)
    stripe_id: str = Field(max_length=255, unique=True, index=True)
    subscription_id: Optional[int] = Field(default=None, foreign_key="subscription.id", index=True)
    number: Optional[str] = Field(default=None, max_length=255)
    amount_paid: Optional[int] = Field(default=None)
    hosted_invoice_url: Optional[str] = Field(default=None, max_length=1024)
    created_at: datetime = Field(default_factory=utc_now, sa_column=naive_datetime(nullable=False))

    def __repr__(self) -> str:
        return f"Invoice(id={self.id}, stripe_id={self.stripe_id})"
