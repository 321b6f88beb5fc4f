"""Invoice I/O models. Invoices are written by billing webhooks only."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class InvoiceRead(BaseModel):
    id: int
    stripe_id: str
    subscription_id: Optional[int] = None
    number: Optional[str] = None
    amount_paid: Optional[int] = None
    hosted_invoice_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
