"""
Quote and quote line entities.

A quote belongs to a user and is addressed to one of the user's clients.
Amounts are fixed-point decimals; ``estimation_data`` keeps the raw AI
estimation the quote was built from.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, Text

from ..base import Base, naive_datetime, utc_now


class QuoteStatus(str, Enum):
    """Lifecycle states of a quote."""

    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REFUSED = "refused"
    EXPIRED = "expired"


class Quote(Base, table=True):
    """Persistent quote.

    Table: quote
    """

    __tablename__ = "quote"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    client_id: int = Field(foreign_key="client.id", index=True)

    quote_number: str = Field(max_length=50, unique=True)
    status: str = Field(default=QuoteStatus.DRAFT.value, max_length=20)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)

    total_ht: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    tva_rate: Decimal = Field(default=Decimal("20.00"), max_digits=5, decimal_places=2)
    total_ttc: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)

    created_at: datetime = Field(default_factory=utc_now, sa_column=naive_datetime(nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=naive_datetime())
    expires_at: datetime = Field(sa_column=naive_datetime(nullable=False))
    sent_at: Optional[datetime] = Field(default=None, sa_column=naive_datetime())
    accepted_at: Optional[datetime] = Field(default=None, sa_column=naive_datetime())
    estimated_start_date: Optional[datetime] = Field(default=None, sa_column=naive_datetime())
    estimated_duration: Optional[int] = Field(default=None)

    estimation_data: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    payment_terms: Optional[str] = Field(default=None, sa_type=Text)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    def __repr__(self) -> str:
        return f"Quote(id={self.id}, number={self.quote_number}, status={self.status})"


class QuoteItem(Base, table=True):
    """One priced line of a quote.

    Table: quote_item
    """

    __tablename__ = "quote_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    quote_id: int = Field(foreign_key="quote.id", index=True)
    description: str = Field(max_length=255)
    quantity: Decimal = Field(default=Decimal("1.00"), max_digits=8, decimal_places=2)
    unit: str = Field(default="day", max_length=20)
    unit_price: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    total_price: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    sort_order: Optional[int] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_type=Text)
