"""
Quote I/O models for API requests and responses.

Totals are never accepted from callers when items are given; the quote
service recomputes them from the lines.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from sassify.core.database.entities.quotes import QuoteStatus


class QuoteItemRead(BaseModel):
    id: int
    quote_id: int
    description: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    total_price: Decimal
    sort_order: Optional[int] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class QuoteItemCreate(BaseModel):
    """One line supplied with a quote."""

    description: str = Field(max_length=255)
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit: str = Field(default="day", max_length=20)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    sort_order: Optional[int] = None
    notes: Optional[str] = None


class QuoteRead(BaseModel):
    """Schema for reading a quote, including its items."""

    id: int
    user_id: int
    client_id: int
    quote_number: str
    status: QuoteStatus
    title: str
    description: Optional[str] = None
    total_ht: Decimal
    tva_rate: Decimal
    total_ttc: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None
    expires_at: datetime
    sent_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    estimated_start_date: Optional[datetime] = None
    estimated_duration: Optional[int] = None
    estimation_data: Optional[Dict[str, Any]] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None
    items: List[QuoteItemRead] = Field(default_factory=list)

    class Config:
        from_attributes = True


class QuoteCreate(BaseModel):
    """Schema for creating a quote via API."""

    user_id: int
    client_id: int
    quote_number: str = Field(max_length=50)
    status: QuoteStatus = QuoteStatus.DRAFT
    title: str = Field(max_length=255)
    description: Optional[str] = None
    total_ht: Decimal = Field(default=Decimal("0"), ge=0, description="Ignored when items are supplied")
    tva_rate: Decimal = Field(default=Decimal("20.00"), ge=0, le=100)
    expires_at: datetime
    estimated_start_date: Optional[datetime] = None
    estimated_duration: Optional[int] = Field(default=None, ge=0, description="Duration in days")
    estimation_data: Optional[Dict[str, Any]] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[List[QuoteItemCreate]] = None


class QuoteUpdate(BaseModel):
    """Schema for updating a quote via API. Supplying ``items`` replaces every line."""

    client_id: Optional[int] = None
    quote_number: Optional[str] = None
    status: Optional[QuoteStatus] = None
    title: Optional[str] = None
    description: Optional[str] = None
    total_ht: Optional[Decimal] = Field(default=None, ge=0)
    tva_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    expires_at: Optional[datetime] = None
    estimated_start_date: Optional[datetime] = None
    estimated_duration: Optional[int] = None
    estimation_data: Optional[Dict[str, Any]] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[List[QuoteItemCreate]] = None
