"""Plan I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PlanRead(BaseModel):
    """Schema for reading a plan from the API."""

    id: int
    name: Optional[str] = None
    slug: Optional[str] = None
    stripe_id: Optional[str] = None
    price: Optional[int] = Field(default=None, description="Price in cents")
    created_at: Optional[datetime] = None
    payment_link: Optional[str] = None

    class Config:
        from_attributes = True


class PlanCreate(BaseModel):
    """Schema for creating a plan. An empty slug is derived from the name."""

    name: str = Field(max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    stripe_id: Optional[str] = Field(default=None, max_length=255)
    price: Optional[int] = Field(default=None, ge=0, description="Price in cents")
    payment_link: Optional[str] = Field(default=None, max_length=255)


class PlanUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    stripe_id: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    payment_link: Optional[str] = None
