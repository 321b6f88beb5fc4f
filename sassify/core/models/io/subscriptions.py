"""Subscription I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SubscriptionRead(BaseModel):
    id: int
    stripe_id: Optional[str] = None
    user_id: int
    plan_id: int
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    is_active: bool

    class Config:
        from_attributes = True


class SubscriptionCreate(BaseModel):
    stripe_id: Optional[str] = None
    user_id: int
    plan_id: int
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    is_active: bool = False


class SubscriptionUpdate(BaseModel):
    stripe_id: Optional[str] = None
    user_id: Optional[int] = None
    plan_id: Optional[int] = None
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    is_active: Optional[bool] = None
