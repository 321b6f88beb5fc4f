"""Client I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ClientRead(BaseModel):
    """Schema for reading a client from the API."""

    id: int
    user_id: int
    name: str
    company: Optional[str] = None
    email: str
    phone: Optional[str] = None
    address: str
    city: str
    postal_code: str
    country: Optional[str] = None
    siret: Optional[str] = None
    tva_number: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientCreate(BaseModel):
    """Schema for creating a client via API."""

    user_id: int = Field(description="Owning user")
    name: str = Field(max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    email: str = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    address: str = Field(max_length=255)
    city: str = Field(max_length=100)
    postal_code: str = Field(max_length=10)
    country: Optional[str] = Field(default=None, max_length=100)
    siret: Optional[str] = Field(default=None, max_length=20)
    tva_number: Optional[str] = Field(default=None, max_length=30)


class ClientUpdate(BaseModel):
    """Schema for updating a client via API."""

    user_id: Optional[int] = None
    name: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    siret: Optional[str] = None
    tva_number: Optional[str] = None
