"""
Client entity.

A client is a customer record owned by a user; quotes are addressed to clients.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, naive_datetime, utc_now


class ClientBase(Base):
    """Base fields for clients."""

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


class Client(ClientBase, table=True):
    """Persistent client record.

    Table: client
    """

    __tablename__ = "client"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_column=naive_datetime(nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=naive_datetime())

    def __repr__(self) -> str:
        return f"Client(id={self.id}, name={self.name})"
