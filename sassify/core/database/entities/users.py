"""
User account entity.

Users own clients and quotes, hold subscriptions, and authenticate against
the public site and the admin back-office. Roles are stored as a JSON list.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, naive_datetime, utc_now

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


class User(Base, table=True):
    """Registered account.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=180, unique=True, index=True)
    roles: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    password_hash: str = Field(max_length=255)

    last_name: Optional[str] = Field(default=None, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=255)
    company_name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    tva_number: Optional[str] = Field(default=None, max_length=30)

    stripe_id: Optional[str] = Field(default=None, max_length=255, index=True)
    is_verified: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_column=naive_datetime(nullable=False))

    def get_roles(self) -> List[str]:
        """Stored roles plus the implicit ``ROLE_USER`` every account has."""
        roles = list(self.roles or [])
        if ROLE_USER not in roles:
            roles.append(ROLE_USER)
        return roles

    def has_role(self, role: str) -> bool:
        return role in self.get_roles()

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"
