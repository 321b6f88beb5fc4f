"""
User I/O models for API requests and responses.

Passwords only ever travel inward: read models expose the profile and roles,
never the stored hash.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    email: str
    roles: List[str] = Field(default_factory=list, description="Stored roles, e.g. ['ROLE_ADMIN']")
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    tva_number: Optional[str] = None
    stripe_id: Optional[str] = None
    is_verified: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserProfile(BaseModel):
    """Profile fields shared by registration and admin creation."""

    last_name: Optional[str] = Field(default=None, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=255)
    company_name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    tva_number: Optional[str] = Field(default=None, max_length=30)


class UserRegister(UserProfile):
    """Schema for public sign-up."""

    email: str = Field(max_length=180, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, description="Plain password, at least 6 characters")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserCreate(UserRegister):
    """Schema for creating a user from the back-office."""

    roles: List[str] = Field(default_factory=list)
    is_verified: bool = False
    stripe_id: Optional[str] = None


class UserUpdate(BaseModel):
    """Schema for updating a user from the back-office."""

    email: Optional[str] = Field(default=None, max_length=180, pattern=EMAIL_PATTERN)
    password: Optional[str] = Field(default=None, min_length=6)
    roles: Optional[List[str]] = None
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    tva_number: Optional[str] = None
    stripe_id: Optional[str] = None
    is_verified: Optional[bool] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    """Bearer token issued on login or registration."""

    access_token: str
    token_type: str = "bearer"


class RegistrationResponse(BaseModel):
    user: UserRead
    access_token: str
    token_type: str = "bearer"
    verification_sent: bool = Field(description="Whether an activation e-mail was sent")


class MessageResponse(BaseModel):
    message: str
