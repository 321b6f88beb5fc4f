"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form every table column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def naive_datetime(nullable: bool = True) -> Column:
    """A timezone-less ``DateTime`` column for the UTC values produced by :func:`utc_now`."""
    return Column(DateTime(timezone=False), nullable=nullable)
