"""
Blog article entity.

``content`` holds restricted HTML (h2, p, ul, ol, strong, li) either written
in the back-office or produced by the article generator.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, Text

from ..base import Base, naive_datetime, utc_now


class Blog(Base, table=True):
    """Blog article.

    Table: blog
    """

    __tablename__ = "blog"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)
    content: str = Field(sa_type=Text)
    author: str = Field(max_length=255)
    meta_description: Optional[str] = Field(default=None, max_length=255)
    keywords: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    published: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_column=naive_datetime(nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=naive_datetime())

    def __repr__(self) -> str:
        return f"Blog(id={self.id}, slug={self.slug})"
