"""
Blog I/O models for API requests and responses.

Covers back-office CRUD, the public listing with its pagination block, and
the article generation endpoint.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class BlogRead(BaseModel):
    """Schema for reading a blog article from the API."""

    id: int
    title: str
    slug: str
    content: str
    author: str
    meta_description: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    published: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BlogCreate(BaseModel):
    title: str = Field(max_length=255)
    slug: str = Field(max_length=255, pattern=r"^[a-z0-9-]+$")
    content: str
    author: str = Field(max_length=255)
    meta_description: Optional[str] = Field(default=None, max_length=255)
    keywords: List[str] = Field(default_factory=list)
    published: bool = False


class BlogUpdate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = Field(default=None, pattern=r"^[a-z0-9-]+$")
    content: Optional[str] = None
    author: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[List[str]] = None
    published: Optional[bool] = None


class BlogSummary(BlogRead):
    """Article as shown in the public listing, with its plain-text intro."""

    intro: str = Field(description="First 150 characters of the tag-stripped content")


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    limit: int
    has_previous: bool
    has_next: bool
    previous_page: int
    next_page: int


class BlogListResponse(BaseModel):
    page_title: str
    articles: List[BlogSummary]
    pagination: Pagination


class BlogPostResponse(BaseModel):
    page_title: str
    article: BlogRead


class BlogGenerateRequest(BaseModel):
    topic: Optional[str] = Field(default=None, description="Subject of the article to generate")


class GeneratedArticle(BaseModel):
    id: int
    title: str
    slug: str


class BlogGenerateResponse(BaseModel):
    success: bool
    message: str
    article: Optional[GeneratedArticle] = None
    edit_url: Optional[str] = None
