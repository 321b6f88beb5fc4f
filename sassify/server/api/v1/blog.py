"""
Public Blog Endpoints.

Lists published articles page by page and serves a single article by slug.
"""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, status

from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.blogs import BlogListResponse, BlogPostResponse, BlogRead, BlogSummary, Pagination
from sassify.core.text import excerpt
from sassify.server.core import constant
from sassify.server.core.config import settings
from sassify.server.services.deps import get_repos

router = APIRouter(tags=["blog"])

INTRO_LENGTH = 150


def get_blog_page_size() -> int:
    return settings.blog_page_size


@router.get(
    "",
    response_model=BlogListResponse,
    summary="List Blog Articles",
    description="One page of published articles ordered by id, each with a plain-text intro, plus pagination data.",
    response_description="Articles and pagination.",
)
async def list_articles(
    page: int = 1,
    limit: int = Depends(get_blog_page_size),
    repos: SqlRepoBundle = Depends(get_repos),
) -> BlogListResponse:
    """
    List published articles.

    - **page**: 1-based page number; values below 1 are treated as 1.
    """
    page = max(1, page)
    total_items = await repos.blogs.count_published()
    # Pages past the last article are empty without querying.
    articles = await repos.blogs.list_published(page, limit) if limit * (page - 1) < total_items else []
    total_pages = math.ceil(total_items / limit) if limit else 0

    return BlogListResponse(
        page_title=constant.BLOG_PAGE_TITLE,
        articles=[
            BlogSummary(**BlogRead.model_validate(article).model_dump(), intro=excerpt(article.content, INTRO_LENGTH))
            for article in articles
        ],
        pagination=Pagination(
            current_page=page,
            total_pages=total_pages,
            total_items=total_items,
            limit=limit,
            has_previous=page > 1,
            has_next=page < total_pages,
            previous_page=page - 1,
            next_page=page + 1,
        ),
    )


@router.get(
    "/{slug}",
    response_model=BlogPostResponse,
    summary="Get Blog Article",
    description="A published article by slug.",
    response_description="The article and its page title.",
    responses={404: {"description": "Article not found"}},
)
async def get_article(slug: str, repos: SqlRepoBundle = Depends(get_repos)) -> BlogPostResponse:
    article = await repos.blogs.get_by_slug(slug)
    if article is None or not article.published:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return BlogPostResponse(page_title=f"Article - {article.title}", article=BlogRead.model_validate(article))
