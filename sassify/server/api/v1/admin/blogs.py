"""
Back-office Blog Endpoints.

CRUD over blog articles plus on-demand generation of a published article
from a topic.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from sassify.core.database.base import utc_now
from sassify.core.database.entities.blogs import Blog
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.logging_config import get_logger
from sassify.core.models.io.blogs import (
    BlogCreate,
    BlogGenerateRequest,
    BlogGenerateResponse,
    BlogRead,
    BlogUpdate,
    GeneratedArticle,
)
from sassify.server.core import constant
from sassify.server.services.blog_generator import BlogGeneratorService
from sassify.server.services.deps import get_blog_generator, get_repos
from sassify.server.services.errors import BlogGenerationError

from .common import PageParams, conflict, delete_or_404, get_or_404, without_nulls

logger = get_logger(__name__)

router = APIRouter(tags=["admin-blogs"])

REQUIRED_FIELDS = ("title", "slug", "content", "author", "keywords", "published")


@router.get("", response_model=List[BlogRead], summary="List Blog Articles")
async def list_blogs(
    published: Optional[bool] = None,
    page: PageParams = Depends(),
    repos: SqlRepoBundle = Depends(get_repos),
) -> List[BlogRead]:
    """List every article, drafts included, ordered by id."""
    blogs = await repos.blogs.list(limit=page.limit, offset=page.offset, filters={"published": published})
    return [BlogRead.model_validate(blog) for blog in blogs]


@router.post(
    "/generate",
    response_model=BlogGenerateResponse,
    summary="Generate Blog Article",
    description="Generate and publish an article about `topic` with the chat-completion API.",
    responses={
        200: {"description": "Article generated"},
        400: {"description": "Empty topic"},
        500: {"description": "Generation failed"},
    },
)
async def generate_blog(
    data: BlogGenerateRequest,
    generator: BlogGeneratorService = Depends(get_blog_generator),
):
    topic = (data.topic or "").strip()
    if not topic:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=BlogGenerateResponse(success=False, message="Please enter a topic for the article.").model_dump(
                exclude_none=True
            ),
        )

    try:
        article = await generator.generate_blog_article(topic)
    except BlogGenerationError as e:
        logger.error("Back-office article generation failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=BlogGenerateResponse(success=False, message=f"Error while generating: {e.message}").model_dump(
                exclude_none=True
            ),
        )

    return BlogGenerateResponse(
        success=True,
        message=f'Article "{article.title}" generated successfully!',
        article=GeneratedArticle(id=article.id, title=article.title, slug=article.slug),
        edit_url=f"{constant.API_V1_STR}/admin/blogs/{article.id}",
    )


@router.get("/{blog_id}", response_model=BlogRead, summary="Get Blog Article", responses={404: {"description": "Article not found"}})
async def get_blog(blog_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> BlogRead:
    return BlogRead.model_validate(await get_or_404(repos.blogs, blog_id, "Article"))


@router.post(
    "",
    response_model=BlogRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Blog Article",
    responses={409: {"description": "Slug already used"}},
)
async def create_blog(data: BlogCreate, repos: SqlRepoBundle = Depends(get_repos)) -> BlogRead:
    if await repos.blogs.slug_exists(data.slug):
        raise conflict(f"Slug {data.slug} is already used")
    blog = Blog(**data.model_dump(), created_at=utc_now())
    return BlogRead.model_validate(await repos.blogs.create(blog))


@router.patch(
    "/{blog_id}",
    response_model=BlogRead,
    summary="Update Blog Article",
    responses={404: {"description": "Article not found"}, 409: {"description": "Slug already used"}},
)
async def update_blog(blog_id: int, data: BlogUpdate, repos: SqlRepoBundle = Depends(get_repos)) -> BlogRead:
    blog = await get_or_404(repos.blogs, blog_id, "Article")
    update_data = without_nulls(data.model_dump(exclude_unset=True), REQUIRED_FIELDS)
    slug = update_data.get("slug")
    if slug is not None and slug != blog.slug and await repos.blogs.slug_exists(slug):
        raise conflict(f"Slug {slug} is already used")
    for key, value in update_data.items():
        setattr(blog, key, value)
    blog.updated_at = utc_now()
    return BlogRead.model_validate(await repos.blogs.update(blog))


@router.delete(
    "/{blog_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Blog Article",
    responses={404: {"description": "Article not found"}},
)
async def delete_blog(blog_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> Response:
    await delete_or_404(repos.blogs, blog_id, "Article")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
