"""
Public Home Page Endpoints.

The home page lists every plan on sale together with the portfolio of SaaS
projects and technologies read from the portfolio JSON file.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.home import HomeResponse
from sassify.core.models.io.plans import PlanRead
from sassify.server.core import constant
from sassify.server.core.config import settings
from sassify.server.services.deps import get_repos
from sassify.server.services.portfolio import get_projects_data

router = APIRouter(tags=["site"])


def get_projects_data_path() -> str:
    return settings.projects_data_path


@router.get(
    "/",
    response_model=HomeResponse,
    summary="Home Page",
    description="Data rendered by the home page: title, meta description, plans and portfolio.",
    response_description="Home page data.",
)
async def home(
    repos: SqlRepoBundle = Depends(get_repos),
    projects_path: str = Depends(get_projects_data_path),
) -> HomeResponse:
    plans = await repos.plans.list()
    return HomeResponse(
        page_title=constant.HOME_PAGE_TITLE,
        meta_description=constant.HOME_META_DESCRIPTION,
        plans=[PlanRead.model_validate(plan) for plan in plans],
        projects_data=get_projects_data(projects_path),
    )


@router.get(
    f"{constant.API_V1_STR}/projects",
    summary="Portfolio Data",
    description="The portfolio JSON (SaaS projects and technologies). Empty lists when the file is missing or invalid.",
    response_description="Portfolio object with `saas` and `technologies`.",
)
async def projects(projects_path: str = Depends(get_projects_data_path)) -> Dict[str, Any]:
    return get_projects_data(projects_path)
