"""
Back-office Plan Endpoints.

A plan's ``stripe_id`` links it to the Stripe price that checkout webhooks
report; an empty slug is derived from the plan name.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from sassify.core.database.base import utc_now
from sassify.core.database.entities.plans import Plan
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.plans import PlanCreate, PlanRead, PlanUpdate
from sassify.core.text import slugify
from sassify.server.services.deps import get_repos

from .common import PageParams, delete_or_404, get_or_404

router = APIRouter(tags=["admin-plans"])


@router.get("", response_model=List[PlanRead], summary="List Plans")
async def list_plans(page: PageParams = Depends(), repos: SqlRepoBundle = Depends(get_repos)) -> List[PlanRead]:
    plans = await repos.plans.list(limit=page.limit, offset=page.offset)
    return [PlanRead.model_validate(plan) for plan in plans]


@router.get("/{plan_id}", response_model=PlanRead, summary="Get Plan", responses={404: {"description": "Plan not found"}})
async def get_plan(plan_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> PlanRead:
    return PlanRead.model_validate(await get_or_404(repos.plans, plan_id, "Plan"))


@router.post("", response_model=PlanRead, status_code=status.HTTP_201_CREATED, summary="Create Plan")
async def create_plan(data: PlanCreate, repos: SqlRepoBundle = Depends(get_repos)) -> PlanRead:
    plan = Plan(**data.model_dump(), created_at=utc_now())
    if not plan.slug:
        plan.slug = slugify(plan.name or "")
    return PlanRead.model_validate(await repos.plans.create(plan))


@router.patch("/{plan_id}", response_model=PlanRead, summary="Update Plan", responses={404: {"description": "Plan not found"}})
async def update_plan(plan_id: int, data: PlanUpdate, repos: SqlRepoBundle = Depends(get_repos)) -> PlanRead:
    plan = await get_or_404(repos.plans, plan_id, "Plan")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(plan, key, value)
    if not plan.slug:
        plan.slug = slugify(plan.name or "")
    return PlanRead.model_validate(await repos.plans.update(plan))


@router.delete(
    "/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Plan",
    responses={404: {"description": "Plan not found"}, 409: {"description": "Plan still has subscriptions"}},
)
async def delete_plan(plan_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> Response:
    await delete_or_404(repos.plans, plan_id, "Plan")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
