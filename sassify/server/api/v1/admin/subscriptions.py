"""Back-office Subscription Endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from sassify.core.database.entities.subscriptions import Subscription
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.subscriptions import SubscriptionCreate, SubscriptionRead, SubscriptionUpdate
from sassify.server.services.deps import get_repos

from .common import PageParams, delete_or_404, get_or_404, without_nulls

router = APIRouter(tags=["admin-subscriptions"])

REQUIRED_FIELDS = ("user_id", "plan_id", "is_active")


@router.get("", response_model=List[SubscriptionRead], summary="List Subscriptions")
async def list_subscriptions(
    user_id: Optional[int] = None,
    is_active: Optional[bool] = None,
    page: PageParams = Depends(),
    repos: SqlRepoBundle = Depends(get_repos),
) -> List[SubscriptionRead]:
    subscriptions = await repos.subscriptions.list(
        limit=page.limit, offset=page.offset, filters={"user_id": user_id, "is_active": is_active}
    )
    return [SubscriptionRead.model_validate(subscription) for subscription in subscriptions]


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionRead,
    summary="Get Subscription",
    responses={404: {"description": "Subscription not found"}},
)
async def get_subscription(subscription_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> SubscriptionRead:
    return SubscriptionRead.model_validate(await get_or_404(repos.subscriptions, subscription_id, "Subscription"))


@router.post(
    "",
    response_model=SubscriptionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Subscription",
    responses={404: {"description": "User or plan not found"}},
)
async def create_subscription(data: SubscriptionCreate, repos: SqlRepoBundle = Depends(get_repos)) -> SubscriptionRead:
    await get_or_404(repos.users, data.user_id, "User")
    await get_or_404(repos.plans, data.plan_id, "Plan")
    subscription = Subscription(**data.model_dump())
    return SubscriptionRead.model_validate(await repos.subscriptions.create(subscription))


@router.patch(
    "/{subscription_id}",
    response_model=SubscriptionRead,
    summary="Update Subscription",
    responses={404: {"description": "Subscription, user or plan not found"}},
)
async def update_subscription(
    subscription_id: int, data: SubscriptionUpdate, repos: SqlRepoBundle = Depends(get_repos)
) -> SubscriptionRead:
    subscription = await get_or_404(repos.subscriptions, subscription_id, "Subscription")
    update_data = without_nulls(data.model_dump(exclude_unset=True), REQUIRED_FIELDS)
    if "user_id" in update_data:
        await get_or_404(repos.users, update_data["user_id"], "User")
    if "plan_id" in update_data:
        await get_or_404(repos.plans, update_data["plan_id"], "Plan")
    for key, value in update_data.items():
        setattr(subscription, key, value)
    return SubscriptionRead.model_validate(await repos.subscriptions.update(subscription))


@router.delete(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Subscription",
    responses={404: {"description": "Subscription not found"}, 409: {"description": "Subscription has invoices"}},
)
async def delete_subscription(subscription_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> Response:
    await delete_or_404(repos.subscriptions, subscription_id, "Subscription")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
