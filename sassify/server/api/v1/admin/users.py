"""
Back-office User Endpoints.

CRUD over user accounts. Plain passwords are hashed on the way in and e-mail
addresses stay unique.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from sassify.core.database.entities.users import User
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.users import UserCreate, UserRead, UserUpdate
from sassify.core.security import hash_password
from sassify.server.services.deps import get_repos

from .common import PageParams, conflict, delete_or_404, get_or_404, without_nulls

router = APIRouter(tags=["admin-users"])


@router.get(
    "",
    response_model=List[UserRead],
    summary="List Users",
    description="List user accounts ordered by id.",
)
async def list_users(page: PageParams = Depends(), repos: SqlRepoBundle = Depends(get_repos)) -> List[UserRead]:
    users = await repos.users.list(limit=page.limit, offset=page.offset)
    return [UserRead.model_validate(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> UserRead:
    return UserRead.model_validate(await get_or_404(repos.users, user_id, "User"))


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create a user account. The plain `password` is hashed before storage.",
    responses={409: {"description": "E-mail already registered"}},
)
async def create_user(data: UserCreate, repos: SqlRepoBundle = Depends(get_repos)) -> UserRead:
    if await repos.users.get_by_email(data.email) is not None:
        raise conflict(f"E-mail {data.email} is already registered")
    user = User(password_hash=hash_password(data.password), **data.model_dump(exclude={"password"}))
    return UserRead.model_validate(await repos.users.create(user))


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Partially update a user. Supplying `password` replaces the stored hash.",
    responses={404: {"description": "User not found"}, 409: {"description": "E-mail already registered"}},
)
async def update_user(user_id: int, data: UserUpdate, repos: SqlRepoBundle = Depends(get_repos)) -> UserRead:
    user = await get_or_404(repos.users, user_id, "User")
    update_data = without_nulls(data.model_dump(exclude_unset=True), ("roles", "is_verified"))

    email = update_data.pop("email", None)
    if email is not None:
        email = email.strip().lower()
        if email != user.email:
            if await repos.users.get_by_email(email) is not None:
                raise conflict(f"E-mail {email} is already registered")
            user.email = email

    password = update_data.pop("password", None)
    if password:
        user.password_hash = hash_password(password)

    for key, value in update_data.items():
        setattr(user, key, value)
    return UserRead.model_validate(await repos.users.update(user))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete User",
    responses={404: {"description": "User not found"}, 409: {"description": "User still owns records"}},
)
async def delete_user(user_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> Response:
    await delete_or_404(repos.users, user_id, "User")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
