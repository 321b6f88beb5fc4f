"""Helpers shared by the back-office routers."""

from __future__ import annotations

from typing import Optional, TypeVar

from fastapi import HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from sassify.core.database.repositories.base import AsyncBaseRepository

EntityType = TypeVar("EntityType")

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 500
MAX_OFFSET = 2**63 - 1


class PageParams:
    """``limit``/``offset`` query parameters for list endpoints."""

    def __init__(
        self,
        limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT, description="Maximum number of records"),
        offset: int = Query(0, ge=0, le=MAX_OFFSET, description="Number of records to skip"),
    ) -> None:
        self.limit = limit
        self.offset = offset


def not_found(entity_name: str, entity_id: Optional[int] = None) -> HTTPException:
    detail = f"{entity_name} {entity_id} not found" if entity_id is not None else f"{entity_name} not found"
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def conflict(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


async def get_or_404(repo: AsyncBaseRepository, entity_id: int, entity_name: str):
    entity = await repo.get_by_id(entity_id)
    if entity is None:
        raise not_found(entity_name, entity_id)
    return entity


async def delete_or_404(repo: AsyncBaseRepository, entity_id: int, entity_name: str) -> None:
    """Delete a row; 404 when absent, 409 when other rows still reference it."""
    try:
        deleted = await repo.delete(entity_id)
    except IntegrityError:
        await repo.session.rollback()
        raise conflict(f"{entity_name} {entity_id} is still referenced by other records")
    if not deleted:
        raise not_found(entity_name, entity_id)


def without_nulls(update_data: dict, required: tuple) -> dict:
    """Drop explicit ``null`` values for columns that cannot be empty."""
    return {key: value for key, value in update_data.items() if value is not None or key not in required}
