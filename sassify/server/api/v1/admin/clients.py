"""Back-office Client Endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from sassify.core.database.base import utc_now
from sassify.core.database.entities.clients import Client
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.clients import ClientCreate, ClientRead, ClientUpdate
from sassify.server.services.deps import get_repos

from .common import PageParams, delete_or_404, get_or_404, without_nulls

router = APIRouter(tags=["admin-clients"])

REQUIRED_FIELDS = ("user_id", "name", "email", "address", "city", "postal_code")


@router.get("", response_model=List[ClientRead], summary="List Clients")
async def list_clients(
    user_id: Optional[int] = None,
    page: PageParams = Depends(),
    repos: SqlRepoBundle = Depends(get_repos),
) -> List[ClientRead]:
    """
    List clients ordered by id.

    - **user_id**: Only the clients owned by this user.
    """
    clients = await repos.clients.list(limit=page.limit, offset=page.offset, filters={"user_id": user_id})
    return [ClientRead.model_validate(client) for client in clients]


@router.get("/{client_id}", response_model=ClientRead, summary="Get Client", responses={404: {"description": "Client not found"}})
async def get_client(client_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> ClientRead:
    return ClientRead.model_validate(await get_or_404(repos.clients, client_id, "Client"))


@router.post(
    "",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client",
    responses={404: {"description": "Owning user not found"}},
)
async def create_client(data: ClientCreate, repos: SqlRepoBundle = Depends(get_repos)) -> ClientRead:
    await get_or_404(repos.users, data.user_id, "User")
    client = Client(**data.model_dump())
    return ClientRead.model_validate(await repos.clients.create(client))


@router.patch(
    "/{client_id}",
    response_model=ClientRead,
    summary="Update Client",
    responses={404: {"description": "Client or owning user not found"}},
)
async def update_client(client_id: int, data: ClientUpdate, repos: SqlRepoBundle = Depends(get_repos)) -> ClientRead:
    client = await get_or_404(repos.clients, client_id, "Client")
    update_data = without_nulls(data.model_dump(exclude_unset=True), REQUIRED_FIELDS)
    if update_data.get("user_id") is not None:
        await get_or_404(repos.users, update_data["user_id"], "User")
    for key, value in update_data.items():
        setattr(client, key, value)
    client.updated_at = utc_now()
    return ClientRead.model_validate(await repos.clients.update(client))


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Client",
    responses={404: {"description": "Client not found"}, 409: {"description": "Client still has quotes"}},
)
async def delete_client(client_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> Response:
    await delete_or_404(repos.clients, client_id, "Client")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
