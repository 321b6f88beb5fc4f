"""
Back-office Quote Endpoints.

Quotes are written together with their items. Totals are recomputed from
the items and the VAT rate on every write, and status changes stamp the
``sent_at`` and ``accepted_at`` dates.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from sassify.core.database.base import utc_now
from sassify.core.database.entities.quotes import Quote, QuoteStatus
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.quotes import QuoteCreate, QuoteItemRead, QuoteRead, QuoteUpdate
from sassify.server.services import quotes as quote_rules
from sassify.server.services.deps import get_repos

from .common import PageParams, conflict, delete_or_404, get_or_404, without_nulls

router = APIRouter(tags=["admin-quotes"])

REQUIRED_FIELDS = ("client_id", "quote_number", "status", "title", "total_ht", "tva_rate", "expires_at")


async def _read(repos: SqlRepoBundle, quote: Quote) -> QuoteRead:
    items = await repos.quotes.list_items(quote.id)
    return QuoteRead.model_validate(
        {**quote.model_dump(), "items": [QuoteItemRead.model_validate(item) for item in items]}
    )


@router.get("", response_model=List[QuoteRead], summary="List Quotes")
async def list_quotes(
    user_id: Optional[int] = None,
    client_id: Optional[int] = None,
    quote_status: Optional[QuoteStatus] = None,
    page: PageParams = Depends(),
    repos: SqlRepoBundle = Depends(get_repos),
) -> List[QuoteRead]:
    """
    List quotes ordered by id, each with its items.

    - **user_id**, **client_id**, **quote_status**: optional equality filters.
    """
    filters = {
        "user_id": user_id,
        "client_id": client_id,
        "status": quote_status.value if quote_status else None,
    }
    quotes = await repos.quotes.list(limit=page.limit, offset=page.offset, filters=filters)
    return [await _read(repos, quote) for quote in quotes]


@router.get("/{quote_id}", response_model=QuoteRead, summary="Get Quote", responses={404: {"description": "Quote not found"}})
async def get_quote(quote_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> QuoteRead:
    return await _read(repos, await get_or_404(repos.quotes, quote_id, "Quote"))


@router.post(
    "",
    response_model=QuoteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Quote",
    description="Create a quote and its items. When items are given, `total_ht` is their sum.",
    responses={404: {"description": "User or client not found"}, 409: {"description": "Quote number already used"}},
)
async def create_quote(data: QuoteCreate, repos: SqlRepoBundle = Depends(get_repos)) -> QuoteRead:
    await get_or_404(repos.users, data.user_id, "User")
    await get_or_404(repos.clients, data.client_id, "Client")
    if await repos.quotes.get_by_number(data.quote_number) is not None:
        raise conflict(f"Quote number {data.quote_number} is already used")

    quote = Quote(**data.model_dump(exclude={"items", "status"}), status=QuoteStatus.DRAFT.value)
    quote_rules.apply_status(quote, data.status)
    items = quote_rules.build_items(data.items) if data.items is not None else []
    quote_rules.apply_totals(quote, items if data.items is not None else None)

    quote = await repos.quotes.create_with_items(quote, items)
    return await _read(repos, quote)


@router.patch(
    "/{quote_id}",
    response_model=QuoteRead,
    summary="Update Quote",
    description="Partially update a quote. Supplying `items` replaces every line and recomputes the totals.",
    responses={
        404: {"description": "Quote or client not found"},
        409: {"description": "Quote number already used"},
    },
)
async def update_quote(quote_id: int, data: QuoteUpdate, repos: SqlRepoBundle = Depends(get_repos)) -> QuoteRead:
    quote = await get_or_404(repos.quotes, quote_id, "Quote")
    update_data = without_nulls(data.model_dump(exclude_unset=True, exclude={"items"}), REQUIRED_FIELDS)

    if "client_id" in update_data:
        await get_or_404(repos.clients, update_data["client_id"], "Client")
    number = update_data.get("quote_number")
    if number is not None and number != quote.quote_number:
        if await repos.quotes.get_by_number(number) is not None:
            raise conflict(f"Quote number {number} is already used")

    new_status = update_data.pop("status", None)
    for key, value in update_data.items():
        setattr(quote, key, value)
    if new_status is not None:
        quote_rules.apply_status(quote, QuoteStatus(new_status))
    quote.updated_at = utc_now()

    if data.items is not None:
        items = quote_rules.build_items(data.items)
        quote_rules.apply_totals(quote, items)
        quote = await repos.quotes.replace_items(quote, items)
    else:
        quote_rules.apply_totals(quote)
        quote = await repos.quotes.update(quote)
    return await _read(repos, quote)


@router.delete(
    "/{quote_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Quote",
    description="Delete a quote together with its items.",
    responses={404: {"description": "Quote not found"}},
)
async def delete_quote(quote_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> Response:
    await delete_or_404(repos.quotes, quote_id, "Quote")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
