"""Back-office Invoice Endpoints (read-only; invoices come from billing webhooks)."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends

from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.models.io.invoices import InvoiceRead
from sassify.server.services.deps import get_repos

from .common import PageParams, get_or_404

router = APIRouter(tags=["admin-invoices"])


@router.get("", response_model=List[InvoiceRead], summary="List Invoices")
async def list_invoices(
    subscription_id: Optional[int] = None,
    page: PageParams = Depends(),
    repos: SqlRepoBundle = Depends(get_repos),
) -> List[InvoiceRead]:
    invoices = await repos.invoices.list(
        limit=page.limit, offset=page.offset, filters={"subscription_id": subscription_id}
    )
    return [InvoiceRead.model_validate(invoice) for invoice in invoices]


@router.get(
    "/{invoice_id}",
    response_model=InvoiceRead,
    summary="Get Invoice",
    responses={404: {"description": "Invoice not found"}},
)
async def get_invoice(invoice_id: int, repos: SqlRepoBundle = Depends(get_repos)) -> InvoiceRead:
    return InvoiceRead.model_validate(await get_or_404(repos.invoices, invoice_id, "Invoice"))
