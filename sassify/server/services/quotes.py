"""
Quote pricing and lifecycle rules.

Line totals are ``quantity x unit_price``; when lines exist the quote's
``total_ht`` is their sum. ``total_ttc`` always follows ``total_ht`` and
``tva_rate``. Moving a quote to ``sent`` or ``accepted`` stamps the
matching timestamp.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from sassify.core.database.base import utc_now
from sassify.core.database.entities.quotes import Quote, QuoteItem, QuoteStatus
from sassify.core.models.io.quotes import QuoteItemCreate

CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def build_items(items: Iterable[QuoteItemCreate]) -> List[QuoteItem]:
    built: List[QuoteItem] = []
    for position, item in enumerate(items):
        built.append(
            QuoteItem(
                description=item.description,
                quantity=item.quantity,
                unit=item.unit,
                unit_price=item.unit_price,
                total_price=money(item.quantity * item.unit_price),
                sort_order=item.sort_order if item.sort_order is not None else position,
                notes=item.notes,
            )
        )
    return built


def apply_totals(quote: Quote, items: Optional[List[QuoteItem]] = None) -> Quote:
    """Recompute ``total_ht`` from ``items`` (when given) and ``total_ttc`` from it."""
    if items is not None:
        quote.total_ht = money(sum((item.total_price for item in items), Decimal("0")))
    total_ht = Decimal(quote.total_ht or 0)
    tva_rate = Decimal(quote.tva_rate if quote.tva_rate is not None else 0)
    quote.total_ht = money(total_ht)
    quote.total_ttc = money(total_ht * (1 + tva_rate / Decimal(100)))
    return quote


def apply_status(quote: Quote, status: QuoteStatus) -> Quote:
    """Set the status, stamping ``sent_at`` or ``accepted_at`` on the way in."""
    previous = quote.status
    quote.status = status.value
    if previous != status.value:
        if status == QuoteStatus.SENT:
            quote.sent_at = utc_now()
        elif status == QuoteStatus.ACCEPTED:
            quote.accepted_at = utc_now()
    return quote
