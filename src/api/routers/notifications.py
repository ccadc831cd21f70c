"""
Admin notification badge endpoint.
"""

from fastapi import APIRouter, Depends

from ..models.notifications import NotificationCountsOut
from ..dependencies.services import get_store, get_aggregator, require_admin
from src.content.store import ContentStore
from src.content.notifications.aggregator import NotificationAggregator

router = APIRouter(dependencies=[Depends(require_admin)])

@router.get("/notifications", response_model=NotificationCountsOut)
async def get_notification_counts(
    store: ContentStore = Depends(get_store),
    aggregator: NotificationAggregator = Depends(get_aggregator),
):
    """
    Counts for the admin navigation badge.

    Derived on every call from the current messages, pending testimonials and quote
    requests; the aggregator skips recomputation when none of them changed.
    """
    counts = aggregator.counts(
        messages=store.list_messages(),
        pending_testimonials=store.list_testimonials(approved=False),
        quote_requests=store.list_quote_requests(),
    )
    return NotificationCountsOut(**counts.as_dict())
