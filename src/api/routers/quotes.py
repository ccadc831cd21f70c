"""
Quote request funnel and admin quote management endpoints.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.quotes import QuoteRequestCreate, QuoteRequestOut, QuoteStatusUpdate, QuoteSubmitResponse
from ..dependencies.services import get_store, get_notifier, require_admin
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.services.mail.notifier import EmailNotifier
from src.utils.sanitize import strip_html, mask_email, mask_phone

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])

@router.post("/request", response_model=QuoteSubmitResponse, status_code=201)
async def submit_quote_request(
    request: QuoteRequestCreate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    notifier: EmailNotifier = Depends(get_notifier),
):
    """
    Store a quote request and its already-uploaded attachments.

    An attachment without a file url or key is skipped and reported back; it never
    fails the whole submission.
    """
    logger.info(
        f"Quote request from {mask_email(request.email)} (phone: {mask_phone(request.phone)}), "
        f"{len(request.attachments)} attachments"
    )
    quote = store.create_quote_request(
        name=request.name.strip(),
        email=request.email,
        phone=request.phone,
        company=request.company,
        service_type=request.service_type,
        description=strip_html(request.description),
        budget=request.budget,
        timeframe=request.timeframe,
    )

    skipped = []
    for attachment in request.attachments:
        if not attachment.file_url or not attachment.file_key:
            logger.warning(f"Skipping attachment {attachment.file_name} on quote {quote.id}: missing url or key")
            skipped.append(attachment.file_name)
            continue
        store.add_quote_attachment(
            quote.id,
            file_name=attachment.file_name,
            file_url=attachment.file_url,
            file_key=attachment.file_key,
            file_size=attachment.file_size,
            file_type=attachment.file_type,
        )

    quote = store.get_quote_request(quote.id)
    logger.info(f"Created quote request {quote.id} with {len(quote.attachments)} attachments")
    background_tasks.add_task(notifier.notify_quote_request, quote)
    return QuoteSubmitResponse(
        success=True,
        message="Your quote request has been submitted successfully!",
        quote=QuoteRequestOut.model_validate(quote),
        skipped_attachments=skipped,
    )

@admin_router.get("", response_model=List[QuoteRequestOut])
async def list_quote_requests(store: ContentStore = Depends(get_store)):
    return store.list_quote_requests()

@admin_router.get("/{quote_id}", response_model=QuoteRequestOut)
async def get_quote_request(quote_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.get_quote_request(quote_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.put("/{quote_id}/status", response_model=QuoteRequestOut)
async def update_quote_status(quote_id: int, request: QuoteStatusUpdate, store: ContentStore = Depends(get_store)):
    try:
        return store.update_quote_status(quote_id, request.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@admin_router.put("/{quote_id}/reviewed", response_model=QuoteRequestOut)
async def mark_quote_reviewed(quote_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.mark_quote_reviewed(quote_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.delete("/attachments/{attachment_id}", status_code=204)
async def delete_quote_attachment(attachment_id: int, store: ContentStore = Depends(get_store)):
    try:
        store.delete_quote_attachment(attachment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)

@admin_router.delete("/{quote_id}", status_code=204)
async def delete_quote_request(quote_id: int, store: ContentStore = Depends(get_store)):
    try:
        store.delete_quote_request(quote_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
