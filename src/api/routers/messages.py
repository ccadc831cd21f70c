"""
Contact form and admin inbox endpoints.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.common import APIResponse
from ..models.messages import MessageCreate, MessageOut
from ..dependencies.services import get_store, get_notifier, require_admin
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.services.mail.notifier import EmailNotifier
from src.utils.sanitize import strip_html, mask_email, mask_phone

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/contact", response_model=APIResponse, status_code=201)
async def submit_message(
    request: MessageCreate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    notifier: EmailNotifier = Depends(get_notifier),
):
    logger.info(f"Contact message from {mask_email(request.email)} (phone: {mask_phone(request.phone)})")
    message = store.create_message(
        name=request.name.strip(),
        email=request.email,
        phone=request.phone,
        service=request.service,
        message=strip_html(request.message),
    )
    background_tasks.add_task(notifier.notify_new_message, message)
    return APIResponse(success=True, message="Message sent successfully")

@router.get("/messages", response_model=List[MessageOut], dependencies=[Depends(require_admin)])
async def list_messages(store: ContentStore = Depends(get_store)):
    return store.list_messages()

@router.put("/messages/{message_id}/read", response_model=MessageOut, dependencies=[Depends(require_admin)])
async def mark_message_read(message_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.mark_message_read(message_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.delete("/messages/{message_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_message(message_id: int, store: ContentStore = Depends(get_store)):
    try:
        store.delete_message(message_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
