"""
Newsletter subscription endpoints.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from ..models.newsletter import SubscribeRequest, UnsubscribeRequest, SubscriberOut, SubscriptionResponse
from ..dependencies.services import get_store, require_admin
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.utils.sanitize import mask_email

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])

@router.post("/subscribe", response_model=SubscriptionResponse)
async def subscribe(request: SubscribeRequest, store: ContentStore = Depends(get_store)):
    logger.info(f"Newsletter subscription request for {mask_email(request.email)}")
    existing = store.find_subscriber(request.email)
    if existing:
        if existing.subscribed:
            return SubscriptionResponse(success=True, message="You are already subscribed to our newsletter")
        resubscribed = store.set_subscription(existing.id, True)
        return SubscriptionResponse(
            success=True,
            message="Welcome back! You have been resubscribed to our newsletter",
            subscriber=SubscriberOut.model_validate(resubscribed),
        )

    subscriber = store.create_subscriber(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    body = SubscriptionResponse(
        success=True,
        message="Thank you for subscribing to our newsletter!",
        subscriber=SubscriberOut.model_validate(subscriber),
    )
    return JSONResponse(status_code=201, content=body.model_dump(mode="json"))

@router.post("/unsubscribe", response_model=SubscriptionResponse)
async def unsubscribe(request: UnsubscribeRequest, store: ContentStore = Depends(get_store)):
    subscriber = store.find_subscriber(request.email)
    if subscriber is None:
        raise HTTPException(status_code=404, detail="Email not found in subscriber list")
    updated = store.set_subscription(subscriber.id, False)
    return SubscriptionResponse(
        success=True,
        message="You have been unsubscribed from our newsletter",
        subscriber=SubscriberOut.model_validate(updated),
    )

@admin_router.get("", response_model=List[SubscriberOut])
async def list_subscribers(store: ContentStore = Depends(get_store)):
    return store.list_subscribers()

@admin_router.delete("/{subscriber_id}", status_code=204)
async def delete_subscriber(subscriber_id: int, store: ContentStore = Depends(get_store)):
    try:
        store.delete_subscriber(subscriber_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
