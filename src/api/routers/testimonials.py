"""
Testimonial submission and moderation endpoints.

Public submissions are stored unapproved; only approved testimonials are served on
the public list.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from ..models.common import APIResponse
from ..models.testimonials import TestimonialSubmit, TestimonialUpdate, TestimonialOut
from ..dependencies.services import get_store, get_notifier, require_admin
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.services.mail.notifier import EmailNotifier
from src.utils.sanitize import strip_html

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])

@router.get("", response_model=List[TestimonialOut])
async def list_approved_testimonials(store: ContentStore = Depends(get_store)):
    return store.list_testimonials(approved=True)

@router.post("/submit", response_model=APIResponse, status_code=201)
async def submit_testimonial(
    request: TestimonialSubmit,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    notifier: EmailNotifier = Depends(get_notifier),
):
    testimonial = store.create_testimonial(
        name=request.name.strip(),
        position=request.position.strip(),
        company=request.company,
        content=strip_html(request.content),
        rating=request.rating,
        image=request.image,
        approved=False,
    )
    logger.info(f"Testimonial {testimonial.id} submitted, awaiting approval")
    background_tasks.add_task(notifier.notify_testimonial, testimonial, request.email)
    return APIResponse(
        success=True,
        message="Thank you for your testimonial! It will be reviewed by our team before being published.",
    )

@admin_router.get("", response_model=List[TestimonialOut])
async def list_all_testimonials(store: ContentStore = Depends(get_store)):
    return store.list_testimonials()

@admin_router.get("/pending", response_model=List[TestimonialOut])
async def list_pending_testimonials(store: ContentStore = Depends(get_store)):
    return store.list_testimonials(approved=False)

@admin_router.get("/{testimonial_id}", response_model=TestimonialOut)
async def get_testimonial(testimonial_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.get_testimonial(testimonial_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.put("/{testimonial_id}", response_model=TestimonialOut)
async def update_testimonial(testimonial_id: int, request: TestimonialUpdate, store: ContentStore = Depends(get_store)):
    # company and image may be cleared, everything else can only be replaced
    changes = {
        k: v for k, v in request.model_dump(exclude_unset=True).items()
        if v is not None or k in ("company", "image")
    }
    if "content" in changes:
        changes["content"] = strip_html(changes["content"])
    if "image" in changes and not changes["image"]:
        changes["image"] = None
    try:
        return store.update_testimonial(testimonial_id, **changes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@admin_router.put("/{testimonial_id}/approve", response_model=TestimonialOut)
async def approve_testimonial(testimonial_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.set_testimonial_approval(testimonial_id, True)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.put("/{testimonial_id}/revoke", response_model=TestimonialOut)
async def revoke_testimonial(testimonial_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.set_testimonial_approval(testimonial_id, False)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.delete("/{testimonial_id}", response_model=APIResponse)
async def delete_testimonial(testimonial_id: int, store: ContentStore = Depends(get_store)):
    try:
        store.delete_testimonial(testimonial_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return APIResponse(success=True, message="Testimonial deleted successfully")
