"""
Careers page and job posting management endpoints.

Inactive postings are hidden from the public endpoints but stay editable in the
back-office.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response

from ..models.careers import JobPostingCreate, JobPostingUpdate, JobPostingOut
from ..dependencies.services import get_store, require_admin
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.utils.sanitize import strip_html

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])

_TEXT_FIELDS = ("description", "responsibilities", "requirements", "benefits")
_NULLABLE = ("benefits", "salary")


def _clean(data: dict) -> dict:
    """Strip markup from the long text fields and drop nulls the posting cannot hold."""
    return {
        k: strip_html(v) if k in _TEXT_FIELDS else v
        for k, v in data.items()
        if v is not None or k in _NULLABLE
    }


@router.get("", response_model=List[JobPostingOut])
async def list_open_positions(store: ContentStore = Depends(get_store)):
    return store.list_job_postings(active=True)

@router.get("/featured", response_model=List[JobPostingOut])
async def list_featured_positions(store: ContentStore = Depends(get_store)):
    return store.list_job_postings(active=True, featured=True)

@router.get("/{job_id}", response_model=JobPostingOut)
async def get_open_position(job_id: int, store: ContentStore = Depends(get_store)):
    try:
        job = store.get_job_posting(job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not job.active:
        raise HTTPException(status_code=404, detail="Job posting not found or not active")
    return job

@admin_router.get("", response_model=List[JobPostingOut])
async def list_job_postings(store: ContentStore = Depends(get_store)):
    return store.list_job_postings()

@admin_router.get("/{job_id}", response_model=JobPostingOut)
async def get_job_posting(job_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.get_job_posting(job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.post("", response_model=JobPostingOut, status_code=201)
async def create_job_posting(request: JobPostingCreate, store: ContentStore = Depends(get_store)):
    job = store.create_job_posting(**_clean(request.model_dump()))
    logger.info(f"Created job posting {job.id}: {job.title} (active={job.active})")
    return job

@admin_router.put("/{job_id}", response_model=JobPostingOut)
async def update_job_posting(job_id: int, request: JobPostingUpdate, store: ContentStore = Depends(get_store)):
    try:
        return store.update_job_posting(job_id, **_clean(request.model_dump(exclude_unset=True)))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.put("/{job_id}/toggle-active", response_model=JobPostingOut)
async def toggle_job_active(job_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.toggle_job_posting(job_id, "active")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.put("/{job_id}/toggle-featured", response_model=JobPostingOut)
async def toggle_job_featured(job_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.toggle_job_posting(job_id, "featured")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.delete("/{job_id}", status_code=204)
async def delete_job_posting(job_id: int, store: ContentStore = Depends(get_store)):
    try:
        store.delete_job_posting(job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
