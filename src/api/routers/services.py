"""
Service catalogue endpoints. Services carry a gallery but no cover image.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.projects import ServiceCreate, ServiceUpdate, ServiceOut
from ..dependencies.services import get_store, get_file_tracker, require_admin
from .gallery import release_files, save_inline_gallery
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.services.uploads.tracker import FileTracker
from src.utils.sanitize import strip_html

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[ServiceOut])
async def list_services(store: ContentStore = Depends(get_store)):
    return store.list_services()

@router.get("/{service_id}", response_model=ServiceOut)
async def get_service(service_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.get_service(service_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("", response_model=ServiceOut, status_code=201, dependencies=[Depends(require_admin)])
async def create_service(
    request: ServiceCreate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    service = store.create_service(
        title=request.title,
        description=strip_html(request.description),
        icon=request.icon,
    )
    if request.gallery_images:
        save_inline_gallery(store, background_tasks, tracker, "service", service.id, request.gallery_images)
    return service

@router.put("/{service_id}", response_model=ServiceOut, dependencies=[Depends(require_admin)])
async def update_service(
    service_id: int,
    request: ServiceUpdate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    changes = request.model_dump(exclude_unset=True, exclude_none=True, exclude={"gallery_images"})
    if "description" in changes:
        changes["description"] = strip_html(changes["description"])
    try:
        service = store.update_service(service_id, **changes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if request.gallery_images is not None:
        save_inline_gallery(store, background_tasks, tracker, "service", service_id, request.gallery_images)
    return service

@router.delete("/{service_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_service(
    service_id: int,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    try:
        removed = store.delete_service(service_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info(f"Deleted service {service_id}")
    background_tasks.add_task(release_files, tracker, store, [img.image_url for img in removed])
    return Response(status_code=204)
