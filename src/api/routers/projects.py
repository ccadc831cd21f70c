"""
Project endpoints.

A project can be saved together with its gallery; the first image becomes the
feature image when none is flagged, and the project cover follows the feature image.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.projects import ProjectCreate, ProjectUpdate, ProjectOut
from ..dependencies.services import get_store, get_file_tracker, require_admin
from .gallery import release_files, save_inline_gallery
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.services.uploads.tracker import FileTracker
from src.utils.sanitize import strip_html

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[ProjectOut])
async def list_projects(store: ContentStore = Depends(get_store)):
    return store.list_projects()

@router.get("/featured", response_model=List[ProjectOut])
async def list_featured_projects(store: ContentStore = Depends(get_store)):
    return store.featured_projects()

@router.get("/{project_id}", response_model=ProjectOut)
async def get_project(project_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.get_project(project_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("", response_model=ProjectOut, status_code=201, dependencies=[Depends(require_admin)])
async def create_project(
    request: ProjectCreate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    data = request.model_dump(exclude={"gallery_images"})
    data["description"] = strip_html(data["description"])
    project = store.create_project(**data)

    if request.gallery_images:
        images = save_inline_gallery(
            store, background_tasks, tracker, "project", project.id, request.gallery_images, promote_first=True,
        )
        logger.info(f"Project {project.id} created with {len(images)} gallery images")
    return store.get_project(project.id)

@router.put("/{project_id}", response_model=ProjectOut, dependencies=[Depends(require_admin)])
async def update_project(
    project_id: int,
    request: ProjectUpdate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    changes = request.model_dump(exclude_unset=True, exclude_none=True, exclude={"gallery_images"})
    if "description" in changes:
        changes["description"] = strip_html(changes["description"])
    try:
        old_cover = store.get_project(project_id).image
        store.update_project(project_id, **changes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if request.gallery_images is not None:
        save_inline_gallery(
            store, background_tasks, tracker, "project", project_id, request.gallery_images, promote_first=True,
        )
    project = store.get_project(project_id)
    if old_cover and old_cover != project.image:
        background_tasks.add_task(release_files, tracker, store, [old_cover])
    return project

@router.delete("/{project_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_project(
    project_id: int,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    try:
        project = store.get_project(project_id)
        removed = store.delete_project(project_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    urls = [project.image] + [img.image_url for img in removed if img.image_url]
    background_tasks.add_task(release_files, tracker, store, urls)
    return Response(status_code=204)
