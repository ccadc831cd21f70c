"""
Team page and team member management endpoints.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.team import TeamMemberCreate, TeamMemberUpdate, TeamMemberOrder, TeamMemberOut
from ..dependencies.services import get_store, get_file_tracker, require_admin
from .gallery import release_files
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.services.uploads.tracker import FileTracker
from src.utils.sanitize import strip_html

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])

@router.get("", response_model=List[TeamMemberOut])
async def list_active_members(store: ContentStore = Depends(get_store)):
    return store.list_team_members(active_only=True)

@admin_router.get("", response_model=List[TeamMemberOut])
async def list_members(store: ContentStore = Depends(get_store)):
    return store.list_team_members()

@admin_router.get("/{member_id}", response_model=TeamMemberOut)
async def get_member(member_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.get_team_member(member_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.post("", response_model=TeamMemberOut, status_code=201)
async def create_member(request: TeamMemberCreate, store: ContentStore = Depends(get_store)):
    data = request.model_dump()
    data["bio"] = strip_html(data["bio"])
    member = store.create_team_member(**data)
    logger.info(f"Added team member {member.id} at position {member.order}")
    return member

@admin_router.put("/{member_id}", response_model=TeamMemberOut)
async def update_member(
    member_id: int,
    request: TeamMemberUpdate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    changes = {
        k: v for k, v in request.model_dump(exclude_unset=True).items()
        if v is not None or k in ("qualification", "gender", "bio", "photo")
    }
    if "bio" in changes:
        changes["bio"] = strip_html(changes["bio"])
    if changes.get("photo") == "":
        changes["photo"] = None
    try:
        old_photo = store.get_team_member(member_id).photo
        member = store.update_team_member(member_id, **changes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if old_photo and old_photo != member.photo:
        background_tasks.add_task(release_files, tracker, store, [old_photo])
    return member

@admin_router.put("/{member_id}/toggle-active", response_model=TeamMemberOut)
async def toggle_member_active(member_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.toggle_team_member_active(member_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.put("/{member_id}/order", response_model=TeamMemberOut)
async def set_member_order(member_id: int, request: TeamMemberOrder, store: ContentStore = Depends(get_store)):
    try:
        return store.set_team_member_order(member_id, request.order)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: int,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    try:
        member = store.delete_team_member(member_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if member.photo:
        background_tasks.add_task(release_files, tracker, store, [member.photo])
    return Response(status_code=204)
