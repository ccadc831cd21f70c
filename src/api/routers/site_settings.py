"""
Site settings endpoints: key/value pairs grouped by category, read by the public
site and edited in the back-office.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response

from ..models.site_settings import SiteSettingCreate, SiteSettingUpdate, SiteSettingValue, SiteSettingOut
from ..dependencies.services import get_store, require_admin
from src.content.store import ContentStore
from src.content.errors import NotFoundError, DuplicateError

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])

@router.get("", response_model=List[SiteSettingOut])
async def list_settings(store: ContentStore = Depends(get_store)):
    return store.list_site_settings()

@router.get("/category/{category}", response_model=List[SiteSettingOut])
async def list_settings_in_category(category: str, store: ContentStore = Depends(get_store)):
    return store.list_site_settings(category=category)

@router.get("/{key}", response_model=SiteSettingOut)
async def get_setting(key: str, store: ContentStore = Depends(get_store)):
    try:
        return store.get_site_setting(key)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.post("", response_model=SiteSettingOut, status_code=201)
async def create_setting(request: SiteSettingCreate, store: ContentStore = Depends(get_store)):
    try:
        setting = store.create_site_setting(**request.model_dump())
    except DuplicateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Created site setting {setting.key} in {setting.category}")
    return setting

@admin_router.put("/key/{key}", response_model=SiteSettingOut)
async def set_setting_value(key: str, request: SiteSettingValue, store: ContentStore = Depends(get_store)):
    try:
        return store.set_site_setting_value(key, request.value)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@admin_router.put("/{setting_id}", response_model=SiteSettingOut)
async def update_setting(setting_id: int, request: SiteSettingUpdate, store: ContentStore = Depends(get_store)):
    try:
        changes = {
            k: v for k, v in request.model_dump(exclude_unset=True).items()
            if v is not None or k in ("value", "description")
        }
        return store.update_site_setting(setting_id, **changes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateError as e:
        raise HTTPException(status_code=400, detail=str(e))

@admin_router.delete("/{setting_id}", status_code=204)
async def delete_setting(setting_id: int, store: ContentStore = Depends(get_store)):
    try:
        store.delete_site_setting(setting_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
