"""
Gallery endpoints shared by projects, services and blog posts.

Gallery order is always dense and 1-based; every mutation below goes through the
gallery ordering operations so that holds after each request.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.gallery import (
    GalleryImageCreate, GalleryImageUpdate, GalleryImageOut, GalleryItemIn,
    GalleryOrderRequest, GalleryReorderRequest, GalleryReorderResponse,
)
from ..dependencies.services import get_store, get_file_tracker, require_admin
from src.content.store import ContentStore, GALLERY_OWNERS
from src.content.errors import NotFoundError, GalleryError
from src.content.gallery.reorder import GalleryReorderController
from src.content.gallery.types import DragEndEvent, GalleryImage
from src.services.uploads.base import extract_file_key
from src.services.uploads.tracker import FileTracker
from src.utils.sanitize import strip_html

logger = logging.getLogger(__name__)


def release_files(tracker: FileTracker, store: ContentStore, urls: List[str]) -> None:
    """Delete files from the host once nothing in the store references them any more."""
    hosted = [url for url in urls if url and extract_file_key(url)]
    if not hosted:
        return
    report = tracker.cleanup(urls=hosted, preserve_urls=store.referenced_urls())
    if report.failed:
        logger.warning(f"Could not release {len(report.failed)} files: {report.failed}")


def save_inline_gallery(
    store: ContentStore,
    background_tasks: BackgroundTasks,
    tracker: FileTracker,
    owner: str,
    owner_id: int,
    items: List[GalleryItemIn],
    promote_first: bool = False,
) -> List[GalleryImage]:
    """Save a gallery sent along with its owner's form and release the files it dropped."""
    images, removed = store.sync_gallery(
        owner_id,
        [dict(item.model_dump(), caption=strip_html(item.caption) or "") for item in items],
        owner=owner,
        promote_first=promote_first,
    )
    dropped = [img.image_url for img in removed if img.image_url]
    if dropped:
        background_tasks.add_task(release_files, tracker, store, dropped)
    return images


def build_gallery_router(owner: str) -> APIRouter:
    """Gallery routes for one kind of owner, mounted under that owner's prefix."""
    label = GALLERY_OWNERS[owner].lower()
    router = APIRouter()

    @router.get("/{owner_id}/gallery", response_model=List[GalleryImageOut])
    async def get_gallery(owner_id: int, store: ContentStore = Depends(get_store)):
        try:
            return store.get_gallery(owner_id, owner=owner)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @router.post("/{owner_id}/gallery", response_model=GalleryImageOut, status_code=201, dependencies=[Depends(require_admin)])
    async def add_gallery_image(
        owner_id: int,
        request: GalleryImageCreate,
        store: ContentStore = Depends(get_store),
        tracker: FileTracker = Depends(get_file_tracker),
    ):
        try:
            image = store.add_gallery_image(
                owner_id,
                image_url=request.image_url,
                caption=strip_html(request.caption) or "",
                display_order=request.display_order,
                is_feature=request.is_feature,
                owner=owner,
            )
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

        if request.session_id:
            tracker.commit(request.session_id, [request.image_url])
        logger.info(f"Added gallery image {image.id} to {label} {owner_id} at position {image.display_order}")
        return image

    @router.put("/gallery/{image_id}", response_model=GalleryImageOut, dependencies=[Depends(require_admin)])
    async def update_gallery_image(image_id: int, request: GalleryImageUpdate, store: ContentStore = Depends(get_store)):
        caption = strip_html(request.caption) if request.caption is not None else None
        try:
            return store.update_gallery_image(image_id, caption=caption, display_order=request.display_order, owner=owner)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @router.put("/{owner_id}/gallery/order", response_model=List[GalleryImageOut], dependencies=[Depends(require_admin)])
    async def save_gallery_order(owner_id: int, request: GalleryOrderRequest, store: ContentStore = Depends(get_store)):
        """
        Persist the order the client computed after a drag.

        The stored order is re-densified: listed images are placed by their display
        order, unlisted ones follow in their current order.
        """
        order = {item.id: item.display_order for item in request.image_orders}
        try:
            return store.apply_gallery_order(owner_id, order, owner=owner)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @router.post("/{owner_id}/gallery/reorder", response_model=GalleryReorderResponse, dependencies=[Depends(require_admin)])
    async def reorder_gallery(owner_id: int, request: GalleryReorderRequest, store: ContentStore = Depends(get_store)):
        """Apply one drag-end event server-side and persist the resulting order."""
        try:
            images = store.get_gallery(owner_id, owner=owner)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

        saved = []
        controller = GalleryReorderController(
            images,
            on_change=lambda updated: saved.append(store.replace_gallery(owner_id, updated, owner=owner)),
        )
        result = controller.handle_drag_end(DragEndEvent(active_id=request.active_id, over_id=request.over_id))

        changed = bool(saved)
        return GalleryReorderResponse(
            success=True,
            message="Gallery order updated" if changed else "Gallery order unchanged",
            changed=changed,
            images=[GalleryImageOut.model_validate(img) for img in (saved[-1] if saved else result)],
        )

    @router.put("/{owner_id}/gallery/{image_id}/set-feature", response_model=GalleryImageOut, dependencies=[Depends(require_admin)])
    async def set_feature_image(owner_id: int, image_id: int, store: ContentStore = Depends(get_store)):
        try:
            return store.set_feature_image(owner_id, image_id, owner=owner)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except GalleryError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @router.delete("/gallery/{image_id}", status_code=204, dependencies=[Depends(require_admin)])
    async def delete_gallery_image(
        image_id: int,
        background_tasks: BackgroundTasks,
        store: ContentStore = Depends(get_store),
        tracker: FileTracker = Depends(get_file_tracker),
    ):
        try:
            image = store.delete_gallery_image(image_id, owner=owner)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

        if image.image_url:
            background_tasks.add_task(release_files, tracker, store, [image.image_url])
        return Response(status_code=204)

    return router
