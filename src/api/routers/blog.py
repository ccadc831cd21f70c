"""
Blog endpoints.

The public list only shows published posts; `/all` is the back-office view.
Slugs are unique across posts.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.projects import BlogPostCreate, BlogPostUpdate, BlogPostOut
from ..dependencies.services import get_store, get_file_tracker, require_admin
from .gallery import release_files, save_inline_gallery
from src.content.store import ContentStore
from src.content.errors import NotFoundError, DuplicateError
from src.services.uploads.tracker import FileTracker

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[BlogPostOut])
async def list_published_posts(store: ContentStore = Depends(get_store)):
    return store.list_blog_posts(published_only=True)

@router.get("/all", response_model=List[BlogPostOut], dependencies=[Depends(require_admin)])
async def list_all_posts(store: ContentStore = Depends(get_store)):
    return store.list_blog_posts()

@router.get("/slug/{slug}", response_model=BlogPostOut)
async def get_post_by_slug(slug: str, store: ContentStore = Depends(get_store)):
    try:
        post = store.get_blog_post_by_slug(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not post.published:
        raise HTTPException(status_code=404, detail=f"Blog post '{slug}' not found")
    return post

@router.get("/{post_id}", response_model=BlogPostOut)
async def get_post(post_id: int, store: ContentStore = Depends(get_store)):
    try:
        return store.get_blog_post(post_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("", response_model=BlogPostOut, status_code=201, dependencies=[Depends(require_admin)])
async def create_post(
    request: BlogPostCreate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    try:
        post = store.create_blog_post(**request.model_dump(exclude={"gallery_images"}))
    except DuplicateError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if request.gallery_images:
        save_inline_gallery(store, background_tasks, tracker, "blog", post.id, request.gallery_images)
    logger.info(f"Created blog post {post.id} ({post.slug}), published={post.published}")
    return store.get_blog_post(post.id)

@router.put("/{post_id}", response_model=BlogPostOut, dependencies=[Depends(require_admin)])
async def update_post(
    post_id: int,
    request: BlogPostUpdate,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    changes = request.model_dump(exclude_unset=True, exclude_none=True, exclude={"gallery_images"})
    try:
        old_cover = store.get_blog_post(post_id).image
        store.update_blog_post(post_id, **changes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if request.gallery_images is not None:
        save_inline_gallery(store, background_tasks, tracker, "blog", post_id, request.gallery_images)
    post = store.get_blog_post(post_id)
    if old_cover and old_cover != post.image:
        background_tasks.add_task(release_files, tracker, store, [old_cover])
    return post

@router.delete("/{post_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_post(
    post_id: int,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    try:
        post = store.get_blog_post(post_id)
        removed = store.delete_blog_post(post_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    urls = [post.image] + [img.image_url for img in removed]
    background_tasks.add_task(release_files, tracker, store, urls)
    return Response(status_code=204)
