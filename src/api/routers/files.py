"""
Upload bookkeeping and file host management endpoints.

The browser uploads straight to UploadThing; these endpoints keep track of what was
uploaded during an editing session so abandoned uploads can be removed again.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from ..models.files import (
    TrackFileRequest, TrackFileResponse, TrackedFileOut,
    CommitFilesRequest, CommitFilesResponse,
    CleanupRequest, CleanupResponse,
    DeleteBatchRequest, DeleteFilesResponse, HostedFileOut,
)
from ..dependencies.services import get_store, get_file_host, get_file_tracker, require_admin
from src.content.store import ContentStore
from src.services.uploads.base import FileHostProvider, UploadError
from src.services.uploads.tracker import FileTracker

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])

@router.post("/files/track", response_model=TrackFileResponse)
async def track_file(request: TrackFileRequest, tracker: FileTracker = Depends(get_file_tracker)):
    tracked = tracker.track(request.file_url, request.session_id, request.filename)
    return TrackFileResponse(
        success=True,
        message="File tracked successfully",
        file=TrackedFileOut.model_validate(tracked),
    )

@router.post("/files/commit", response_model=CommitFilesResponse)
async def commit_files(request: CommitFilesRequest, tracker: FileTracker = Depends(get_file_tracker)):
    committed = tracker.commit(request.session_id, request.file_urls)
    return CommitFilesResponse(
        success=True,
        message=f"Committed {len(committed)} files",
        files=[TrackedFileOut.model_validate(f) for f in committed],
    )

@router.post("/files/cleanup", response_model=CleanupResponse)
async def cleanup_files(
    request: CleanupRequest,
    store: ContentStore = Depends(get_store),
    tracker: FileTracker = Depends(get_file_tracker),
):
    """
    Remove uncommitted uploads from the file host.

    URLs still referenced by projects, galleries, testimonials or quote attachments
    are always preserved, on top of any preserve_urls sent by the client.
    """
    urls = None
    if request.file_urls is not None or request.file_url:
        urls = list(request.file_urls or []) + ([request.file_url] if request.file_url else [])
    if request.session_id is None and urls is None:
        raise HTTPException(status_code=400, detail="Session ID, file_url, or file_urls is required")

    preserve = set(request.preserve_urls) | store.referenced_urls()
    report = tracker.cleanup(session_id=request.session_id, urls=urls, preserve_urls=preserve)

    return CleanupResponse(
        success=not report.failed,
        message=f"Deleted {len(report.deleted)} files",
        deleted_files=report.deleted,
        failed_files=report.failed,
        preserved_files=report.preserved,
        deleted_count=len(report.deleted),
        failed_count=len(report.failed),
        preserved_count=len(report.preserved),
    )

@router.get("/uploadthing/files", response_model=List[HostedFileOut])
async def list_hosted_files(file_host: FileHostProvider = Depends(get_file_host)):
    try:
        return file_host.list_files()
    except UploadError as e:
        logger.error(f"Listing hosted files failed: {e}")
        raise HTTPException(status_code=502, detail=f"File host request failed: {e}")

@router.delete("/uploadthing/files/{key}", response_model=DeleteFilesResponse)
async def delete_hosted_file(key: str, file_host: FileHostProvider = Depends(get_file_host)):
    try:
        result = file_host.delete_file(key)
    except UploadError as e:
        logger.error(f"Deleting hosted file {key} failed: {e}")
        raise HTTPException(status_code=502, detail=f"File host request failed: {e}")
    return DeleteFilesResponse(
        success=result.success,
        message="File deleted" if result.success else "File host refused the deletion",
        deleted_count=result.deleted_count,
    )

@router.post("/uploadthing/files/delete-batch", response_model=DeleteFilesResponse)
async def delete_hosted_files(request: DeleteBatchRequest, file_host: FileHostProvider = Depends(get_file_host)):
    try:
        result = file_host.delete_files(request.keys)
    except UploadError as e:
        logger.error(f"Batch delete of {len(request.keys)} hosted files failed: {e}")
        raise HTTPException(status_code=502, detail=f"File host request failed: {e}")
    return DeleteFilesResponse(
        success=result.success,
        message=f"Deleted {result.deleted_count} files",
        deleted_count=result.deleted_count,
    )
