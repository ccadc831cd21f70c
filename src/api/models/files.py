"""
API models for upload bookkeeping and file host management.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from .common import APIResponse

class TrackFileRequest(BaseModel):
    file_url: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1)
    filename: Optional[str] = None

class CommitFilesRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    file_urls: Optional[List[str]] = Field(None, description="Commit only these, or every file of the session")

class CleanupRequest(BaseModel):
    session_id: Optional[str] = None
    file_url: Optional[str] = None
    file_urls: Optional[List[str]] = None
    preserve_urls: List[str] = Field(default_factory=list)

class DeleteBatchRequest(BaseModel):
    keys: List[str] = Field(..., min_length=1)

class TrackedFileOut(BaseModel):
    url: str
    session_id: str
    key: Optional[str] = None
    filename: Optional[str] = None
    tracked_at: datetime
    committed: bool

    class Config:
        from_attributes = True

class TrackFileResponse(APIResponse):
    file: TrackedFileOut

class CommitFilesResponse(APIResponse):
    files: List[TrackedFileOut] = Field(default_factory=list)

class CleanupResponse(APIResponse):
    deleted_files: List[str] = Field(default_factory=list)
    failed_files: List[str] = Field(default_factory=list)
    preserved_files: List[str] = Field(default_factory=list)
    deleted_count: int = 0
    failed_count: int = 0
    preserved_count: int = 0

class HostedFileOut(BaseModel):
    key: str
    name: str
    url: str
    size: int
    uploaded_at: Optional[str] = None

    class Config:
        from_attributes = True

class DeleteFilesResponse(APIResponse):
    deleted_count: int = 0
