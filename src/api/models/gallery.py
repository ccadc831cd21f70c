"""
API models for image galleries.

Projects, services and blog posts share these; `owner_id` is the id of whichever
record the gallery belongs to.
"""

from pydantic import BaseModel, Field, validator
from typing import List, Optional, Union
from datetime import datetime

from .common import APIResponse

# Gallery Request Models
class GalleryImageCreate(BaseModel):
    image_url: str = Field(..., min_length=1, description="URL returned by the file host")
    caption: str = Field("", description="Optional caption")
    display_order: Optional[int] = Field(None, ge=1, description="1-based position, appended when omitted")
    is_feature: bool = Field(False, description="Make this the feature image and the owner's cover")
    session_id: Optional[str] = Field(None, description="Upload session to commit the file against")

    class Config:
        json_schema_extra = {
            "example": {
                "image_url": "https://utfs.io/f/abc123-site-photo.jpg",
                "caption": "Foundation pour, week 3",
                "is_feature": False
            }
        }

class GalleryImageUpdate(BaseModel):
    caption: Optional[str] = None
    display_order: Optional[int] = Field(None, ge=1)

class GalleryOrderItem(BaseModel):
    id: int
    display_order: int = Field(..., ge=1)

class GalleryOrderRequest(BaseModel):
    """Ordering computed by the client after a drag ends. Images left out go last."""
    image_orders: List[GalleryOrderItem]

    @validator('image_orders')
    def validate_unique_ids(cls, v):
        ids = [item.id for item in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Each image may only appear once in the ordering")
        return v

class GalleryReorderRequest(BaseModel):
    """A single drag-end event: the moved image and the image it was dropped on."""
    active_id: int
    over_id: Optional[int] = None

class GalleryItemIn(BaseModel):
    """One entry of a gallery edited together with its owner's form."""
    id: Optional[Union[int, str]] = Field(None, description="Stored image id; client-local ids are ignored")
    image_url: Optional[str] = None
    caption: Optional[str] = ""
    is_feature: bool = False

    @validator('id')
    def drop_local_ids(cls, v):
        if isinstance(v, str):
            # the admin form sends stored images as "existing-<id>"
            prefix, _, number = v.partition("-")
            return int(number) if prefix == "existing" and number.isdigit() else None
        return v

# Gallery Response Models
class GalleryImageOut(BaseModel):
    id: int
    owner_id: int
    image_url: str
    caption: str
    display_order: int
    is_feature: bool
    created_at: datetime

    class Config:
        from_attributes = True

class GalleryReorderResponse(APIResponse):
    changed: bool = Field(..., description="Whether the event changed the order")
    images: List[GalleryImageOut] = Field(default_factory=list)
