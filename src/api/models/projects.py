"""
API models for projects, services and blog posts: the records that own a gallery.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from .gallery import GalleryItemIn

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

# Project Models
class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image: str = Field("", description="Cover image URL; taken from the feature image when a gallery is sent")
    featured: bool = False
    gallery_images: Optional[List[GalleryItemIn]] = Field(None, description="Gallery saved with the project")

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Riverside Offices",
                "category": "Commercial",
                "description": "Three storey office block with underground parking.",
                "featured": True,
                "gallery_images": [
                    {"image_url": "https://utfs.io/f/abc-front.jpg", "caption": "Front elevation"},
                    {"image_url": "https://utfs.io/f/abc-lobby.jpg", "caption": "Lobby", "is_feature": True}
                ]
            }
        }

class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, min_length=1)
    featured: Optional[bool] = None
    gallery_images: Optional[List[GalleryItemIn]] = Field(None, description="Replaces the gallery when present")

class ProjectOut(BaseModel):
    id: int
    title: str
    category: str
    description: str
    image: str
    featured: bool
    created_at: datetime

    class Config:
        from_attributes = True

# Service Models
class ServiceCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1, description="Icon name shown on the services page")
    gallery_images: Optional[List[GalleryItemIn]] = None

class ServiceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = Field(None, min_length=1)
    gallery_images: Optional[List[GalleryItemIn]] = None

class ServiceOut(BaseModel):
    id: int
    title: str
    description: str
    icon: str
    created_at: datetime

    class Config:
        from_attributes = True

# Blog Models
class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., pattern=SLUG_PATTERN, description="Lowercase words joined by hyphens")
    content: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)
    category: str = ""
    author: str = Field(..., min_length=1)
    published: bool = True
    gallery_images: Optional[List[GalleryItemIn]] = None

class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, pattern=SLUG_PATTERN)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    author: Optional[str] = Field(None, min_length=1)
    published: Optional[bool] = None
    gallery_images: Optional[List[GalleryItemIn]] = None

class BlogPostOut(BaseModel):
    id: int
    title: str
    slug: str
    content: str
    excerpt: str
    image: str
    category: str
    author: str
    published: bool
    created_at: datetime

    class Config:
        from_attributes = True
