"""
API models for testimonial submission and moderation.
"""

from pydantic import BaseModel, EmailStr, Field, validator
from typing import Optional
from datetime import datetime

from .common import lowercase_email

class TestimonialSubmit(BaseModel):
    """Public submission; always starts out pending approval."""
    name: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1)
    company: Optional[str] = None
    content: str = Field(..., min_length=10)
    rating: int = Field(..., ge=1, le=5)
    image: Optional[str] = None
    email: Optional[EmailStr] = Field(None, description="Where to send the confirmation, not stored")

    @validator('email')
    def validate_email(cls, v):
        return lowercase_email(v)

class TestimonialUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    position: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    image: Optional[str] = None
    approved: Optional[bool] = None

class TestimonialOut(BaseModel):
    id: int
    name: str
    position: str
    company: Optional[str] = None
    content: str
    rating: int
    image: Optional[str] = None
    approved: bool
    created_at: datetime

    class Config:
        from_attributes = True
