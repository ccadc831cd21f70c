"""
API models for the contact form and the admin inbox.
"""

from pydantic import BaseModel, EmailStr, Field, validator
from typing import Optional
from datetime import datetime

from .common import lowercase_email

class MessageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = None
    service: Optional[str] = None
    message: str = Field(..., min_length=1)

    @validator('email')
    def validate_email(cls, v):
        return lowercase_email(v)

class MessageOut(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    service: Optional[str] = None
    message: str
    read: bool
    created_at: datetime

    class Config:
        from_attributes = True
