"""
API models for key/value site settings (social links, contact details, etc).
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class SiteSettingCreate(BaseModel):
    key: str = Field(..., min_length=1, pattern=r"^[A-Za-z0-9_.-]+$")
    value: Optional[str] = None
    category: str = Field("general", min_length=1)
    description: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {"key": "facebook_url", "value": "https://facebook.com/acmebuild", "category": "social"}
        }

class SiteSettingUpdate(BaseModel):
    key: Optional[str] = Field(None, min_length=1, pattern=r"^[A-Za-z0-9_.-]+$")
    value: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None

class SiteSettingValue(BaseModel):
    value: Optional[str] = None

class SiteSettingOut(BaseModel):
    id: int
    key: str
    value: Optional[str] = None
    category: str
    description: Optional[str] = None
    updated_at: datetime

    class Config:
        from_attributes = True
