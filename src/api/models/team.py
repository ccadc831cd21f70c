"""
API models for the team page.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)
    qualification: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = Field(None, description="Photo URL on the file host")
    order: Optional[int] = Field(None, ge=0, description="Position on the team page, appended when omitted")
    active: bool = True

class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    designation: Optional[str] = Field(None, min_length=1)
    qualification: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None

class TeamMemberOrder(BaseModel):
    order: int = Field(..., ge=0)

class TeamMemberOut(BaseModel):
    id: int
    name: str
    designation: str
    qualification: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = None
    order: int
    active: bool
    created_at: datetime

    class Config:
        from_attributes = True
