"""
API models for job postings.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class JobPostingCreate(BaseModel):
    title: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="Full-time, Part-time, Contract...")
    description: str = Field(..., min_length=1)
    responsibilities: str = Field(..., min_length=1)
    requirements: str = Field(..., min_length=1)
    benefits: Optional[str] = None
    salary: Optional[str] = None
    active: bool = True
    featured: bool = False

class JobPostingUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    responsibilities: Optional[str] = Field(None, min_length=1)
    requirements: Optional[str] = Field(None, min_length=1)
    benefits: Optional[str] = None
    salary: Optional[str] = None
    active: Optional[bool] = None
    featured: Optional[bool] = None

class JobPostingOut(BaseModel):
    id: int
    title: str
    department: str
    location: str
    type: str
    description: str
    responsibilities: str
    requirements: str
    benefits: Optional[str] = None
    salary: Optional[str] = None
    active: bool
    featured: bool
    created_at: datetime

    class Config:
        from_attributes = True
