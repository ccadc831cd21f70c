"""
API models for quote requests and their attachments.
"""

from pydantic import BaseModel, EmailStr, Field, validator
from typing import List, Optional
from datetime import datetime

from .common import APIResponse, lowercase_email
from src.content.types import QUOTE_STATUSES

class AttachmentIn(BaseModel):
    """File already uploaded to the file host by the browser."""
    file_name: str
    file_url: Optional[str] = None
    file_key: Optional[str] = None
    file_size: int = Field(0, ge=0)
    file_type: str = "application/octet-stream"

class QuoteRequestCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = None
    company: Optional[str] = None
    service_type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=10)
    budget: Optional[str] = None
    timeframe: Optional[str] = None
    attachments: List[AttachmentIn] = Field(default_factory=list)

    @validator('email')
    def validate_email(cls, v):
        return lowercase_email(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Dana Builder",
                "email": "dana@example.com",
                "service_type": "Commercial Construction",
                "description": "Two storey office fit-out, roughly 900 m2.",
                "budget": "$250k-$500k",
                "timeframe": "Q3",
                "attachments": [
                    {
                        "file_name": "floorplan.pdf",
                        "file_url": "https://utfs.io/f/abc123-floorplan.pdf",
                        "file_key": "abc123-floorplan.pdf",
                        "file_size": 482133,
                        "file_type": "application/pdf"
                    }
                ]
            }
        }

class QuoteStatusUpdate(BaseModel):
    status: str = Field(..., description=f"One of: {', '.join(QUOTE_STATUSES)}")

class AttachmentOut(BaseModel):
    id: int
    quote_request_id: int
    file_name: str
    file_url: str
    file_key: str
    file_size: int
    file_type: str

    class Config:
        from_attributes = True

class QuoteRequestOut(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    service_type: str
    description: str
    budget: Optional[str] = None
    timeframe: Optional[str] = None
    status: str
    reviewed: bool
    created_at: datetime
    attachments: List[AttachmentOut] = Field(default_factory=list)

    class Config:
        from_attributes = True

class QuoteSubmitResponse(APIResponse):
    quote: QuoteRequestOut
    skipped_attachments: List[str] = Field(default_factory=list, description="Attachments missing a url or key")
