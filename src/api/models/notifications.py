"""
API models for the admin notification badge.
"""

from pydantic import BaseModel, Field

class NotificationCountsOut(BaseModel):
    unread_messages: int = Field(..., ge=0)
    pending_testimonials: int = Field(..., ge=0)
    pending_quote_requests: int = Field(..., ge=0)
    total: int = Field(..., ge=0, description="Sum of the three counts")

    class Config:
        json_schema_extra = {
            "example": {
                "unread_messages": 2,
                "pending_testimonials": 1,
                "pending_quote_requests": 3,
                "total": 6
            }
        }
