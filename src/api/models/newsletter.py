"""
API models for newsletter subscriptions.
"""

from pydantic import BaseModel, EmailStr, validator
from typing import Optional
from datetime import datetime

from .common import APIResponse, lowercase_email

class SubscribeRequest(BaseModel):
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @validator('email')
    def validate_email(cls, v):
        return lowercase_email(v)

class UnsubscribeRequest(BaseModel):
    email: EmailStr

    @validator('email')
    def validate_email(cls, v):
        return lowercase_email(v)

class SubscriberOut(BaseModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    subscribed: bool
    created_at: datetime

    class Config:
        from_attributes = True

class SubscriptionResponse(APIResponse):
    subscriber: Optional[SubscriberOut] = None
