"""
Shared API models: error bodies, action acknowledgements and health.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime

class APIError(BaseModel):
    """Body returned when a domain error escapes a router."""
    error: str = Field(..., description="What went wrong")
    error_code: str = Field(..., description="Error class name, e.g. NotFoundError")
    details: Optional[Dict[str, Any]] = Field(None, description="Request context such as the path")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

class APIResponse(BaseModel):
    """Acknowledgement for endpoints that perform an action."""
    success: bool = Field(..., description="Whether the action went through")
    message: Optional[str] = Field(None, description="Message suitable for showing to the visitor")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

class HealthStatus(BaseModel):
    status: str = Field(..., description="healthy or degraded")
    version: str
    uptime: float = Field(..., description="Seconds since the process started")
    dependencies: Dict[str, str] = Field(..., description="Content store, file host and email state")

def lowercase_email(v):
    """EmailStr keeps the local part as typed; addresses are stored lowercased."""
    return v.lower() if v else v
