"""
API models for subcontractor and vendor applications.

Subcontractors list the trades they cover as `service_types`, vendors the goods
they supply as `supply_types`; both are stored as the application's trades.
"""

from pydantic import BaseModel, EmailStr, Field, validator
from typing import List, Optional
from datetime import datetime

from .common import lowercase_email
from src.content.types import APPLICATION_STATUSES

class ApplicationBase(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    contact_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip: str = Field(..., min_length=1)
    service_description: str = Field(..., min_length=10)
    years_in_business: str = Field(..., min_length=1)
    how_did_you_hear: Optional[str] = None

    @validator('email')
    def validate_email(cls, v):
        return lowercase_email(v)

    def trades(self) -> List[str]:
        return []

class SubcontractorApply(ApplicationBase):
    service_types: List[str] = Field(..., min_length=1)
    insurance: bool = False
    bondable: bool = False
    licenses: Optional[str] = None
    references: Optional[str] = None

    def trades(self) -> List[str]:
        return self.service_types

class VendorApply(ApplicationBase):
    supply_types: List[str] = Field(..., min_length=1)
    website: Optional[str] = None

    def trades(self) -> List[str]:
        return self.supply_types

class ApplicationStatusUpdate(BaseModel):
    status: str = Field(..., description=f"One of: {', '.join(APPLICATION_STATUSES)}")

class ApplicationNotesUpdate(BaseModel):
    notes: Optional[str] = None

class ApplicationSubmitResponse(BaseModel):
    message: str
    id: int

class ApplicationOut(BaseModel):
    id: int
    kind: str
    company_name: str
    contact_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip: str
    service_description: str
    years_in_business: str
    trades: List[str]
    website: Optional[str] = None
    insurance: bool
    bondable: bool
    licenses: Optional[str] = None
    references: Optional[str] = None
    how_did_you_hear: Optional[str] = None
    status: str
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
