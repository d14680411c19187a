"""Pydantic schemas for code requests."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, EmailStr, field_validator


class CodeRequestCreate(BaseModel):
    """Public request for an access code."""

    company_name: str = Field(..., min_length=1, max_length=255)
    contact_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    reason: Optional[str] = Field(None, max_length=2000)

    @field_validator('company_name', 'contact_name')
    @classmethod
    def validate_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Field cannot be blank')
        return v


class CodeRequestResponse(BaseModel):
    """Full code request as seen by admins."""

    id: UUID
    company_name: str
    contact_name: str
    email: str
    phone: Optional[str] = None
    reason: Optional[str] = None
    status: str
    rejection_reason: Optional[str] = None
    reviewed_by: Optional[UUID] = None
    reviewed_at: Optional[datetime] = None
    client_id: Optional[UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CodeRequestStatusResponse(BaseModel):
    """Public status view. Leaves out contact details and review notes."""

    id: UUID
    status: str
    company_name: str
    created_at: datetime

    class Config:
        from_attributes = True


class CodeRequestRejection(BaseModel):
    """Admin rejection payload."""
    reason: str = Field(..., max_length=2000)


class SubmissionResponse(BaseModel):
    """Acknowledgement for a public submission."""
    success: bool = True
    id: UUID
    message: Optional[str] = None
