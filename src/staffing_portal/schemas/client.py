"""Pydantic schemas for Client and access code verification."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, EmailStr, field_validator


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError('Field cannot be blank')
    return v


class ClientBase(BaseModel):
    """Base client schema with common fields."""

    company_name: str = Field(..., min_length=1, max_length=255, description="Client organization name")
    contact_name: str = Field(..., min_length=1, max_length=255, description="Primary contact")
    email: EmailStr = Field(..., description="Primary contact email")
    phone: Optional[str] = Field(None, max_length=50)

    @field_validator('company_name', 'contact_name')
    @classmethod
    def validate_not_blank(cls, v):
        return _strip_required(v)


class ClientCreate(ClientBase):
    """Schema for creating a new client."""
    code_expires_at: Optional[datetime] = None


class ClientUpdate(BaseModel):
    """Schema for updating a client. Access codes and counters are not editable."""

    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    code_expires_at: Optional[datetime] = None

    @field_validator('company_name', 'contact_name', 'email')
    @classmethod
    def validate_not_blank(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return _strip_required(v)


class ClientResponse(BaseModel):
    """Schema for client response in the admin dashboard."""

    id: UUID
    company_name: str
    contact_name: str
    email: str
    phone: Optional[str] = None
    access_code: str
    is_active: bool
    login_count: int
    last_login_at: Optional[datetime] = None
    code_expires_at: Optional[datetime] = None
    is_code_expired: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientCreatedResponse(BaseModel):
    """Response for a freshly minted client."""
    success: bool = True
    client: ClientResponse
    access_code: str


class ClientActivityResponse(BaseModel):
    """Schema for a client activity entry."""

    id: UUID
    client_id: UUID
    activity_type: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ClientDetailResponse(BaseModel):
    """Client with its activity history."""
    client: ClientResponse
    activities: List[ClientActivityResponse]


class BulkGenerateRequest(BaseModel):
    """Entries are validated one by one so a bad row does not sink the batch."""
    clients: List[Dict[str, Any]] = Field(..., description="Client entries to create")


class BulkGenerateEntryResult(BaseModel):
    """Outcome for a single bulk entry."""
    index: int
    success: bool
    company_name: Optional[str] = None
    client: Optional[ClientResponse] = None
    access_code: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None


class BulkGenerateResponse(BaseModel):
    """Per-entry results for a bulk generation run."""
    success: bool = True
    created: int
    failed: int
    results: List[BulkGenerateEntryResult]


class VerifyClientRequest(BaseModel):
    """Access code verification payload."""
    access_code: str = Field(..., max_length=64)


class VerifiedClient(BaseModel):
    """Auto-fill data returned for a verified access code."""

    id: UUID
    company_name: str
    contact_name: str
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class VerifyClientResponse(BaseModel):
    """Successful verification result."""
    success: bool = True
    client: VerifiedClient
