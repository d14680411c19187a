"""Pydantic schemas for job postings."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, EmailStr, field_validator

from staffing_portal.models.job_posting import EmploymentType, JobPostingStatus


class JobPostingFields(BaseModel):
    """Fields an employer fills in."""

    class Config:
        use_enum_values = True

    contact_name: str = Field(..., min_length=1, max_length=255)
    company_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=50)
    job_title: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    employment_type: EmploymentType
    job_description: Optional[str] = Field(None, max_length=10000)
    salary_range: Optional[str] = Field(None, max_length=100)
    special_requirements: Optional[str] = Field(None, max_length=5000)
    anticipated_start_date: Optional[date] = None

    @field_validator('contact_name', 'company_name', 'job_title', 'location', 'phone')
    @classmethod
    def validate_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Field cannot be blank')
        return v


class JobPostingCreate(JobPostingFields):
    """Public job posting form.

    ``website`` is a hidden honeypot field; people never see it, bots fill it.
    """

    access_code: Optional[str] = Field(None, max_length=64)
    website: Optional[str] = Field(None, max_length=500)


class ClientJobPostingCreate(BaseModel):
    """Job posting created from the client portal; company comes from the client record."""

    class Config:
        use_enum_values = True

    contact_name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=7, max_length=50)
    job_title: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    employment_type: EmploymentType
    job_description: Optional[str] = Field(None, max_length=10000)
    salary_range: Optional[str] = Field(None, max_length=100)
    special_requirements: Optional[str] = Field(None, max_length=5000)
    anticipated_start_date: Optional[date] = None


class JobPostingUpdate(BaseModel):
    """Fields a client may edit on their own posting."""

    contact_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=7, max_length=50)
    job_title: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    employment_type: Optional[EmploymentType] = None
    job_description: Optional[str] = Field(None, max_length=10000)
    salary_range: Optional[str] = Field(None, max_length=100)
    special_requirements: Optional[str] = Field(None, max_length=5000)
    anticipated_start_date: Optional[date] = None

    class Config:
        extra = "forbid"
        use_enum_values = True

    @field_validator('contact_name', 'phone', 'job_title', 'location')
    @classmethod
    def validate_not_blank(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        v = v.strip()
        if not v:
            raise ValueError('Field cannot be blank')
        return v

    @field_validator('email', 'employment_type')
    @classmethod
    def validate_not_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class JobPostingStatusUpdate(BaseModel):
    """Admin status change payload."""
    status: JobPostingStatus

    class Config:
        use_enum_values = True


class JobPostingResponse(BaseModel):
    """Schema for job posting response."""

    id: UUID
    contact_name: str
    company_name: str
    email: str
    phone: str
    job_title: str
    location: str
    employment_type: str
    is_existing_client: bool
    job_description: Optional[str] = None
    salary_range: Optional[str] = None
    special_requirements: Optional[str] = None
    anticipated_start_date: Optional[date] = None
    status: str
    owner_client_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
