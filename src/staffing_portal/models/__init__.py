"""Database models for the staffing portal."""

from .client import Client
from .client_activity import ClientActivity, ActivityType
from .code_request import CodeRequest, CodeRequestStatus
from .job_posting import JobPosting, JobPostingStatus, EmploymentType

# Import auth models so every table registers on the shared metadata
from staffing_portal.auth.models import AdminUser, RevokedToken

__all__ = [
    "Client",
    "ClientActivity",
    "ActivityType",
    "CodeRequest",
    "CodeRequestStatus",
    "JobPosting",
    "JobPostingStatus",
    "EmploymentType",
    "AdminUser",
    "RevokedToken",
]
