"""Pydantic schemas for data validation and serialization."""

from .client import ClientCreate, ClientUpdate, ClientResponse, VerifyClientResponse
from .code_request import CodeRequestCreate, CodeRequestResponse, CodeRequestStatusResponse
from .job_posting import JobPostingCreate, JobPostingUpdate, JobPostingResponse

__all__ = [
    "ClientCreate", "ClientUpdate", "ClientResponse", "VerifyClientResponse",
    "CodeRequestCreate", "CodeRequestResponse", "CodeRequestStatusResponse",
    "JobPostingCreate", "JobPostingUpdate", "JobPostingResponse",
]
