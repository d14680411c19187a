"""Repository pattern implementations for data access."""

from .base import BaseRepository
from .client import ClientRepository
from .client_activity import ClientActivityRepository
from .code_request import CodeRequestRepository
from .job_posting import JobPostingRepository

__all__ = [
    "BaseRepository",
    "ClientRepository",
    "ClientActivityRepository",
    "CodeRequestRepository",
    "JobPostingRepository",
]
