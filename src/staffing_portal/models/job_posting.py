"""Job posting model for employer recruiting requests."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Date, ForeignKey, Boolean, Text
from sqlalchemy.orm import relationship

from staffing_portal.core.base import Base
from staffing_portal.core.custom_types import GUID


class JobPostingStatus(str, Enum):
    """Job posting lifecycle states, in the order the admin board shows them."""
    NEW = "new"
    CONTACTED = "contacted"
    CONTRACT_PENDING = "contract_pending"
    POSTED = "posted"
    CLOSED = "closed"


class EmploymentType(str, Enum):
    """Kinds of placement an employer can ask for."""
    PERMANENT = "permanent"
    TEMPORARY = "temporary"
    CONTRACT_TO_HIRE = "contract-to-hire"


JOB_POSTING_STATUSES = [s.value for s in JobPostingStatus]


class JobPosting(Base):
    """Job posting submitted through the public form or the client portal."""

    __tablename__ = "job_postings"

    id = Column(GUID(), primary_key=True, default=uuid4)
    contact_name = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    job_title = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    employment_type = Column(String(30), nullable=False)
    is_existing_client = Column(Boolean, default=False, nullable=False)
    job_description = Column(Text, nullable=True)
    salary_range = Column(String(100), nullable=True)
    special_requirements = Column(Text, nullable=True)
    anticipated_start_date = Column(Date, nullable=True)
    status = Column(String(30), default=JobPostingStatus.NEW.value, nullable=False, index=True)
    owner_client_id = Column(GUID(), ForeignKey("clients.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("Client", back_populates="job_postings")

    def __repr__(self) -> str:
        return f"<JobPosting(id={self.id}, job_title='{self.job_title}', status='{self.status}')>"

    @property
    def is_closed(self) -> bool:
        """Closed postings can no longer be edited or deleted by their owner."""
        return self.status == JobPostingStatus.CLOSED.value

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
