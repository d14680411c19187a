"""Code request model for prospective clients asking for an access code."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from staffing_portal.core.base import Base
from staffing_portal.core.custom_types import GUID


class CodeRequestStatus(str, Enum):
    """Code request lifecycle states."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CodeRequest(Base):
    """A request for an access code awaiting admin review.

    ``pending`` is the only initial state; ``approved`` and ``rejected`` are
    terminal. Rows are kept forever for audit.
    """

    __tablename__ = "code_requests"

    id = Column(GUID(), primary_key=True, default=uuid4)
    company_name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    reason = Column(Text, nullable=True)
    status = Column(String(20), default=CodeRequestStatus.PENDING.value, nullable=False, index=True)
    rejection_reason = Column(Text, nullable=True)
    reviewed_by = Column(GUID(), ForeignKey("admin_users.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    client_id = Column(GUID(), ForeignKey("clients.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    client = relationship("Client")

    def __repr__(self) -> str:
        return f"<CodeRequest(id={self.id}, company_name='{self.company_name}', status='{self.status}')>"

    @property
    def is_pending(self) -> bool:
        return self.status == CodeRequestStatus.PENDING.value
