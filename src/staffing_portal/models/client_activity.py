"""Append-only audit trail of client actions."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from staffing_portal.core.base import Base
from staffing_portal.core.custom_types import GUID, JSONDocument


class ActivityType(str, Enum):
    """Activity types recorded for clients."""
    LOGIN = "login"
    LOGOUT = "logout"
    JOB_POSTING_CREATED = "job_posting_created"
    JOB_POSTING_UPDATED = "job_posting_updated"
    JOB_POSTING_DELETED = "job_posting_deleted"


class ClientActivity(Base):
    """Client activity log entry."""

    __tablename__ = "client_activities"

    id = Column(GUID(), primary_key=True, default=uuid4)
    client_id = Column(GUID(), ForeignKey("clients.id"), nullable=False, index=True)
    activity_type = Column(String(50), nullable=False)
    ip_address = Column(String(45), nullable=True)  # IPv4 or IPv6
    user_agent = Column(Text, nullable=True)
    details = Column(JSONDocument(), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="activities")

    def __repr__(self) -> str:
        return f"<ClientActivity(id={self.id}, client_id={self.client_id}, type='{self.activity_type}')>"
