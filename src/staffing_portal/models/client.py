"""Client model for organizations holding an access code."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Boolean, Integer
from sqlalchemy.orm import relationship

from staffing_portal.core.base import Base
from staffing_portal.core.custom_types import GUID


class Client(Base):
    """Client organization identified by a unique access code.

    Clients are never hard-deleted; deactivation flips ``is_active`` so the
    activity history and any owned job postings stay intact.
    """

    __tablename__ = "clients"

    id = Column(GUID(), primary_key=True, default=uuid4)
    company_name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    access_code = Column(String(64), nullable=False, unique=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    login_count = Column(Integer, default=0, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
    code_expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    job_postings = relationship("JobPosting", back_populates="owner")
    activities = relationship(
        "ClientActivity",
        back_populates="client",
        order_by="ClientActivity.created_at.desc()",
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, company_name='{self.company_name}')>"

    @property
    def is_code_expired(self) -> bool:
        """Check if the access code is past its expiry timestamp."""
        return self.code_expires_at is not None and self.code_expires_at < datetime.utcnow()

    def record_login(self) -> None:
        """Bump the login counter and timestamp.

        The counter is incremented in SQL so concurrent logins are not lost;
        the attribute reloads on next access after flush.
        """
        self.login_count = Client.login_count + 1
        self.last_login_at = datetime.utcnow()
