"""Authentication models and schemas."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field
from sqlalchemy import Column, String, DateTime, Boolean

from staffing_portal.core.base import Base
from staffing_portal.core.custom_types import GUID


class Role(str, Enum):
    """Roles a bearer token can carry."""
    ADMIN = "admin"
    CLIENT = "client"


class AdminUser(Base):
    """Staff account allowed into the admin dashboard."""

    __tablename__ = "admin_users"

    id = Column(GUID(), primary_key=True, default=uuid4)
    username = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id}, username='{self.username}')>"


class RevokedToken(Base):
    """Token id that was logged out before its natural expiry."""

    __tablename__ = "revoked_tokens"

    jti = Column(String(64), primary_key=True)
    revoked_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=True)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved once per request."""
    role: Role
    subject_id: UUID
    token_id: Optional[str] = None
    name: Optional[str] = None
    expires_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_client(self) -> bool:
        return self.role == Role.CLIENT


# Pydantic models for API
class AdminLoginRequest(BaseModel):
    """Admin login payload."""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class ClientLoginRequest(BaseModel):
    """Client login payload."""
    access_code: str = Field(..., min_length=1, max_length=64)


class AdminUserResponse(BaseModel):
    """Admin user response schema."""
    id: UUID
    username: str

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Token response schema."""
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenData(BaseModel):
    """Token data schema for JWT payload."""
    subject_id: Optional[UUID] = None
    role: Optional[Role] = None
    jti: Optional[str] = None
    name: Optional[str] = None
    expires_at: Optional[datetime] = None
