"""FastAPI dependencies resolving the current principal."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import structlog

from staffing_portal.core.database import get_db
from staffing_portal.core.error_handling import AuthenticationError
from staffing_portal.models.client import Client
from .decorators import require_admin, require_client
from .models import Principal, Role, TokenData
from .utils import verify_token, is_token_revoked, get_admin_by_id

logger = structlog.get_logger(__name__)

# Security scheme - optional so public endpoints can share it
security = HTTPBearer(auto_error=False)


def _resolve_principal(db: Session, token_data: TokenData) -> Optional[Principal]:
    """Map verified token data onto a live principal."""
    if is_token_revoked(db, token_data.jti):
        logger.warning("Revoked token presented", jti=token_data.jti)
        return None

    if token_data.role == Role.ADMIN:
        user = get_admin_by_id(db, token_data.subject_id)
        if user is None or not user.is_admin:
            logger.warning("Admin not found or inactive", subject_id=str(token_data.subject_id))
            return None
        return Principal(
            role=Role.ADMIN,
            subject_id=user.id,
            token_id=token_data.jti,
            name=user.username,
            expires_at=token_data.expires_at
        )

    client = db.query(Client).filter(Client.id == token_data.subject_id).first()
    if client is None or not client.is_active:
        # Deactivated clients lose their sessions immediately
        logger.warning("Client not found or inactive", subject_id=str(token_data.subject_id))
        return None
    return Principal(
        role=Role.CLIENT,
        subject_id=client.id,
        token_id=token_data.jti,
        name=client.company_name,
        expires_at=token_data.expires_at
    )


def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[Principal]:
    """Get the current principal if authenticated, None otherwise.

    Args:
        credentials: HTTP Bearer credentials (optional)
        db: Database session

    Returns:
        Current principal if authenticated, None otherwise
    """
    if not credentials:
        return None

    token_data = verify_token(credentials.credentials)
    if token_data is None:
        return None

    return _resolve_principal(db, token_data)


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal)
) -> Principal:
    """Get the current principal or fail with 401."""
    if principal is None:
        raise AuthenticationError("Could not validate credentials")
    return principal


def get_admin_principal(
    principal: Optional[Principal] = Depends(get_optional_principal)
) -> Principal:
    """Require an authenticated admin."""
    return require_admin(principal)


def get_client_principal(
    principal: Optional[Principal] = Depends(get_optional_principal)
) -> Principal:
    """Require an authenticated client."""
    return require_client(principal)
