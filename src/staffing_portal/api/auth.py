"""Admin and client session endpoints."""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import structlog

from staffing_portal.auth.dependencies import (
    get_admin_principal, get_client_principal, get_optional_principal
)
from staffing_portal.auth.models import (
    AdminLoginRequest, AdminUserResponse, ClientLoginRequest, Principal, Role, Token
)
from staffing_portal.auth.utils import (
    authenticate_admin, create_access_token, get_admin_by_id, revoke_token
)
from staffing_portal.core.config import settings
from staffing_portal.core.database import get_db
from staffing_portal.core.error_handling import AuthenticationError
from staffing_portal.core.logging import error_logger, performance_logger
from staffing_portal.repositories.client import ClientRepository
from staffing_portal.schemas.client import VerifiedClient
from staffing_portal.services.client_portal_service import ClientPortalService
from staffing_portal.services.verification_service import VerificationService
from .utils import client_ip, user_agent

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _issue_token(subject_id, role: Role, name: Optional[str]) -> Token:
    expires = timedelta(minutes=settings.access_token_expire_minutes)
    return Token(
        access_token=create_access_token(subject_id, role, name=name, expires_delta=expires),
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.post("/admin/login", response_model=Token)
def admin_login(
    request: Request,
    credentials: AdminLoginRequest,
    db: Session = Depends(get_db)
):
    """Authenticate an admin and return a bearer token."""
    with performance_logger.log_operation_time("admin_login"):
        user = authenticate_admin(db, credentials.username, credentials.password)

        if not user:
            error_logger.log_security_event(
                "admin_login_failed",
                ip_address=client_ip(request),
                user_agent=user_agent(request),
                details={"username": credentials.username}
            )
            raise AuthenticationError("Invalid credentials")

        logger.info("Admin logged in", user_id=str(user.id), username=user.username)
        return _issue_token(user.id, Role.ADMIN, user.username)


@router.post("/admin/logout")
def admin_logout(
    principal: Principal = Depends(get_admin_principal),
    db: Session = Depends(get_db)
):
    """Revoke the admin's bearer token."""
    if principal.token_id:
        revoke_token(db, principal.token_id, principal.expires_at)
    logger.info("Admin logged out", user_id=str(principal.subject_id))
    return {"success": True}


@router.get("/admin/me")
def admin_me(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db)
):
    """Report whether the caller holds an admin session."""
    if principal is None or not principal.is_admin:
        return {"is_authenticated": False}

    user = get_admin_by_id(db, principal.subject_id)
    return {
        "is_authenticated": True,
        "user": AdminUserResponse.model_validate(user),
    }


@router.post("/client/login")
def client_login(
    request: Request,
    payload: ClientLoginRequest,
    db: Session = Depends(get_db)
):
    """Verify an access code and open a client session."""
    with performance_logger.log_operation_time("client_login"):
        result = VerificationService.verify(
            db,
            payload.access_code,
            ip_address=client_ip(request),
            user_agent=user_agent(request)
        )
        client = result.client
        token = _issue_token(client.id, Role.CLIENT, client.company_name)

        return {
            **token.model_dump(),
            "client": VerifiedClient.model_validate(client),
        }


@router.post("/client/logout")
def client_logout(
    request: Request,
    principal: Principal = Depends(get_client_principal),
    db: Session = Depends(get_db)
):
    """Revoke the client's bearer token and record the logout."""
    service = ClientPortalService(db, principal, ip_address=client_ip(request), user_agent=user_agent(request))
    service.logout()
    return {"success": True}


@router.get("/client/me")
def client_me(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db)
):
    """Report whether the caller holds a client session."""
    if principal is None or not principal.is_client:
        return {"is_authenticated": False}

    client = ClientRepository().get_by_id(db, principal.subject_id)
    return {
        "is_authenticated": True,
        "client": VerifiedClient.model_validate(client),
    }
