"""Access code verification."""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session
import structlog

from staffing_portal.core.error_handling import (
    AccessCodeExpiredError, NotFoundError, ValidationError
)
from staffing_portal.core.logging import mask_access_code
from staffing_portal.models.client import Client
from staffing_portal.models.client_activity import ActivityType
from staffing_portal.repositories.client import ClientRepository
from staffing_portal.repositories.client_activity import ClientActivityRepository
from staffing_portal.services.access_codes import normalize_access_code

logger = structlog.get_logger(__name__)


@dataclass
class VerificationResult:
    """Outcome of a successful verification."""
    success: bool
    client: Client


class VerificationService:
    """Resolves access codes to active clients and records the login."""

    clients = ClientRepository()
    activities = ClientActivityRepository()

    @staticmethod
    def verify(
        db: Session,
        access_code: Optional[str],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> VerificationResult:
        """Verify an access code.

        A failed verification writes nothing; it only leaves a warning in the
        log with a masked code prefix.

        Args:
            db: Database session
            access_code: Code as entered by the client
            ip_address: Caller IP for the activity log
            user_agent: Caller user agent for the activity log

        Returns:
            VerificationResult carrying the client

        Raises:
            ValidationError: If the code is empty
            NotFoundError: If no active client holds the code
            AccessCodeExpiredError: If the code is past its expiry
        """
        code = normalize_access_code(access_code or "")
        if not code:
            raise ValidationError("Access code is required", field="access_code")

        client = VerificationService.clients.get_active_by_access_code(db, code)
        if client is None:
            logger.warning(
                "Access code verification failed",
                reason="unknown_or_inactive",
                code_prefix=mask_access_code(code),
                ip_address=ip_address
            )
            raise NotFoundError("Invalid access code")

        if client.is_code_expired:
            logger.warning(
                "Access code verification failed",
                reason="expired",
                client_id=str(client.id),
                code_prefix=mask_access_code(code),
                ip_address=ip_address
            )
            raise AccessCodeExpiredError("Access code has expired. Please contact us for a new code.")

        try:
            client.record_login()
            VerificationService.activities.record(
                db,
                client.id,
                ActivityType.LOGIN,
                ip_address=ip_address,
                user_agent=user_agent
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            "Client verified",
            client_id=str(client.id),
            login_count=client.login_count,
            ip_address=ip_address
        )
        return VerificationResult(success=True, client=client)
