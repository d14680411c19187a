"""Business logic services."""

from .admin_service import AdminService
from .client_portal_service import ClientPortalService
from .intake_service import IntakeService
from .notification_service import NotificationService
from .verification_service import VerificationService, VerificationResult

__all__ = [
    "AdminService",
    "ClientPortalService",
    "IntakeService",
    "NotificationService",
    "VerificationService",
    "VerificationResult",
]
