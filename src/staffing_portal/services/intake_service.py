"""Public job posting and code request intake."""

from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from staffing_portal.core.error_handling import NotFoundError, PortalError, ValidationError
from staffing_portal.core.logging import error_logger, mask_access_code
from staffing_portal.models.code_request import CodeRequest, CodeRequestStatus
from staffing_portal.models.job_posting import JobPosting, JobPostingStatus
from staffing_portal.repositories.code_request import CodeRequestRepository
from staffing_portal.repositories.job_posting import JobPostingRepository
from staffing_portal.schemas.code_request import CodeRequestCreate
from staffing_portal.schemas.job_posting import JobPostingFields
from staffing_portal.schemas.validation import INVALID_FORM_MESSAGE, validate_payload
from .notification_service import NotificationService
from .verification_service import VerificationService

logger = structlog.get_logger(__name__)


class IntakeService:
    """Accepts anonymous submissions from the public site."""

    def __init__(self, db: Session, notifier: Optional[NotificationService] = None):
        self.db = db
        self.notifier = notifier or NotificationService()
        self.job_postings = JobPostingRepository()
        self.code_requests = CodeRequestRepository()

    def submit_job_posting(
        self,
        data: Dict[str, Any],
        access_code: Optional[str] = None,
        honeypot: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> JobPosting:
        """Create a job posting from the public form.

        A valid access code links the posting to its client. An invalid or
        expired code does not block the submission; the posting is stored
        unlinked.

        Raises:
            ValidationError: If the honeypot is filled or the form is invalid
        """
        if honeypot:
            error_logger.log_security_event("honeypot_triggered", ip_address=ip_address, user_agent=user_agent)
            raise ValidationError(INVALID_FORM_MESSAGE)

        fields = validate_payload(JobPostingFields, data)

        owner_client_id = None
        code = access_code.strip() if isinstance(access_code, str) else ""
        if code:
            try:
                result = VerificationService.verify(self.db, code, ip_address=ip_address, user_agent=user_agent)
                owner_client_id = result.client.id
            except PortalError as e:
                logger.info(
                    "Job posting access code not accepted, storing unlinked",
                    code_prefix=mask_access_code(code),
                    reason=e.error_code
                )

        try:
            posting = self.job_postings.add(
                self.db,
                **fields.model_dump(),
                is_existing_client=owner_client_id is not None,
                owner_client_id=owner_client_id,
                status=JobPostingStatus.NEW.value
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Job posting submitted",
            job_posting_id=str(posting.id),
            company_name=posting.company_name,
            is_existing_client=posting.is_existing_client
        )

        self.notifier.notify_job_posting_received(posting)
        return posting

    def submit_code_request(self, data: Dict[str, Any]) -> CodeRequest:
        """Queue a request for an access code.

        Raises:
            ValidationError: If the form is invalid
        """
        fields = validate_payload(CodeRequestCreate, data)

        try:
            request = self.code_requests.add(
                self.db,
                **fields.model_dump(),
                status=CodeRequestStatus.PENDING.value
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Code request submitted", code_request_id=str(request.id), company_name=request.company_name)
        return request

    def get_code_request_status(self, request_id: UUID) -> CodeRequest:
        """Look up a code request for its submitter.

        Raises:
            NotFoundError: If no such request exists
        """
        request = self.code_requests.get_by_id(self.db, request_id)
        if request is None:
            raise NotFoundError("Code request not found")
        return request
