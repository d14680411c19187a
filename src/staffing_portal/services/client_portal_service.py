"""Client self-service over the client's own job postings."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from staffing_portal.auth.decorators import requires_role
from staffing_portal.auth.models import Principal, Role
from staffing_portal.auth.utils import revoke_token
from staffing_portal.core.error_handling import InvalidStateError, NotFoundError, ValidationError
from staffing_portal.models.client_activity import ActivityType
from staffing_portal.models.job_posting import JobPosting, JobPostingStatus
from staffing_portal.repositories.client import ClientRepository
from staffing_portal.repositories.client_activity import ClientActivityRepository
from staffing_portal.repositories.job_posting import JobPostingRepository
from staffing_portal.schemas.job_posting import ClientJobPostingCreate, JobPostingUpdate
from staffing_portal.schemas.validation import validate_payload

logger = structlog.get_logger(__name__)


class ClientPortalService:
    """Operations available to a verified client.

    A posting owned by another client is reported as not found, the same as
    a posting that does not exist.
    """

    def __init__(
        self,
        db: Session,
        principal: Optional[Principal],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ):
        self.db = db
        self.principal = principal
        self.ip_address = ip_address
        self.user_agent = user_agent
        self.clients = ClientRepository()
        self.activities = ClientActivityRepository()
        self.job_postings = JobPostingRepository()

    @requires_role(Role.CLIENT)
    def list_own_postings(self) -> List[JobPosting]:
        return self.job_postings.list_for_owner(self.db, self.principal.subject_id)

    @requires_role(Role.CLIENT)
    def create_posting(self, data: Dict[str, Any]) -> JobPosting:
        """Create a posting owned by the caller.

        Company name comes from the client record; contact details default to
        the client's own.

        Raises:
            ValidationError: If a field is malformed, or no phone is given and
                the client has none on file
        """
        fields = validate_payload(ClientJobPostingCreate, data)
        client = self.clients.get_by_id(self.db, self.principal.subject_id)
        if client is None:
            raise NotFoundError("Client not found")

        values = fields.model_dump()
        values["contact_name"] = values.get("contact_name") or client.contact_name
        values["email"] = values.get("email") or client.email
        values["phone"] = values.get("phone") or client.phone
        if not values["phone"]:
            raise ValidationError(errors=[{"field": "phone", "message": "Phone is required"}])

        try:
            posting = self.job_postings.add(
                self.db,
                **values,
                company_name=client.company_name,
                is_existing_client=True,
                owner_client_id=client.id,
                status=JobPostingStatus.NEW.value
            )
            self._record(ActivityType.JOB_POSTING_CREATED, posting.id, job_title=posting.job_title)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Client created job posting", client_id=str(client.id), job_posting_id=str(posting.id))
        return posting

    @requires_role(Role.CLIENT)
    def update_posting(self, job_id: UUID, data: Dict[str, Any]) -> JobPosting:
        """Edit the caller's own posting.

        Only content fields are editable; status, owner and the existing-client
        flag are not.

        Raises:
            ValidationError: If a field is malformed or not editable
            NotFoundError: If the posting is missing or owned by someone else
            InvalidStateError: If the posting is closed
        """
        fields = validate_payload(JobPostingUpdate, data)
        posting = self._get_editable(job_id)
        changes = fields.model_dump(exclude_unset=True)

        try:
            self.job_postings.update(self.db, posting, **changes)
            posting.touch()
            self._record(ActivityType.JOB_POSTING_UPDATED, posting.id, fields=sorted(changes))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Client updated job posting",
            client_id=str(self.principal.subject_id),
            job_posting_id=str(job_id),
            fields=sorted(changes)
        )
        return posting

    @requires_role(Role.CLIENT)
    def delete_posting(self, job_id: UUID) -> None:
        """Hard-delete the caller's own posting.

        Raises:
            NotFoundError: If the posting is missing or owned by someone else
            InvalidStateError: If the posting is closed
        """
        posting = self._get_editable(job_id)
        job_title = posting.job_title

        try:
            self.job_postings.delete(self.db, posting)
            self._record(ActivityType.JOB_POSTING_DELETED, job_id, job_title=job_title)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Client deleted job posting", client_id=str(self.principal.subject_id), job_posting_id=str(job_id))

    @requires_role(Role.CLIENT)
    def logout(self) -> None:
        """End the caller's session and log it."""
        try:
            self._record(ActivityType.LOGOUT)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if self.principal.token_id:
            revoke_token(self.db, self.principal.token_id, self.principal.expires_at)

        logger.info("Client logged out", client_id=str(self.principal.subject_id))

    def _get_editable(self, job_id: UUID) -> JobPosting:
        posting = self.job_postings.get_owned(self.db, job_id, self.principal.subject_id)
        if posting is None:
            logger.warning(
                "Job posting not found for client",
                client_id=str(self.principal.subject_id),
                job_posting_id=str(job_id)
            )
            raise NotFoundError("Job posting not found")

        if posting.is_closed:
            raise InvalidStateError("Closed job postings can no longer be changed")

        return posting

    def _record(self, activity_type: ActivityType, job_id: Optional[UUID] = None, **details: Any) -> None:
        if job_id is not None:
            details["job_posting_id"] = str(job_id)
        self.activities.record(
            self.db,
            self.principal.subject_id,
            activity_type,
            ip_address=self.ip_address,
            user_agent=self.user_agent,
            details=details
        )
