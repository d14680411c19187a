"""Admin workflow: code request review, client management, job posting status."""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from staffing_portal.auth.decorators import requires_role
from staffing_portal.auth.models import Principal, Role
from staffing_portal.core.config import settings
from staffing_portal.core.error_handling import (
    InvalidStateError, NotFoundError, PortalError, ValidationError
)
from staffing_portal.core.logging import performance_logger
from staffing_portal.models.client import Client
from staffing_portal.models.client_activity import ClientActivity
from staffing_portal.models.code_request import CodeRequest, CodeRequestStatus
from staffing_portal.models.job_posting import JobPosting, JOB_POSTING_STATUSES
from staffing_portal.repositories.client import ClientRepository
from staffing_portal.repositories.client_activity import ClientActivityRepository
from staffing_portal.repositories.code_request import CodeRequestRepository
from staffing_portal.repositories.job_posting import JobPostingRepository
from staffing_portal.schemas.client import ClientCreate, ClientUpdate
from staffing_portal.schemas.validation import validate_payload
from .access_codes import issue_with_unique_code

logger = structlog.get_logger(__name__)


class AdminService:
    """Operations available to authenticated admins.

    Every public method checks the principal's role before touching the
    database.
    """

    def __init__(self, db: Session, principal: Optional[Principal]):
        self.db = db
        self.principal = principal
        self.clients = ClientRepository()
        self.activities = ClientActivityRepository()
        self.code_requests = CodeRequestRepository()
        self.job_postings = JobPostingRepository()

    # Code requests

    @requires_role(Role.ADMIN)
    def list_code_requests(self, status: Optional[str] = None) -> List[CodeRequest]:
        if status is not None and status not in [s.value for s in CodeRequestStatus]:
            raise ValidationError(f"Invalid status: {status}", field="status")
        return self.code_requests.list_requests(self.db, status)

    @requires_role(Role.ADMIN)
    def approve_code_request(self, request_id: UUID) -> Client:
        """Approve a pending request and mint its client in one transaction.

        The status flip is a conditional UPDATE on ``status = 'pending'``, so
        of two concurrent approvals exactly one claims the row.

        Args:
            request_id: Code request UUID

        Returns:
            The new active client, carrying its access code

        Raises:
            NotFoundError: If the request does not exist
            InvalidStateError: If the request is no longer pending
        """
        request = self._get_code_request(request_id)
        if not request.is_pending:
            raise InvalidStateError(f"Code request is already {request.status}")

        def approve(access_code: str) -> Client:
            if not self.code_requests.claim_pending(
                self.db, request_id, CodeRequestStatus.APPROVED, reviewed_by=self.principal.subject_id
            ):
                raise InvalidStateError("Code request has already been reviewed")

            client = self.clients.add(
                self.db,
                company_name=request.company_name,
                contact_name=request.contact_name,
                email=request.email,
                phone=request.phone,
                access_code=access_code,
                is_active=True
            )
            request.client_id = client.id
            self.db.commit()
            return client

        try:
            client = issue_with_unique_code(self.db, approve, operation="approve_code_request")
        except InvalidStateError:
            self.db.refresh(request)
            logger.warning(
                "Code request approval rejected",
                code_request_id=str(request_id),
                status=request.status,
                admin_id=str(self.principal.subject_id)
            )
            raise

        self.db.refresh(request)
        logger.info(
            "Code request approved",
            code_request_id=str(request_id),
            client_id=str(client.id),
            admin_id=str(self.principal.subject_id)
        )
        return client

    @requires_role(Role.ADMIN)
    def reject_code_request(self, request_id: UUID, reason: Optional[str]) -> CodeRequest:
        """Reject a pending request.

        Raises:
            ValidationError: If no reason is given
            NotFoundError: If the request does not exist
            InvalidStateError: If the request is no longer pending
        """
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("Rejection reason is required", field="reason")

        request = self._get_code_request(request_id)
        if not request.is_pending:
            raise InvalidStateError(f"Code request is already {request.status}")

        claimed = self.code_requests.claim_pending(
            self.db,
            request_id,
            CodeRequestStatus.REJECTED,
            reviewed_by=self.principal.subject_id,
            rejection_reason=reason
        )
        if not claimed:
            self.db.rollback()
            self.db.refresh(request)
            raise InvalidStateError(f"Code request is already {request.status}")

        self.db.commit()
        self.db.refresh(request)

        logger.info(
            "Code request rejected",
            code_request_id=str(request_id),
            admin_id=str(self.principal.subject_id)
        )
        return request

    def _get_code_request(self, request_id: UUID) -> CodeRequest:
        request = self.code_requests.get_by_id(self.db, request_id)
        if request is None:
            raise NotFoundError("Code request not found")
        return request

    # Clients

    @requires_role(Role.ADMIN)
    def list_clients(self, include_inactive: bool = False) -> List[Client]:
        return self.clients.list_clients(self.db, include_inactive=include_inactive)

    @requires_role(Role.ADMIN)
    def get_client_detail(self, client_id: UUID) -> Dict[str, Any]:
        """Get a client with its activity history, newest first."""
        client = self._get_client(client_id)
        activities: List[ClientActivity] = self.activities.get_for_client(self.db, client.id)
        return {"client": client, "activities": activities}

    @requires_role(Role.ADMIN)
    def create_client(self, data: Dict[str, Any]) -> Client:
        """Create an active client with a freshly generated access code.

        Args:
            data: company_name, contact_name, email, phone and optional code_expires_at

        Raises:
            ValidationError: If a required field is missing or malformed
            ConflictError: If no unique code could be stored
        """
        fields = validate_payload(ClientCreate, data, message="Invalid client data")

        def create(access_code: str) -> Client:
            client = self.clients.add(
                self.db,
                **fields.model_dump(),
                access_code=access_code,
                is_active=True
            )
            self.db.commit()
            return client

        client = issue_with_unique_code(self.db, create, operation="create_client")

        logger.info(
            "Client created",
            client_id=str(client.id),
            company_name=client.company_name,
            admin_id=str(self.principal.subject_id)
        )
        return client

    @requires_role(Role.ADMIN)
    def bulk_generate_clients(self, entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Create one client per entry; each entry succeeds or fails on its own.

        Codes minted here expire after ``bulk_code_ttl_days``.

        Returns:
            One result per entry: index, success and either client/access_code or error

        Raises:
            ValidationError: If ``entries`` is empty
        """
        if not entries:
            raise ValidationError("At least one client entry is required", field="clients")

        expires_at = datetime.utcnow() + timedelta(days=settings.bulk_code_ttl_days)
        results = []

        with performance_logger.log_operation_time("bulk_generate_clients", entries=len(entries)):
            for index, entry in enumerate(entries):
                if not isinstance(entry, dict):
                    results.append({"index": index, "success": False, "error": "validation_error",
                                    "message": "Entry must be an object"})
                    continue

                payload = dict(entry)
                payload.setdefault("code_expires_at", expires_at)
                try:
                    client = self.create_client(payload)
                except PortalError as e:
                    company_name = entry.get("company_name")
                    results.append({
                        "index": index,
                        "success": False,
                        "company_name": company_name if isinstance(company_name, str) else None,
                        "error": e.error_code,
                        "message": e.message,
                    })
                    continue

                results.append({
                    "index": index,
                    "success": True,
                    "company_name": client.company_name,
                    "client": client,
                    "access_code": client.access_code,
                })

        created = sum(1 for r in results if r["success"])
        logger.info(
            "Bulk client generation finished",
            requested=len(entries),
            created=created,
            failed=len(entries) - created,
            admin_id=str(self.principal.subject_id)
        )
        return results

    @requires_role(Role.ADMIN)
    def update_client(self, client_id: UUID, data: Dict[str, Any]) -> Client:
        """Update contact details or code expiry of a client.

        Raises:
            ValidationError: If a field is malformed
            NotFoundError: If the client does not exist
        """
        fields = validate_payload(ClientUpdate, data, message="Invalid client data")
        client = self._get_client(client_id)

        try:
            self.clients.update(self.db, client, **fields.model_dump(exclude_unset=True))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Client updated", client_id=str(client_id), admin_id=str(self.principal.subject_id))
        return client

    @requires_role(Role.ADMIN)
    def deactivate_client(self, client_id: UUID) -> Client:
        """Soft-delete a client. Its access code stops working immediately.

        Job postings owned by the client are left as they are.

        Raises:
            NotFoundError: If the client does not exist
        """
        client = self._get_client(client_id)

        try:
            client.is_active = False
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Client deactivated", client_id=str(client_id), admin_id=str(self.principal.subject_id))
        return client

    def _get_client(self, client_id: UUID) -> Client:
        client = self.clients.get_by_id(self.db, client_id)
        if client is None:
            raise NotFoundError("Client not found")
        return client

    # Job postings

    @requires_role(Role.ADMIN)
    def list_job_postings(self, status: Optional[str] = None) -> List[JobPosting]:
        if status is not None and status not in JOB_POSTING_STATUSES:
            raise ValidationError(f"Invalid status: {status}", field="status")
        return self.job_postings.list_postings(self.db, status)

    @requires_role(Role.ADMIN)
    def get_job_posting(self, job_id: UUID) -> JobPosting:
        posting = self.job_postings.get_by_id(self.db, job_id)
        if posting is None:
            raise NotFoundError("Job posting not found")
        return posting

    @requires_role(Role.ADMIN)
    def set_job_posting_status(self, job_id: UUID, new_status: str) -> JobPosting:
        """Move a posting to any of the five statuses.

        Admin moves are unrestricted, including reopening a closed posting.

        Raises:
            ValidationError: If ``new_status`` is not a known status
            NotFoundError: If the posting does not exist
        """
        if new_status not in JOB_POSTING_STATUSES:
            raise ValidationError(
                f"Invalid status: {new_status}. Must be one of {JOB_POSTING_STATUSES}",
                field="status"
            )

        posting = self.get_job_posting(job_id)
        old_status = posting.status

        try:
            posting.status = new_status
            posting.touch()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Job posting status changed",
            job_posting_id=str(job_id),
            old_status=old_status,
            new_status=new_status,
            admin_id=str(self.principal.subject_id)
        )
        return posting
