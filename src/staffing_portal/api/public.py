"""Anonymous endpoints used by the public site."""

from typing import Any, Dict
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session
import structlog

from staffing_portal.core.database import get_db
from staffing_portal.core.error_handling import ValidationError
from staffing_portal.core.logging import performance_logger
from staffing_portal.schemas.client import VerifiedClient, VerifyClientRequest, VerifyClientResponse
from staffing_portal.schemas.code_request import CodeRequestStatusResponse, SubmissionResponse
from staffing_portal.schemas.validation import INVALID_FORM_MESSAGE
from staffing_portal.services.intake_service import IntakeService
from staffing_portal.services.verification_service import VerificationService
from .utils import client_ip, user_agent

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["public"])


def _form_body(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError(INVALID_FORM_MESSAGE)
    return payload


@router.post("/verify-client", response_model=VerifyClientResponse)
def verify_client(
    request: Request,
    payload: VerifyClientRequest,
    db: Session = Depends(get_db)
):
    """Verify an access code and return the client's auto-fill details."""
    with performance_logger.log_operation_time("verify_client"):
        result = VerificationService.verify(
            db,
            payload.access_code,
            ip_address=client_ip(request),
            user_agent=user_agent(request)
        )
        return VerifyClientResponse(client=VerifiedClient.model_validate(result.client))


@router.post("/job-postings", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def submit_job_posting(
    request: Request,
    payload: Any = Body(...),
    db: Session = Depends(get_db)
):
    """Submit a job posting from the public form.

    The body is validated by the service so the honeypot check runs before
    any field validation.
    """
    data = _form_body(payload)

    with performance_logger.log_operation_time("submit_job_posting"):
        posting = IntakeService(db).submit_job_posting(
            data,
            access_code=data.get("access_code"),
            honeypot=data.get("website"),
            ip_address=client_ip(request),
            user_agent=user_agent(request)
        )
        return SubmissionResponse(id=posting.id, message="Job posting received")


@router.post("/code-requests", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def submit_code_request(
    payload: Any = Body(...),
    db: Session = Depends(get_db)
):
    """Ask for an access code."""
    data = _form_body(payload)

    with performance_logger.log_operation_time("submit_code_request"):
        code_request = IntakeService(db).submit_code_request(data)
        return SubmissionResponse(
            id=code_request.id,
            message="Your request has been received and will be reviewed shortly"
        )


@router.get("/code-requests/{request_id}", response_model=CodeRequestStatusResponse)
def get_code_request_status(
    request_id: UUID,
    db: Session = Depends(get_db)
):
    """Check the review status of a code request."""
    return IntakeService(db).get_code_request_status(request_id)
