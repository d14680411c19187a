"""Client portal endpoints over the caller's own job postings."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
import structlog

from staffing_portal.auth.dependencies import get_client_principal
from staffing_portal.auth.models import Principal
from staffing_portal.core.database import get_db
from staffing_portal.core.logging import performance_logger
from staffing_portal.schemas.job_posting import (
    ClientJobPostingCreate, JobPostingResponse, JobPostingUpdate
)
from staffing_portal.services.client_portal_service import ClientPortalService
from .utils import client_ip, user_agent

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/client", tags=["client"])


def get_portal_service(
    request: Request,
    principal: Principal = Depends(get_client_principal),
    db: Session = Depends(get_db)
) -> ClientPortalService:
    return ClientPortalService(db, principal, ip_address=client_ip(request), user_agent=user_agent(request))


@router.get("/job-postings", response_model=List[JobPostingResponse])
def list_own_job_postings(service: ClientPortalService = Depends(get_portal_service)):
    """List the caller's job postings, newest first."""
    with performance_logger.log_operation_time("client_list_job_postings"):
        return service.list_own_postings()


@router.post("/job-postings", response_model=JobPostingResponse, status_code=status.HTTP_201_CREATED)
def create_own_job_posting(
    payload: ClientJobPostingCreate,
    service: ClientPortalService = Depends(get_portal_service)
):
    with performance_logger.log_operation_time("client_create_job_posting"):
        return service.create_posting(payload.model_dump(exclude_unset=True))


@router.patch("/job-postings/{job_id}", response_model=JobPostingResponse)
def update_own_job_posting(
    job_id: UUID,
    payload: JobPostingUpdate,
    service: ClientPortalService = Depends(get_portal_service)
):
    """Edit one of the caller's postings. Closed postings are read-only."""
    with performance_logger.log_operation_time("client_update_job_posting", job_posting_id=str(job_id)):
        return service.update_posting(job_id, payload.model_dump(exclude_unset=True))


@router.delete("/job-postings/{job_id}")
def delete_own_job_posting(
    job_id: UUID,
    service: ClientPortalService = Depends(get_portal_service)
):
    """Delete one of the caller's postings. Closed postings are kept."""
    with performance_logger.log_operation_time("client_delete_job_posting", job_posting_id=str(job_id)):
        service.delete_posting(job_id)
        return {"success": True}

