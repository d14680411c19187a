"""Admin dashboard endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import structlog

from staffing_portal.auth.dependencies import get_admin_principal
from staffing_portal.auth.models import Principal
from staffing_portal.core.database import get_db
from staffing_portal.core.logging import performance_logger
from staffing_portal.schemas.client import (
    BulkGenerateEntryResult,
    BulkGenerateRequest,
    BulkGenerateResponse,
    ClientActivityResponse,
    ClientCreate,
    ClientCreatedResponse,
    ClientDetailResponse,
    ClientResponse,
    ClientUpdate,
)
from staffing_portal.schemas.code_request import CodeRequestRejection, CodeRequestResponse
from staffing_portal.schemas.job_posting import JobPostingResponse, JobPostingStatusUpdate
from staffing_portal.services.admin_service import AdminService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def get_admin_service(
    principal: Principal = Depends(get_admin_principal),
    db: Session = Depends(get_db)
) -> AdminService:
    return AdminService(db, principal)


# Job postings

@router.get("/job-postings", response_model=List[JobPostingResponse])
def list_job_postings(
    status: Optional[str] = Query(None, description="Filter by posting status"),
    service: AdminService = Depends(get_admin_service)
):
    """List job postings, newest first."""
    with performance_logger.log_operation_time("admin_list_job_postings", status=status):
        return service.list_job_postings(status)


@router.get("/job-postings/{job_id}", response_model=JobPostingResponse)
def get_job_posting(
    job_id: UUID,
    service: AdminService = Depends(get_admin_service)
):
    return service.get_job_posting(job_id)


@router.patch("/job-postings/{job_id}/status", response_model=JobPostingResponse)
def update_job_posting_status(
    job_id: UUID,
    payload: JobPostingStatusUpdate,
    service: AdminService = Depends(get_admin_service)
):
    """Move a job posting to another status. Any status may follow any other."""
    with performance_logger.log_operation_time("admin_update_job_posting_status", job_posting_id=str(job_id)):
        return service.set_job_posting_status(job_id, payload.status)


# Clients

@router.get("/clients", response_model=List[ClientResponse])
def list_clients(
    include_inactive: bool = Query(False, description="Include deactivated clients"),
    service: AdminService = Depends(get_admin_service)
):
    """List clients by company name."""
    with performance_logger.log_operation_time("admin_list_clients"):
        return service.list_clients(include_inactive=include_inactive)


@router.post("/clients", response_model=ClientCreatedResponse, status_code=201)
def create_client(
    payload: ClientCreate,
    service: AdminService = Depends(get_admin_service)
):
    """Create a client and issue its access code."""
    with performance_logger.log_operation_time("admin_create_client"):
        client = service.create_client(payload.model_dump())
        return ClientCreatedResponse(
            client=ClientResponse.model_validate(client),
            access_code=client.access_code
        )


def _entry_result(result: dict) -> BulkGenerateEntryResult:
    client = result.get("client")
    return BulkGenerateEntryResult(
        index=result["index"],
        success=result["success"],
        company_name=result.get("company_name"),
        client=ClientResponse.model_validate(client) if client is not None else None,
        access_code=result.get("access_code"),
        error=result.get("error"),
        message=result.get("message")
    )


@router.post("/clients/bulk-generate", response_model=BulkGenerateResponse)
def bulk_generate_clients(
    payload: BulkGenerateRequest,
    service: AdminService = Depends(get_admin_service)
):
    """Create many clients at once. Each entry is reported separately."""
    results = service.bulk_generate_clients(payload.clients)
    created = sum(1 for r in results if r["success"])

    return BulkGenerateResponse(
        created=created,
        failed=len(results) - created,
        results=[_entry_result(r) for r in results]
    )


@router.get("/clients/{client_id}", response_model=ClientDetailResponse)
def get_client(
    client_id: UUID,
    service: AdminService = Depends(get_admin_service)
):
    """Get a client and its activity history."""
    detail = service.get_client_detail(client_id)
    return ClientDetailResponse(
        client=ClientResponse.model_validate(detail["client"]),
        activities=[ClientActivityResponse.model_validate(a) for a in detail["activities"]]
    )


@router.patch("/clients/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: UUID,
    payload: ClientUpdate,
    service: AdminService = Depends(get_admin_service)
):
    with performance_logger.log_operation_time("admin_update_client", client_id=str(client_id)):
        return service.update_client(client_id, payload.model_dump(exclude_unset=True))


@router.delete("/clients/{client_id}")
def deactivate_client(
    client_id: UUID,
    service: AdminService = Depends(get_admin_service)
):
    """Deactivate a client. The record and its history are kept."""
    with performance_logger.log_operation_time("admin_deactivate_client", client_id=str(client_id)):
        service.deactivate_client(client_id)
        return {"success": True}


# Code requests

@router.get("/code-requests", response_model=List[CodeRequestResponse])
def list_code_requests(
    status: Optional[str] = Query(None, description="Filter by request status"),
    service: AdminService = Depends(get_admin_service)
):
    """List code requests, newest first."""
    return service.list_code_requests(status)


@router.post("/code-requests/{request_id}/approve")
def approve_code_request(
    request_id: UUID,
    service: AdminService = Depends(get_admin_service)
):
    """Approve a pending request and return the new client's access code."""
    with performance_logger.log_operation_time("admin_approve_code_request", code_request_id=str(request_id)):
        client = service.approve_code_request(request_id)
        return {
            "success": True,
            "access_code": client.access_code,
            "client": ClientResponse.model_validate(client),
        }


@router.post("/code-requests/{request_id}/reject")
def reject_code_request(
    request_id: UUID,
    payload: CodeRequestRejection,
    service: AdminService = Depends(get_admin_service)
):
    """Reject a pending request with a reason."""
    with performance_logger.log_operation_time("admin_reject_code_request", code_request_id=str(request_id)):
        code_request = service.reject_code_request(request_id, payload.reason)
        return {
            "success": True,
            "request": CodeRequestResponse.model_validate(code_request),
        }
