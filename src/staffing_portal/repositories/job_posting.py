"""Job posting repository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from staffing_portal.models.job_posting import JobPosting
from .base import BaseRepository


class JobPostingRepository(BaseRepository[JobPosting]):
    """Repository for job posting storage."""

    def __init__(self):
        super().__init__(JobPosting)

    def list_postings(self, db: Session, status: Optional[str] = None) -> List[JobPosting]:
        """List postings newest first, optionally by status."""
        filters = {"status": status} if status else None
        return self.get_multi(db, filters=filters)

    def list_for_owner(self, db: Session, owner_client_id: UUID) -> List[JobPosting]:
        """List postings owned by a client, newest first."""
        return self.get_multi(db, filters={"owner_client_id": owner_client_id})

    def get_owned(self, db: Session, job_id: UUID, owner_client_id: UUID) -> Optional[JobPosting]:
        """Get a posting only if it belongs to the given client."""
        return (
            db.query(JobPosting)
            .filter(JobPosting.id == job_id, JobPosting.owner_client_id == owner_client_id)
            .first()
        )
