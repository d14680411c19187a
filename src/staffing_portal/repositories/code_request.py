"""Code request repository."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from staffing_portal.models.code_request import CodeRequest, CodeRequestStatus
from .base import BaseRepository


class CodeRequestRepository(BaseRepository[CodeRequest]):
    """Repository for the code request queue."""

    def __init__(self):
        super().__init__(CodeRequest)

    def list_requests(self, db: Session, status: Optional[str] = None) -> List[CodeRequest]:
        """List code requests newest first, optionally by status."""
        filters = {"status": status} if status else None
        return self.get_multi(db, filters=filters)

    def claim_pending(
        self,
        db: Session,
        request_id: UUID,
        new_status: CodeRequestStatus,
        reviewed_by: Optional[UUID] = None,
        rejection_reason: Optional[str] = None
    ) -> bool:
        """Move a request out of ``pending`` with a single conditional UPDATE.

        The WHERE clause on ``status`` makes the transition a compare-and-set:
        of two concurrent reviewers exactly one sees a matched row.

        Returns:
            True if this call performed the transition, False otherwise
        """
        values = {
            "status": new_status.value,
            "reviewed_by": reviewed_by,
            "reviewed_at": datetime.utcnow(),
        }
        if rejection_reason is not None:
            values["rejection_reason"] = rejection_reason

        result = db.execute(
            update(CodeRequest)
            .where(
                CodeRequest.id == request_id,
                CodeRequest.status == CodeRequestStatus.PENDING.value
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
