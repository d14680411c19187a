"""Client activity repository."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from staffing_portal.models.client_activity import ClientActivity, ActivityType
from .base import BaseRepository


class ClientActivityRepository(BaseRepository[ClientActivity]):
    """Append-only access to the client activity log."""

    def __init__(self):
        super().__init__(ClientActivity)

    def record(
        self,
        db: Session,
        client_id: UUID,
        activity_type: ActivityType,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> ClientActivity:
        """Append an activity entry for a client."""
        return self.add(
            db,
            client_id=client_id,
            activity_type=activity_type.value,
            ip_address=ip_address,
            user_agent=user_agent,
            details=details or {}
        )

    def get_for_client(self, db: Session, client_id: UUID, limit: int = 200) -> List[ClientActivity]:
        """Get a client's history, newest first."""
        return (
            db.query(ClientActivity)
            .filter(ClientActivity.client_id == client_id)
            .order_by(ClientActivity.created_at.desc())
            .limit(limit)
            .all()
        )
