"""Client repository for database operations."""

from typing import Optional, List

from sqlalchemy.orm import Session
import structlog

from staffing_portal.models.client import Client
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class ClientRepository(BaseRepository[Client]):
    """Repository for Client model operations."""

    def __init__(self):
        super().__init__(Client)

    def get_active_by_access_code(self, db: Session, access_code: str) -> Optional[Client]:
        """Get an active client by access code.

        Args:
            db: Database session
            access_code: Access code exactly as issued

        Returns:
            Client if found and active, None otherwise
        """
        return (
            db.query(Client)
            .filter(Client.access_code == access_code, Client.is_active == True)
            .first()
        )

    def access_code_exists(self, db: Session, access_code: str) -> bool:
        """Check whether any client, active or not, already holds a code."""
        return db.query(Client.id).filter(Client.access_code == access_code).first() is not None

    def list_clients(self, db: Session, include_inactive: bool = False) -> List[Client]:
        """List clients ordered by company name.

        Args:
            db: Database session
            include_inactive: Whether to include deactivated clients

        Returns:
            List of clients
        """
        query = db.query(Client)
        if not include_inactive:
            query = query.filter(Client.is_active == True)
        return query.order_by(Client.company_name).all()
