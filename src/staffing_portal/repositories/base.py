"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar, Type, List, Optional, Dict, Any
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from staffing_portal.core.base import Base

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository class with common CRUD operations.

    Repositories only flush; the service that owns the unit of work decides
    when to commit or roll back.
    """

    def __init__(self, model: Type[ModelType]):
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def add(self, db: Session, **kwargs) -> ModelType:
        """Stage a new record and flush it so defaults and ids are populated.

        Args:
            db: Database session
            **kwargs: Model field values

        Returns:
            Created model instance

        Raises:
            IntegrityError: If the flush violates a constraint
        """
        instance = self.model(**kwargs)
        db.add(instance)
        db.flush()

        logger.debug(
            "Record staged",
            model=self.model.__name__,
            id=str(instance.id) if hasattr(instance, 'id') else None
        )
        return instance

    def get_by_id(self, db: Session, id: UUID) -> Optional[ModelType]:
        """Get record by ID.

        Args:
            db: Database session
            id: Record UUID

        Returns:
            Model instance if found, None otherwise
        """
        return db.query(self.model).filter(self.model.id == id).first()

    def get_multi(
        self,
        db: Session,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[ModelType]:
        """Get multiple records with pagination and filtering.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records to return
            filters: Optional filters to apply

        Returns:
            List of model instances, newest first when the model has created_at
        """
        query = db.query(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field) == value)

        if hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc())

        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def update(self, db: Session, instance: ModelType, **kwargs) -> ModelType:
        """Apply field values to a loaded instance and flush.

        Args:
            db: Database session
            instance: Loaded model instance
            **kwargs: Fields to update; None clears a nullable column

        Returns:
            Updated model instance
        """
        for field, value in kwargs.items():
            if hasattr(instance, field):
                setattr(instance, field, value)

        db.flush()

        logger.debug(
            "Record updated",
            model=self.model.__name__,
            id=str(instance.id),
            fields=list(kwargs.keys())
        )
        return instance

    def delete(self, db: Session, instance: ModelType) -> None:
        """Delete a loaded instance and flush."""
        db.delete(instance)
        db.flush()

        logger.debug(
            "Record deleted",
            model=self.model.__name__,
            id=str(instance.id)
        )
