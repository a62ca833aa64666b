"""
Base repository with standardized persistence operations and error handling.

Repositories never commit: the unit of work that owns the session decides
when changes become durable.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_billing.core.exceptions import (
    DuplicateEntryError,
    RepositoryError,
    ResourceNotFoundError,
)
from hostel_billing.core.logging import get_logger
from hostel_billing.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common lookup and write operations.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Read Operations ====================

    def find_by_id(self, entity_id: Any) -> Optional[ModelType]:
        """Return the entity or None."""
        try:
            return self.db.get(self.model, entity_id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Lookup failed: {str(e)}", table=self.model.__tablename__) from e

    def get_by_id(self, entity_id: Any) -> ModelType:
        """
        Return the entity or raise.

        Raises:
            ResourceNotFoundError: If no row has this id
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise ResourceNotFoundError(self.model.__name__, str(entity_id))
        return entity

    def get_for_update(self, entity_id: Any) -> Optional[ModelType]:
        """
        Load the entity holding a row lock until the transaction ends.

        Dialects without SELECT ... FOR UPDATE (SQLite) ignore the lock.
        """
        stmt = (
            select(self.model)
            .where(self.model.id == entity_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Locked lookup failed: {str(e)}", table=self.model.__tablename__) from e

    def list_by(self, *criteria, order_by=None) -> List[ModelType]:
        stmt = select(self.model).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(*order_by) if isinstance(order_by, (list, tuple)) else stmt.order_by(order_by)
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Query failed: {str(e)}", table=self.model.__tablename__) from e

    # ==================== Write Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add and flush a new entity so generated values are available.

        Raises:
            DuplicateEntryError: If a unique or check constraint rejects the row
            RepositoryError: For any other database failure
        """
        try:
            self.db.add(entity)
            self.db.flush()
        except IntegrityError as e:
            raise DuplicateEntryError(
                f"{self.model.__name__} violates a table constraint",
                table=self.model.__tablename__,
            ) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Create failed: {str(e)}", table=self.model.__tablename__) from e

        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    def flush(self) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Flush failed: {str(e)}", table=self.model.__tablename__) from e
