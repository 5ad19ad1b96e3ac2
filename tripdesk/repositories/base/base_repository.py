"""
Base repository with standardized CRUD operations and error handling.

Provides foundation for all domain repositories. SQLAlchemy failures are
wrapped in ``RepositoryError`` so callers only ever see application
exceptions.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tripdesk.core.exceptions import RepositoryError
from tripdesk.core.logging import get_logger
from tripdesk.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides CRUD operations and error handling for all domain repositories.
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

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Persist a new entity.

        Args:
            entity: Entity to create

        Returns:
            Created entity, refreshed from the database
        """
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)

            logger.info(f"Created {self.model.__name__} with id: {entity.id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Create failed: {str(e)}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: Any) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, str(id))
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def count(self, *criteria) -> int:
        """Count entities matching the given filter criteria."""
        try:
            stmt = select(func.count()).select_from(self.model)
            if criteria:
                stmt = stmt.where(*criteria)
            return self.db.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count failed: {str(e)}") from e

    def find_all(
        self,
        *criteria,
        order_by: Optional[List[Any]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """Fetch entities matching the criteria with offset/limit paging."""
        try:
            stmt = select(self.model)
            if criteria:
                stmt = stmt.where(*criteria)
            if order_by:
                stmt = stmt.order_by(*order_by)
            if offset:
                stmt = stmt.offset(offset)
            if limit is not None:
                stmt = stmt.limit(limit)
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Query failed: {str(e)}") from e

    # ==================== Update Operations ====================

    def update(self, entity: ModelType) -> ModelType:
        """
        Write back an entity whose attributes were changed in place.

        No version check is made: the last committed write wins.
        """
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)

            logger.info(f"Updated {self.model.__name__} with id: {entity.id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Update failed: {str(e)}") from e

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        """Hard-delete an entity."""
        entity_id = entity.id
        try:
            self.db.delete(entity)
            self.db.commit()

            logger.info(f"Deleted {self.model.__name__} with id: {entity_id}")

        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Delete failed: {str(e)}") from e
