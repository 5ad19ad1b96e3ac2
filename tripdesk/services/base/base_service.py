"""
Base service class providing common functionality for all services.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from sqlalchemy.orm import Session

from tripdesk.core.logging import get_logger
from tripdesk.repositories.base.base_repository import BaseRepository

TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Operation logging
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _log_operation(
        self,
        operation: str,
        entity_id: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a service operation with consistent context.

        Args:
            operation: Operation name
            entity_id: Entity identifier, if any
            details: Additional details to log
        """
        context: Dict[str, Any] = {"operation": operation}
        if entity_id is not None:
            context["entity_id"] = str(entity_id)
        if details:
            context.update(details)

        self._logger.info(f"Service operation: {operation}", extra=context)
