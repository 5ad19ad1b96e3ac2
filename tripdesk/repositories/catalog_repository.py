"""
Read-only lookups against the catalog collaborators (vehicles, tour guides,
drivers, places).
"""

from typing import Dict, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tripdesk.core.exceptions import RepositoryError
from tripdesk.models.base import BaseModel
from tripdesk.models.catalog import Driver, Place, TourGuide, Vehicle
from tripdesk.schemas.common.enums import ResourceKind

CATALOG_MODELS: Dict[ResourceKind, Type[BaseModel]] = {
    ResourceKind.VEHICLE: Vehicle,
    ResourceKind.TOUR_GUIDE: TourGuide,
    ResourceKind.DRIVER: Driver,
    ResourceKind.PLACE: Place,
}


class CatalogRepository:
    """Fetch catalog records by kind and id."""

    def __init__(self, db: Session):
        self.db = db

    def find(self, kind: ResourceKind, resource_id: str) -> Optional[BaseModel]:
        model = CATALOG_MODELS[kind]
        try:
            return self.db.get(model, resource_id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"{model.__name__} lookup failed: {str(e)}") from e
