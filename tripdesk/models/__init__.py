"""
ORM models. Importing this package registers every table on ``Base.metadata``.
"""

from tripdesk.models.base import Base, BaseModel
from tripdesk.models.catalog import Driver, Place, TourGuide, Vehicle
from tripdesk.models.custom_inquiry import CustomInquiry

__all__ = [
    "Base",
    "BaseModel",
    "CustomInquiry",
    "Vehicle",
    "TourGuide",
    "Driver",
    "Place",
]
