# --- File: tripdesk/schemas/common/enums.py ---
"""
Enumerations shared by models and schemas.
"""

from enum import Enum

__all__ = [
    "InquiryStatus",
    "TimeOfDay",
    "UserRole",
    "ResourceKind",
]


class InquiryStatus(str, Enum):
    """Custom trip inquiry status."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    QUOTED = "quoted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class TimeOfDay(str, Enum):
    """Slot an itinerary stop occupies within its day."""

    DAY = "day"
    NIGHT = "night"


class UserRole(str, Enum):
    """Caller roles carried in access tokens."""

    USER = "user"
    ADMIN = "admin"


class ResourceKind(str, Enum):
    """Catalog collaborators an inquiry can reference."""

    VEHICLE = "vehicle"
    TOUR_GUIDE = "tour_guide"
    DRIVER = "driver"
    PLACE = "place"
