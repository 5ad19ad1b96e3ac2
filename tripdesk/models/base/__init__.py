"""
Base model package: declarative base, mixins and custom column types.
"""

from tripdesk.models.base.base_model import Base, BaseModel
from tripdesk.models.base.mixins import TimestampMixin, utcnow
from tripdesk.models.base.types import JSONType

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "JSONType",
    "utcnow",
]
