# --- File: tripdesk/schemas/common/base.py ---
"""
Base schema classes with common configuration.

Public JSON is camelCase; snake_case field names are accepted on input as
well so internal callers can build schemas with keyword arguments.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas inherit from this to ensure consistent
    aliasing, whitespace stripping and ORM loading.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=False,
        str_strip_whitespace=True,
    )


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""
    pass


class BaseUpdateSchema(BaseSchema):
    """
    Base schema for update operations.

    Note:
        This base class does not itself make fields optional. Subclasses
        intended for partial updates should declare their fields as
        Optional[...] / with defaults as appropriate.
    """
    pass
