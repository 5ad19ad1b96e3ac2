# --- File: tripdesk/models/base/types.py ---
"""
Custom SQLAlchemy types for specialized data handling.
"""

from typing import Any, Optional

from sqlalchemy import JSON, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB


class JSONType(TypeDecorator):
    """
    JSON document column.

    Stored as JSONB on PostgreSQL and as plain JSON elsewhere. Only dicts
    and lists are accepted so embedded documents keep a predictable shape.
    """

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())

    def process_bind_param(self, value: Any, dialect) -> Optional[Any]:
        """Reject scalars before they reach the driver."""
        if value is None:
            return value

        if not isinstance(value, (dict, list)):
            raise ValueError(f"JSONType requires dict or list, got {type(value)}")

        return value

    def process_result_value(self, value: Any, dialect) -> Any:
        return value
